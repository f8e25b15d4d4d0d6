# client/app/services/slots/calculator.py
"""
Slot grid for one business day.

Produces per-slot data:
  (label "HH:MM", is_booked, is_selected)

Half-open window [open, close): a slot is emitted while its START is before
close. The end of the last slot may run past close.

Contains:
✓ working window of the day
✓ slot duration (grid step)
✓ booked labels (exact label match)
✓ current selection

Does NOT contain:
✗ Working-hours lookup per weekday / holidays (see hours.py)
✗ Overlap of bookings with other slots
"""

from dataclasses import dataclass
from typing import Iterable

from .config import TimeOfDay, minutes_to_time_str
from .errors import ConfigurationError


@dataclass(frozen=True)
class Slot:
    """One bookable start time of the grid."""
    label: str
    is_booked: bool = False
    is_selected: bool = False

    @property
    def is_available(self) -> bool:
        return not self.is_booked


@dataclass(frozen=True)
class BookingWindow:
    """Working window of a day. Empty when open >= close."""
    open: TimeOfDay
    close: TimeOfDay

    @classmethod
    def parse(cls, open_time: "str | TimeOfDay", close_time: "str | TimeOfDay") -> "BookingWindow":
        return cls(TimeOfDay.parse(open_time), TimeOfDay.parse(close_time))

    @property
    def is_empty(self) -> bool:
        return self.open.minutes >= self.close.minutes


def validate_duration(duration: int) -> int:
    """Slot duration must be a positive whole number of minutes."""
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ConfigurationError(f"invalid configuration: slot duration must be an integer, got {duration!r}")
    if duration <= 0:
        raise ConfigurationError("invalid configuration: non-positive slot duration")
    return duration


def generate_slot_labels(
    open_time: "str | TimeOfDay",
    close_time: "str | TimeOfDay",
    duration: int,
) -> list[str]:
    """
    Start labels of the grid in ascending order.

    Returns:
        ["HH:MM", ...]. Empty list = no working hours.
    """
    window = BookingWindow.parse(open_time, close_time)
    step = validate_duration(duration)

    if window.is_empty:
        return []

    labels: list[str] = []
    t = window.open.minutes
    end_min = window.close.minutes

    while t < end_min:
        labels.append(minutes_to_time_str(t))
        t += step

    return labels


def generate_slots(
    open_time: "str | TimeOfDay",
    close_time: "str | TimeOfDay",
    duration: int,
    booked: Iterable[str] = (),
    selected: "str | None" = None,
) -> list[Slot]:
    """
    Build the slot grid with booked/selected state.

    Args:
        open_time: First bookable start ("HH:MM")
        close_time: Window end, never emitted itself ("HH:MM")
        duration: Grid step in minutes, must be > 0
        booked: Already reserved labels; compared by exact text
        selected: Currently selected label, or None

    Raises:
        ConfigurationError: bad time text or non-positive duration.
            Raised before any slot is built.
    """
    labels = generate_slot_labels(open_time, close_time, duration)
    booked_set = frozenset(booked)

    return [
        Slot(
            label=label,
            is_booked=label in booked_set,
            is_selected=selected is not None and label == selected,
        )
        for label in labels
    ]


def generate_window_slots(
    window: BookingWindow,
    duration: int,
    booked: Iterable[str] = (),
    selected: "str | None" = None,
) -> list[Slot]:
    """Same as generate_slots() for an already parsed window."""
    return generate_slots(window.open, window.close, duration, booked, selected)


def available_labels(slots: Iterable[Slot]) -> list[str]:
    """Labels of slots that can still be booked."""
    return [s.label for s in slots if s.is_available]
