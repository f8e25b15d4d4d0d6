"""Tests for the slot grid generator."""
import math

import pytest

from client.app.services.slots import (
    BookingWindow,
    ConfigurationError,
    Slot,
    TimeOfDay,
    generate_slots,
    generate_window_slots,
)
from client.app.services.slots.calculator import available_labels, generate_slot_labels


def labels(slots):
    return [s.label for s in slots]


class TestGenerateSlots:
    """Grid generation over a half-open [open, close) window."""

    def test_two_hour_window_with_booked_slot(self):
        """09:00-11:00 every 30 minutes, 10:00 taken."""
        slots = generate_slots("09:00", "11:00", 30, booked={"10:00"})

        assert slots == [
            Slot("09:00"),
            Slot("09:30"),
            Slot("10:00", is_booked=True),
            Slot("10:30"),
        ]

    def test_partial_trailing_slot_is_emitted(self):
        """Only the start of a slot is compared with close."""
        slots = generate_slots("08:45", "10:00", 40)

        assert labels(slots) == ["08:45", "09:25"]

    def test_close_is_never_emitted(self):
        assert labels(generate_slots("09:00", "10:00", 30)) == ["09:00", "09:30"]

    def test_durations_over_an_hour_carry_into_hours(self):
        slots = generate_slots("09:00", "13:00", 90)

        assert labels(slots) == ["09:00", "10:30", "12:00"]

    def test_minute_rollover_into_next_hour(self):
        assert labels(generate_slots("09:50", "10:20", 15)) == ["09:50", "10:05"]

    def test_empty_window_returns_empty_list(self):
        assert generate_slots("09:00", "09:00", 30) == []

    def test_inverted_window_returns_empty_list(self):
        """Overnight windows are not supported: open after close means no slots."""
        assert generate_slots("18:00", "09:00", 30) == []

    @pytest.mark.parametrize("open_time,close_time,duration", [
        ("09:00", "11:00", 30),
        ("08:45", "10:00", 40),
        ("07:00", "19:30", 45),
        ("00:00", "23:59", 60),
        ("09:10", "09:11", 25),
    ])
    def test_length_is_ceil_of_window_over_duration(self, open_time, close_time, duration):
        window = BookingWindow.parse(open_time, close_time)
        expected = math.ceil((window.close.minutes - window.open.minutes) / duration)

        assert len(generate_slots(open_time, close_time, duration)) == expected

    def test_labels_strictly_ascending(self):
        slots = generate_slots("06:00", "22:00", 25)
        minutes = [TimeOfDay.parse(s.label).minutes for s in slots]

        assert minutes == sorted(set(minutes))

    def test_labels_are_zero_padded(self):
        assert labels(generate_slots("7:05", "8:00", 30)) == ["07:05", "07:35"]

    def test_booked_matching_is_exact_label(self):
        """A booking at 09:15 does not block the 09:00 slot it overlaps."""
        slots = generate_slots("09:00", "10:00", 30, booked={"09:15", "9:30"})

        assert not any(s.is_booked for s in slots)

    def test_booked_duplicates_collapse(self):
        slots = generate_slots("09:00", "10:00", 30, booked=["09:30", "09:30"])

        assert [s.is_booked for s in slots] == [False, True]

    def test_selected_flag(self):
        slots = generate_slots("09:00", "10:00", 30, selected="09:30")

        assert [s.is_selected for s in slots] == [False, True]

    def test_selected_not_on_grid_marks_nothing(self):
        slots = generate_slots("09:00", "10:00", 30, selected="09:15")

        assert not any(s.is_selected for s in slots)

    def test_generation_is_idempotent(self):
        first = generate_slots("09:00", "17:00", 20, booked={"10:00"}, selected="11:00")
        second = generate_slots("09:00", "17:00", 20, booked={"10:00"}, selected="11:00")

        assert first == second

    def test_window_variant_matches_text_variant(self):
        window = BookingWindow.parse("09:00", "11:00")

        assert generate_window_slots(window, 30, {"10:00"}) == generate_slots("09:00", "11:00", 30, {"10:00"})


class TestDurationValidation:
    """Bad durations fail before any slot is produced."""

    @pytest.mark.parametrize("duration", [0, -15])
    def test_non_positive_duration(self, duration):
        with pytest.raises(ConfigurationError, match="non-positive slot duration"):
            generate_slots("09:00", "11:00", duration)

    @pytest.mark.parametrize("duration", [30.0, "30", None, True])
    def test_non_integer_duration(self, duration):
        with pytest.raises(ConfigurationError):
            generate_slots("09:00", "11:00", duration)

    def test_duration_checked_even_for_empty_window(self):
        with pytest.raises(ConfigurationError):
            generate_slots("09:00", "09:00", 0)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            generate_slots("09:00", "11:00", 0)

    def test_bad_time_text(self):
        with pytest.raises(ConfigurationError):
            generate_slots("9am", "11:00", 30)


class TestHelpers:
    def test_generate_slot_labels(self):
        assert generate_slot_labels("09:00", "10:00", 20) == ["09:00", "09:20", "09:40"]

    def test_available_labels_skip_booked(self):
        slots = generate_slots("09:00", "11:00", 30, booked={"09:30", "10:30"})

        assert available_labels(slots) == ["09:00", "10:00"]

    def test_slot_is_available(self):
        assert Slot("09:00").is_available
        assert not Slot("09:00", is_booked=True).is_available
