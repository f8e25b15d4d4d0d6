# client/app/services/slots/config.py
"""
Booking configuration and "HH:MM" helpers for the slot grid.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from .errors import ConfigurationError


MINUTES_PER_DAY = 24 * 60

# "9:00", "09:00", "09:00:00" (SQL time columns serialise with seconds)
TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time without date. Ordered by (hour, minute)."""
    hour: int
    minute: int

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise ConfigurationError(f"hour out of range 0-23: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ConfigurationError(f"minute out of range 0-59: {self.minute}")

    @classmethod
    def parse(cls, value: "str | TimeOfDay") -> "TimeOfDay":
        """Parse "HH:MM" (seconds are accepted and dropped)."""
        if isinstance(value, TimeOfDay):
            return value
        if not isinstance(value, str):
            raise ConfigurationError(f"time must be an 'HH:MM' string, got {value!r}")

        m = TIME_RE.match(value.strip())
        if not m:
            raise ConfigurationError(f"time must be 'HH:MM', got {value!r}")

        hour, minute, seconds = m.groups()
        if seconds is not None and int(seconds) > 59:
            raise ConfigurationError(f"seconds out of range 0-59: {value!r}")
        return cls(int(hour), int(minute))

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    @property
    def label(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.label


def time_str_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    return TimeOfDay.parse(value).minutes


def minutes_to_time_str(total_minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    hour, minute = divmod(total_minutes, 60)
    return f"{hour:02d}:{minute:02d}"


@dataclass(frozen=True)
class BookingConfig:
    """
    Defaults for businesses that leave their hours unset.

    Attributes:
        default_open_time: Opening time when the business has none ("HH:MM")
        default_close_time: Closing time when the business has none ("HH:MM")
        default_slot_duration: Grid step in minutes when the business has none
        grid_columns: Slot buttons per keyboard row
    """
    default_open_time: str = "09:00"
    default_close_time: str = "18:00"
    default_slot_duration: int = 30
    grid_columns: int = 3

    def __post_init__(self):
        """Validate configuration."""
        TimeOfDay.parse(self.default_open_time)
        TimeOfDay.parse(self.default_close_time)
        if isinstance(self.default_slot_duration, bool) or self.default_slot_duration <= 0:
            raise ConfigurationError(
                f"default_slot_duration must be positive, got {self.default_slot_duration}"
            )
        if self.grid_columns <= 0:
            raise ConfigurationError(f"grid_columns must be positive, got {self.grid_columns}")


@lru_cache
def get_booking_config() -> BookingConfig:
    """Get booking configuration (singleton)."""
    return BookingConfig()
