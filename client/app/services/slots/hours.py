# client/app/services/slots/hours.py
"""
Working window of a business for a given date.

Priority:
1. Holiday on the date → closed
2. Weekday row (dayOfWeek, 0 = Sunday) → its hours, or closed if isClosed
3. Business openTime/closeTime
4. BookingConfig defaults
"""

from datetime import date
from typing import Iterable

from ...schemas import BusinessHoursRead, BusinessRead, HolidayRead
from .calculator import BookingWindow, validate_duration
from .config import BookingConfig, get_booking_config


def sunday_based_weekday(target_date: date) -> int:
    """date.weekday() is Monday = 0; business hours use Sunday = 0."""
    return (target_date.weekday() + 1) % 7


def resolve_booking_window(
    business: BusinessRead,
    hours: Iterable[BusinessHoursRead],
    holidays: Iterable[HolidayRead],
    target_date: date,
    config: BookingConfig | None = None,
) -> BookingWindow | None:
    """
    Resolve the booking window for target_date.

    Returns:
        BookingWindow, or None when the business is closed that day.

    Raises:
        ConfigurationError: hours stored in a malformed format.
    """
    config = config or get_booking_config()

    # Step 1: Holidays close the whole day
    if any(h.date == target_date for h in holidays):
        return None

    # Step 2: Per-weekday hours
    weekday = sunday_based_weekday(target_date)
    row = next((h for h in hours if h.day_of_week == weekday), None)
    if row is not None:
        if row.is_closed:
            return None
        return BookingWindow.parse(row.open_time, row.close_time)

    # Step 3/4: Business-wide hours with defaults
    return BookingWindow.parse(
        business.open_time or config.default_open_time,
        business.close_time or config.default_close_time,
    )


def resolve_slot_duration(business: BusinessRead, config: BookingConfig | None = None) -> int:
    """Slot duration of the business; an unset (null/0) value uses the default."""
    config = config or get_booking_config()
    return validate_duration(business.slot_duration or config.default_slot_duration)


def closed_dates(holidays: Iterable[HolidayRead]) -> set[str]:
    """ISO dates the calendar must show as blocked."""
    return {h.date.isoformat() for h in holidays}
