# client/app/services/calendar.py
"""
Month view for picking a booking date.

Weeks start on Sunday. Past dates and blocked dates (holidays) are shown but
cannot be selected; selecting them is ignored the same way a booked slot is.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

WEEK_LENGTH = 7


@dataclass(frozen=True)
class CalendarDay:
    value: date
    is_past: bool = False
    is_blocked: bool = False
    is_today: bool = False
    is_selected: bool = False

    @property
    def is_disabled(self) -> bool:
        return self.is_past or self.is_blocked

    @property
    def iso(self) -> str:
        return self.value.isoformat()


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    leading_blanks: int
    days: list[CalendarDay] = field(default_factory=list)

    def weeks(self) -> list[list[CalendarDay | None]]:
        """Rows of 7 cells; None pads before the 1st and after the last day."""
        cells: list[CalendarDay | None] = [None] * self.leading_blanks + list(self.days)
        if len(cells) % WEEK_LENGTH:
            cells += [None] * (WEEK_LENGTH - len(cells) % WEEK_LENGTH)
        return [cells[i:i + WEEK_LENGTH] for i in range(0, len(cells), WEEK_LENGTH)]

    def day(self, number: int) -> CalendarDay | None:
        if 1 <= number <= len(self.days):
            return self.days[number - 1]
        return None


def build_month(
    year: int,
    month: int,
    today: date | None = None,
    selected: date | None = None,
    blocked_dates: Iterable[str] = (),
) -> CalendarMonth:
    """
    Build the month grid.

    Args:
        blocked_dates: ISO "YYYY-MM-DD" strings that cannot be booked
    """
    today = today or date.today()
    blocked = set(blocked_dates)

    first_weekday, days_in_month = calendar.monthrange(year, month)
    # monthrange() is Monday-based
    leading_blanks = (first_weekday + 1) % WEEK_LENGTH

    days = []
    for number in range(1, days_in_month + 1):
        value = date(year, month, number)
        days.append(CalendarDay(
            value=value,
            is_past=value < today,
            is_blocked=value.isoformat() in blocked,
            is_today=value == today,
            is_selected=selected is not None and value == selected,
        ))

    return CalendarMonth(year=year, month=month, leading_blanks=leading_blanks, days=days)


def prev_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def can_select_date(day: CalendarDay | None) -> bool:
    return day is not None and not day.is_disabled
