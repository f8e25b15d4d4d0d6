# client/app/schemas/businesses.py

import datetime as dt
from typing import Optional

from ._base import ApiModel


class BusinessRead(ApiModel):
    id: str
    category_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None
    rating: Optional[float] = None
    review_count: int = 0
    is_approved: bool = True

    # Empty hours fall back to BookingConfig defaults
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    slot_duration: Optional[int] = None


class ServiceRead(ApiModel):
    id: str
    business_id: str
    name: str
    description: Optional[str] = None
    price: float
    duration: int  # minutes
    is_active: bool = True


class BusinessHoursRead(ApiModel):
    """Working hours for one weekday (0 = Sunday)."""
    day_of_week: int
    open_time: str
    close_time: str
    is_closed: bool = False


class HolidayRead(ApiModel):
    date: dt.date
    label: Optional[str] = None
