# client/app/schemas/bookings.py

import datetime as dt
from typing import Optional

from ._base import ApiModel


class BookingCreate(ApiModel):
    business_id: str
    service_id: Optional[str] = None
    employee_id: Optional[str] = None
    date: dt.date
    time: str  # "HH:MM"


class BookingRead(ApiModel):
    id: str
    business_id: str
    service_id: Optional[str] = None
    employee_id: Optional[str] = None
    date: dt.date
    time: str
    end_time: Optional[str] = None
    status: str = "pending"  # pending, confirmed, completed, cancelled
    total_price: Optional[float] = None
    notes: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status in ("pending", "confirmed")
