from .bookings import BookingCreate, BookingRead
from .businesses import BusinessHoursRead, BusinessRead, HolidayRead, ServiceRead
from .categories import CategoryRead
from .users import UserRead

__all__ = [
    "BookingCreate",
    "BookingRead",
    "BusinessHoursRead",
    "BusinessRead",
    "CategoryRead",
    "HolidayRead",
    "ServiceRead",
    "UserRead",
]
