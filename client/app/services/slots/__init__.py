# client/app/services/slots/__init__.py
"""
Slot grid module.

Level 1: Booking window for a date (business hours, weekday rows, holidays)
Level 2: Slot grid with booked/selected state (calculated on every render)
"""

from .config import BookingConfig, TimeOfDay, get_booking_config
from .errors import ConfigurationError
from .calculator import BookingWindow, Slot, available_labels, generate_slots, generate_window_slots
from .selection import SlotSelection
from .hours import resolve_booking_window, resolve_slot_duration

__all__ = [
    "BookingConfig",
    "TimeOfDay",
    "get_booking_config",
    "ConfigurationError",
    "BookingWindow",
    "Slot",
    "available_labels",
    "generate_slots",
    "generate_window_slots",
    "SlotSelection",
    "resolve_booking_window",
    "resolve_slot_duration",
]
