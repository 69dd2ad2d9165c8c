"""Flight Booking Domain Enums"""

from src.service.flight_booking.domain.enum.booking_status import (
    ACTIVE_BOOKING_STATUSES,
    BOOKING_TRANSITIONS,
    BookingStatus,
)
from src.service.flight_booking.domain.enum.flight_status import FlightStatus, RouteType
from src.service.flight_booking.domain.enum.seat_status import FareClass, SeatStatus
from src.service.flight_booking.domain.enum.user_role import UserRole

__all__ = [
    'ACTIVE_BOOKING_STATUSES',
    'BOOKING_TRANSITIONS',
    'BookingStatus',
    'FareClass',
    'FlightStatus',
    'RouteType',
    'SeatStatus',
    'UserRole',
]
