"""Flight Booking Domain Value Objects"""

from src.service.flight_booking.domain.value_object.airport import Airport
from src.service.flight_booking.domain.value_object.baggage_policy import (
    BaggagePolicy,
    CarryOnAllowance,
    CheckedAllowance,
)
from src.service.flight_booking.domain.value_object.passenger import DocumentType, Passenger

__all__ = [
    'Airport',
    'BaggagePolicy',
    'CarryOnAllowance',
    'CheckedAllowance',
    'DocumentType',
    'Passenger',
]
