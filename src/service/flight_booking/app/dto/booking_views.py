from datetime import date, datetime
from typing import Generic, List, Optional, TypeVar

import attrs

from src.service.flight_booking.domain.entity.booking_entity import Booking
from src.service.flight_booking.domain.entity.flight_entity import Flight
from src.service.flight_booking.domain.entity.seat_entity import Seat
from src.service.flight_booking.domain.value_object.airport import Airport
from src.service.flight_booking.domain.value_object.passenger import Passenger


T = TypeVar('T')


@attrs.define
class Page(Generic[T]):
    items: List[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


@attrs.define
class BookingDetail:
    """Booking joined with the flight and seat fields shown in booking lists"""

    booking: Booking
    flight_number: str
    origin: Airport
    destination: Airport
    departure_at: datetime
    arrival_at: datetime
    seat_number: str
    fare_class: str


@attrs.define
class CreatedBookings:
    bookings: List[Booking]
    seats: List[Seat]
    total_price: int
    hold_expires_at: datetime


@attrs.define
class SeatMap:
    flight: Flight
    seats: List[Seat]

    def count(self, status: str) -> int:
        return sum(1 for seat in self.seats if seat.status == status)


@attrs.define
class FlightRoute:
    origin: Airport
    destination: Airport
    departure_dates: List[str] = attrs.field(factory=list)


@attrs.define
class FlightFilter:
    origin_code: Optional[str] = None
    destination_code: Optional[str] = None
    departure_date: Optional[date] = None
    status: Optional[str] = None


@attrs.define(frozen=True)
class SeatSelection:
    """One (seat, passenger) pair of a create-booking request"""

    seat_id: int
    passenger: Passenger
