from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from unittest.mock import AsyncMock, Mock

from uuid_utils import UUID, uuid7

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.flight_booking.domain.entity.booking_entity import Booking
from src.service.flight_booking.domain.entity.flight_entity import Flight
from src.service.flight_booking.domain.entity.seat_entity import Seat
from src.service.flight_booking.domain.enum.booking_status import BookingStatus
from src.service.flight_booking.domain.enum.flight_status import FlightStatus
from src.service.flight_booking.domain.enum.seat_status import FareClass, SeatStatus
from src.service.flight_booking.domain.value_object.airport import Airport
from src.service.flight_booking.domain.value_object.baggage_policy import BaggagePolicy
from src.service.flight_booking.domain.value_object.passenger import DocumentType, Passenger


NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

MEX = Airport(city='Mexico City', code='MEX', name='Benito Juarez International')
CUN = Airport(city='Cancun', code='CUN', name='Cancun International')


class FakeUnitOfWork(AbstractUnitOfWork):
    """
    Unit of work over AsyncMock repositories.

    Every repo method is an AsyncMock, so tests set return values on
    `uow.<repo>.<method>` and assert on calls; commits and rollbacks are counted.
    """

    def __init__(self) -> None:
        self.flight_command_repo: Mock = AsyncMock()
        self.seat_command_repo: Mock = AsyncMock()
        self.booking_command_repo: Mock = AsyncMock()
        self.commits = 0
        self.rollbacks = 0

    async def _commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_flight(
    *,
    flight_id: int = 1,
    price: int = 1000,
    capacity: int = 12,
    available_seats: Optional[int] = None,
    status: FlightStatus = FlightStatus.SCHEDULED,
    departure_at: Optional[datetime] = None,
    flight_number: str = 'AM-1234',
) -> Flight:
    departure_at = departure_at or NOW + timedelta(days=10)
    return Flight(
        id=flight_id,
        flight_number=flight_number,
        origin=MEX,
        destination=CUN,
        departure_at=departure_at,
        arrival_at=departure_at + timedelta(hours=2, minutes=30),
        duration='2h 30m',
        price=price,
        capacity=capacity,
        available_seats=capacity if available_seats is None else available_seats,
        status=status,
        created_at=NOW,
        updated_at=NOW,
    )


def make_seat(
    *,
    seat_id: int = 1,
    flight_id: int = 1,
    row: int = 5,
    column: str = 'A',
    fare_class: FareClass = FareClass.ECONOMY,
    status: SeatStatus = SeatStatus.AVAILABLE,
    booking_id: Optional[UUID] = None,
    hold_expires_at: Optional[datetime] = None,
) -> Seat:
    return Seat(
        id=seat_id,
        flight_id=flight_id,
        seat_number=f'{row}{column}',
        row=row,
        column=column,
        fare_class=fare_class,
        status=status,
        booking_id=booking_id,
        hold_expires_at=hold_expires_at,
    )


def make_passenger(first_name: str = 'Ana', **overrides: Any) -> Passenger:
    fields: dict[str, Any] = {
        'first_name': first_name,
        'last_name': 'Lopez',
        'email': f'{first_name.lower()}@example.com',
        'document_type': DocumentType.PASSPORT,
        'document_number': 'G12345678',
    }
    fields.update(overrides)
    return Passenger(**fields)


def make_booking(
    *,
    user_id: int = 2,
    flight_id: int = 1,
    seat_id: int = 1,
    status: BookingStatus = BookingStatus.PENDING,
    total_price: int = 1000,
    booking_id: Optional[UUID] = None,
) -> Booking:
    return Booking(
        id=booking_id or uuid7(),
        reservation_code='AL-2026-ABC123',
        user_id=user_id,
        flight_id=flight_id,
        seat_id=seat_id,
        passenger=make_passenger(),
        baggage=BaggagePolicy(),
        total_price=total_price,
        status=status,
        created_at=NOW,
        updated_at=NOW,
    )
