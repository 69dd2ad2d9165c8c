from datetime import date, datetime, time, timedelta, timezone
import re
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.domain.enum.flight_status import FlightStatus, RouteType
from src.service.flight_booking.domain.enum.seat_status import FareClass
from src.service.flight_booking.domain.value_object.airport import Airport
from src.service.flight_booking.domain.value_object.baggage_policy import BaggagePolicy


FLIGHT_NUMBER_PATTERN = re.compile(r'^[A-Z]{2}-\d{3,4}$')
CLOCK_TIME_PATTERN = re.compile(r'^([01]?\d|2[0-3]):([0-5]\d)$')
DURATION_PATTERN = re.compile(r'^(?:(\d{1,2})\s*h)?\s*(?:(\d{1,2})\s*m)?$', re.IGNORECASE)

MIN_CAPACITY = 1
MAX_CAPACITY = 300
MAX_PRICE = 100_000
BUSINESS_PRICE_MULTIPLIER = 2
DEFAULT_AIRLINE = 'AeroLambda'


def combine_date_and_clock(day: date, clock: str) -> datetime:
    """`2025-03-01` + `'14:30'` -> 2025-03-01T14:30:00+00:00"""
    match = CLOCK_TIME_PATTERN.match(clock)
    if not match:
        raise DomainError(f'Invalid time format: {clock} (expected HH:MM)')
    return datetime.combine(
        day, time(hour=int(match.group(1)), minute=int(match.group(2))), tzinfo=timezone.utc
    )


def normalize_duration(raw: str) -> str:
    """`'2h30m'`, `'2h'`, `'45m'` -> `'2h 30m'`, `'2h 0m'`, `'0h 45m'`"""
    match = DURATION_PATTERN.match(raw.strip())
    if not raw.strip() or not match or not (match.group(1) or match.group(2)):
        raise DomainError(f'Invalid duration format: {raw} (e.g. 2h 30m, 5h, 45m)')
    return f'{int(match.group(1) or 0)}h {int(match.group(2) or 0)}m'


@attrs.define
class Flight:
    flight_number: str
    origin: Airport
    destination: Airport
    departure_at: datetime
    arrival_at: datetime
    duration: str
    price: int
    capacity: int
    available_seats: int
    airline: str = DEFAULT_AIRLINE
    status: FlightStatus = FlightStatus.SCHEDULED
    route_type: RouteType = RouteType.DIRECT
    baggage: BaggagePolicy = attrs.field(factory=BaggagePolicy)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        flight_number: str,
        origin: Airport,
        destination: Airport,
        departure_at: datetime,
        arrival_at: datetime,
        duration: str,
        price: int,
        capacity: int,
        airline: str = DEFAULT_AIRLINE,
        status: FlightStatus = FlightStatus.SCHEDULED,
        route_type: RouteType = RouteType.DIRECT,
        baggage: Optional[BaggagePolicy] = None,
    ) -> 'Flight':
        now = datetime.now(timezone.utc)
        flight = cls(
            flight_number=flight_number.upper(),
            airline=airline,
            origin=origin,
            destination=destination,
            departure_at=departure_at,
            arrival_at=arrival_at,
            duration=normalize_duration(duration),
            price=price,
            capacity=capacity,
            available_seats=capacity,
            status=status,
            route_type=route_type,
            baggage=baggage or BaggagePolicy(),
            created_at=now,
            updated_at=now,
        )
        flight.validate()
        return flight

    def validate(self) -> None:
        if not FLIGHT_NUMBER_PATTERN.match(self.flight_number):
            raise DomainError(f'Invalid flight number: {self.flight_number} (e.g. AM-1234)')
        if not MIN_CAPACITY <= self.capacity <= MAX_CAPACITY:
            raise DomainError(f'Capacity must be between {MIN_CAPACITY} and {MAX_CAPACITY}')
        if not 0 <= self.available_seats <= self.capacity:
            raise DomainError('Available seats must be between 0 and capacity')
        if self.price <= 0 or self.price > MAX_PRICE:
            raise DomainError(f'Price must be greater than 0 and at most {MAX_PRICE}')
        if self.arrival_at <= self.departure_at:
            raise DomainError('Arrival must be after departure')

    @Logger.io
    def update(self, *, now: datetime, **changes: Any) -> 'Flight':
        """
        Apply an administrative edit.

        A capacity change shifts available_seats by the same delta; the caller
        must refuse it once seats exist for the flight.
        """
        if 'duration' in changes:
            changes['duration'] = normalize_duration(changes['duration'])
        if 'flight_number' in changes:
            changes['flight_number'] = changes['flight_number'].upper()
        if 'capacity' in changes and changes['capacity'] != self.capacity:
            delta = changes['capacity'] - self.capacity
            changes['available_seats'] = self.available_seats + delta
            if changes['available_seats'] < 0:
                raise DomainError('Capacity cannot drop below the seats already sold')
        updated = attrs.evolve(self, updated_at=now, **changes)
        updated.validate()
        return updated

    @Logger.io
    def change_status(self, *, status: FlightStatus, now: datetime) -> 'Flight':
        return attrs.evolve(self, status=status, updated_at=now)

    def ensure_bookable(self, *, seats_requested: int) -> None:
        if self.status != FlightStatus.SCHEDULED:
            raise DomainError(f'Flight {self.flight_number} is not open for booking ({self.status})')
        if self.available_seats < seats_requested:
            raise DomainError(
                f'Flight {self.flight_number} has only {self.available_seats} seats left'
            )

    def price_for(self, fare_class: FareClass) -> int:
        if fare_class == FareClass.BUSINESS:
            return self.price * BUSINESS_PRICE_MULTIPLIER
        return self.price

    def time_until_departure(self, *, now: datetime) -> timedelta:
        return self.departure_at - now

    def ensure_cancellation_window(self, *, now: datetime, cutoff: timedelta) -> None:
        """Exactly `cutoff` before departure is still allowed; one second less is not."""
        if self.time_until_departure(now=now) < cutoff:
            hours = int(cutoff.total_seconds() // 3600)
            raise DomainError(
                f'Bookings can only be cancelled at least {hours} hours before departure'
            )
