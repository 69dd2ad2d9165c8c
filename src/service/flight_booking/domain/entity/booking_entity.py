from datetime import datetime
from typing import Optional

import attrs
from uuid_utils import UUID, uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.domain.enum.booking_status import (
    BOOKING_TRANSITIONS,
    BookingStatus,
)
from src.service.flight_booking.domain.value_object.baggage_policy import BaggagePolicy
from src.service.flight_booking.domain.value_object.passenger import Passenger


@attrs.define
class Booking:
    id: UUID
    reservation_code: str
    user_id: int
    flight_id: int
    seat_id: int
    passenger: Passenger
    total_price: int
    baggage: BaggagePolicy = attrs.field(factory=BaggagePolicy)
    status: BookingStatus = BookingStatus.PENDING
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        reservation_code: str,
        user_id: int,
        flight_id: int,
        seat_id: int,
        passenger: Passenger,
        baggage: BaggagePolicy,
        total_price: int,
        now: datetime,
    ) -> 'Booking':
        if total_price < 0:
            raise DomainError('Total price cannot be negative')
        return cls(
            id=uuid7(),
            reservation_code=reservation_code,
            user_id=user_id,
            flight_id=flight_id,
            seat_id=seat_id,
            passenger=passenger,
            baggage=baggage,
            total_price=total_price,
            status=BookingStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    def transition_to(self, target: BookingStatus, *, now: datetime) -> 'Booking':
        """Single entry point for status changes; rejects moves outside BOOKING_TRANSITIONS."""
        if target not in BOOKING_TRANSITIONS[self.status]:
            raise DomainError(f'Booking cannot move from {self.status} to {target}')
        return attrs.evolve(self, status=target, updated_at=now)

    @Logger.io
    def confirm(self, *, payment_method: str, now: datetime) -> 'Booking':
        if self.status != BookingStatus.PENDING:
            raise DomainError(f'Booking is not pending (current status: {self.status})')
        confirmed = self.transition_to(BookingStatus.CONFIRMED, now=now)
        return attrs.evolve(confirmed, payment_method=payment_method, confirmed_at=now)

    @Logger.io
    def cancel(self, *, now: datetime) -> 'Booking':
        """Customer cancellation; only a confirmed booking qualifies."""
        if self.status != BookingStatus.CONFIRMED:
            raise DomainError(
                f'Only confirmed bookings can be cancelled (current status: {self.status})'
            )
        cancelled = self.transition_to(BookingStatus.CANCELLED, now=now)
        return attrs.evolve(cancelled, cancelled_at=now)

    @Logger.io
    def expire(self, *, now: datetime) -> 'Booking':
        """Pending booking whose seat hold ran out."""
        expired = self.transition_to(BookingStatus.CANCELLED, now=now)
        return attrs.evolve(expired, cancelled_at=now)
