from datetime import datetime, timezone
from typing import Optional, Self

from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import DomainError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.flight_booking.domain.entity.booking_entity import Booking
from src.service.flight_booking.domain.enum.booking_status import BookingStatus


class ConfirmPaymentUseCase:
    """
    Simulated payment: pending → confirmed, seat held → occupied, flight −1.

    A booking whose hold already ran out is expired on the spot (its seat is
    released if still linked) and the confirmation is refused.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def confirm_payment(
        self,
        *,
        booking_id: UUID,
        user_id: int,
        payment_method: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Booking:
        now = now or datetime.now(timezone.utc)

        with self.tracer.start_as_current_span(
            'use_case.confirm_payment',
            attributes={'booking.id': str(booking_id), 'user.id': user_id},
        ):
            async with self.uow:
                booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    raise NotFoundError('Booking not found')
                if not booking.is_owned_by(user_id):
                    raise ForbiddenError('Only the booking owner can confirm payment')

                try:
                    confirmed = booking.confirm(
                        payment_method=payment_method or settings.DEFAULT_PAYMENT_METHOD, now=now
                    )
                except DomainError:
                    metrics.record_rejection(operation='confirm', reason='not_pending')
                    raise

                occupied = await self.uow.seat_command_repo.occupy(
                    seat_id=booking.seat_id, booking_id=booking.id, now=now
                )
                if not occupied:
                    await self._expire(booking=booking, now=now)
                    metrics.record_rejection(operation='confirm', reason='hold_expired')
                    raise DomainError('Seat hold has expired; the booking was cancelled')

                if not await self.uow.booking_command_repo.update_status(
                    booking=confirmed, expected_status=BookingStatus.PENDING
                ):
                    metrics.record_rejection(operation='confirm', reason='not_pending')
                    raise DomainError('Booking is no longer pending')

                if not await self.uow.flight_command_repo.decrement_available_seats(
                    flight_id=booking.flight_id
                ):
                    Logger.base.warning(
                        f'⚠️ [CONFIRM] Flight {booking.flight_id} counter already at 0 '
                        f'while confirming {booking.reservation_code}'
                    )

                await self.uow.commit()

            metrics.record_transition(from_status='pending', to_status='confirmed')
            Logger.base.info(f'💳 [CONFIRM] Booking {booking.reservation_code} confirmed')
            return confirmed

    async def _expire(self, *, booking: Booking, now: datetime) -> None:
        """Cancel the stale pending booking and free its seat, then commit."""
        expired = booking.expire(now=now)
        moved = await self.uow.booking_command_repo.update_status(
            booking=expired, expected_status=BookingStatus.PENDING
        )
        await self.uow.seat_command_repo.free_from_booking(
            seat_id=booking.seat_id, booking_id=booking.id
        )
        await self.uow.commit()
        if moved:
            metrics.record_transition(from_status='pending', to_status='cancelled')
