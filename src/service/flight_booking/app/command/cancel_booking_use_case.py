from datetime import datetime, timedelta, timezone
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


class CancelBookingUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def cancel_booking(
        self, *, booking_id: UUID, user_id: int, now: Optional[datetime] = None
    ) -> Booking:
        """
        Cancel a confirmed booking at least CANCELLATION_CUTOFF_HOURS before
        departure; the seat goes back on sale and the flight counter +1.
        """
        now = now or datetime.now(timezone.utc)
        cutoff = timedelta(hours=settings.CANCELLATION_CUTOFF_HOURS)

        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id), 'user.id': user_id},
        ):
            async with self.uow:
                booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
                if not booking:
                    raise NotFoundError('Booking not found')
                if not booking.is_owned_by(user_id):
                    raise ForbiddenError('Only the booking owner can cancel this booking')

                cancelled = booking.cancel(now=now)

                flight = await self.uow.flight_command_repo.get_by_id(flight_id=booking.flight_id)
                if not flight:
                    raise NotFoundError('Flight not found')
                try:
                    flight.ensure_cancellation_window(now=now, cutoff=cutoff)
                except DomainError:
                    metrics.record_rejection(operation='cancel', reason='cutoff_passed')
                    raise

                if not await self.uow.booking_command_repo.update_status(
                    booking=cancelled, expected_status=BookingStatus.CONFIRMED
                ):
                    raise DomainError('Booking is no longer confirmed')

                if not await self.uow.seat_command_repo.free_from_booking(
                    seat_id=booking.seat_id, booking_id=booking.id
                ):
                    Logger.base.warning(
                        f'⚠️ [CANCEL] Seat {booking.seat_id} no longer held by '
                        f'{booking.reservation_code}; nothing to free'
                    )
                if not await self.uow.flight_command_repo.increment_available_seats(
                    flight_id=booking.flight_id
                ):
                    Logger.base.warning(
                        f'⚠️ [CANCEL] Flight {booking.flight_id} counter already at capacity '
                        f'while cancelling {booking.reservation_code}'
                    )
                await self.uow.commit()

            metrics.record_transition(from_status='confirmed', to_status='cancelled')
            Logger.base.info(f'↩️ [CANCEL] Booking {booking.reservation_code} cancelled')
            return cancelled
