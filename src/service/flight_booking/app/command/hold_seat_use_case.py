from datetime import datetime, timedelta, timezone
from typing import Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.flight_booking.app.service.expiry_sweeper import ExpirySweeper
from src.service.flight_booking.domain.entity.seat_entity import Seat
from src.service.flight_booking.domain.enum.seat_status import SeatStatus


class HoldSeatUseCase:
    """
    Standalone seat hold outside the booking flow.

    The hold has no owner and lasts SEAT_HOLD_MINUTES; it is released explicitly
    or by the expiry sweep.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, expiry_sweeper: ExpirySweeper) -> None:
        self.uow = uow
        self.expiry_sweeper = expiry_sweeper
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        expiry_sweeper: ExpirySweeper = Depends(Provide[Container.expiry_sweeper]),
    ) -> Self:
        return cls(uow=uow, expiry_sweeper=expiry_sweeper)

    @Logger.io
    async def hold_seat(self, *, seat_id: int, now: Optional[datetime] = None) -> Seat:
        now = now or datetime.now(timezone.utc)
        hold_expires_at = now + timedelta(minutes=settings.SEAT_HOLD_MINUTES)

        with self.tracer.start_as_current_span(
            'use_case.hold_seat', attributes={'seat.id': seat_id}
        ):
            async with self.uow:
                seat = await self.uow.seat_command_repo.get_by_id(seat_id=seat_id)
                if not seat:
                    raise NotFoundError('Seat not found')

                # an expired hold counts as available
                await self.expiry_sweeper.sweep(
                    now=now,
                    seat_command_repo=self.uow.seat_command_repo,
                    booking_command_repo=self.uow.booking_command_repo,
                    flight_id=seat.flight_id,
                )
                await self.uow.commit()

                if not await self.uow.seat_command_repo.hold(
                    seat_id=seat_id, hold_expires_at=hold_expires_at
                ):
                    metrics.record_rejection(operation='hold', reason='seat_unavailable')
                    raise DomainError(f'Seat {seat.seat_number} is not available')

                await self.uow.commit()

            metrics.record_seat_hold(source='standalone')
            return attrs.evolve(
                seat, status=SeatStatus.HELD, hold_expires_at=hold_expires_at, booking_id=None
            )
