from typing import Self

import attrs
from fastapi import Depends
from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.domain.entity.seat_entity import Seat
from src.service.flight_booking.domain.enum.seat_status import SeatStatus


class ReleaseSeatUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def release_seat(self, *, seat_id: int) -> Seat:
        """
        held (no booking link) → available. Releasing an available seat is a
        no-op; seats claimed by a booking go through confirm/cancel instead.
        """
        with self.tracer.start_as_current_span(
            'use_case.release_seat', attributes={'seat.id': seat_id}
        ):
            async with self.uow:
                seat = await self.uow.seat_command_repo.get_by_id(seat_id=seat_id)
                if not seat:
                    raise NotFoundError('Seat not found')
                if seat.status == SeatStatus.AVAILABLE:
                    return seat
                if seat.booking_id is not None:
                    raise DomainError(
                        f'Seat {seat.seat_number} belongs to a booking and cannot be released'
                    )
                if seat.status == SeatStatus.OCCUPIED:
                    raise DomainError(f'Seat {seat.seat_number} is occupied')

                if not await self.uow.seat_command_repo.release_hold(seat_id=seat_id):
                    raise DomainError(f'Seat {seat.seat_number} changed state, try again')

                await self.uow.commit()

            return attrs.evolve(seat, status=SeatStatus.AVAILABLE, hold_expires_at=None)
