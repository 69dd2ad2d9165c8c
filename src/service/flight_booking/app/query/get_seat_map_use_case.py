from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import IntegrityError

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto.booking_views import SeatMap
from src.service.flight_booking.app.service.expiry_sweeper import ExpirySweeper
from src.service.flight_booking.app.service.seat_generator import SeatGenerator


class GetSeatMapUseCase:
    """
    Seat map of a flight.

    Reading the map is what drives the seat lifecycle housekeeping: the grid
    is generated on first read and expired holds are swept on every read.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        seat_generator: SeatGenerator,
        expiry_sweeper: ExpirySweeper,
    ) -> None:
        self.uow = uow
        self.seat_generator = seat_generator
        self.expiry_sweeper = expiry_sweeper
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        seat_generator: SeatGenerator = Depends(Provide[Container.seat_generator]),
        expiry_sweeper: ExpirySweeper = Depends(Provide[Container.expiry_sweeper]),
    ) -> Self:
        return cls(uow=uow, seat_generator=seat_generator, expiry_sweeper=expiry_sweeper)

    @Logger.io
    async def get_seat_map(self, *, flight_id: int, now: Optional[datetime] = None) -> SeatMap:
        now = now or datetime.now(timezone.utc)

        with self.tracer.start_as_current_span(
            'use_case.get_seat_map', attributes={'flight.id': flight_id}
        ):
            async with self.uow:
                flight = await self.uow.flight_command_repo.get_by_id(flight_id=flight_id)
                if not flight:
                    raise NotFoundError('Flight not found')

                try:
                    await self.seat_generator.ensure_seats(
                        flight_id=flight_id,
                        flight_command_repo=self.uow.flight_command_repo,
                        seat_command_repo=self.uow.seat_command_repo,
                    )
                    await self.uow.commit()
                except IntegrityError:
                    # a concurrent first read generated the grid already
                    await self.uow.rollback()
                    Logger.base.info(f'💺 [SEATS] Flight {flight_id} seats generated concurrently')

                await self.expiry_sweeper.sweep(
                    now=now,
                    seat_command_repo=self.uow.seat_command_repo,
                    booking_command_repo=self.uow.booking_command_repo,
                    flight_id=flight_id,
                )
                await self.uow.commit()

                seats = await self.uow.seat_command_repo.list_by_flight(flight_id=flight_id)

            return SeatMap(flight=flight, seats=seats)
