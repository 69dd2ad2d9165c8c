from datetime import datetime, timezone
from typing import Any, Optional, Self

from fastapi import Depends
from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.domain.entity.flight_entity import Flight
from src.service.flight_booking.domain.enum.flight_status import FlightStatus


class UpdateFlightUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    async def _load(self, flight_id: int) -> Flight:
        flight = await self.uow.flight_command_repo.get_by_id(flight_id=flight_id)
        if not flight:
            raise NotFoundError('Flight not found')
        return flight

    @Logger.io
    async def update_flight(
        self, *, flight_id: int, changes: dict[str, Any], now: Optional[datetime] = None
    ) -> Flight:
        """
        Partial edit. The flight code stays unique, and capacity is frozen once
        the seat grid exists.
        """
        now = now or datetime.now(timezone.utc)

        with self.tracer.start_as_current_span(
            'use_case.update_flight', attributes={'flight.id': flight_id}
        ):
            async with self.uow:
                flight = await self._load(flight_id)

                flight_number = changes.get('flight_number')
                if flight_number and await self.uow.flight_command_repo.exists_by_flight_number(
                    flight_number=flight_number.upper(), exclude_flight_id=flight_id
                ):
                    raise ConflictError(f'Flight {flight_number.upper()} already exists')

                capacity = changes.get('capacity')
                if (
                    capacity is not None
                    and capacity != flight.capacity
                    and await self.uow.seat_command_repo.count_by_flight(flight_id=flight_id) > 0
                ):
                    raise DomainError('Capacity cannot change once seats have been generated')

                updated = flight.update(now=now, **changes)
                saved = await self.uow.flight_command_repo.update(flight=updated)
                await self.uow.commit()

            return saved

    @Logger.io
    async def change_status(
        self, *, flight_id: int, status: FlightStatus, now: Optional[datetime] = None
    ) -> Flight:
        now = now or datetime.now(timezone.utc)

        with self.tracer.start_as_current_span(
            'use_case.change_flight_status',
            attributes={'flight.id': flight_id, 'flight.status': status.value},
        ):
            async with self.uow:
                flight = await self._load(flight_id)
                saved = await self.uow.flight_command_repo.update(
                    flight=flight.change_status(status=status, now=now)
                )
                await self.uow.commit()

            Logger.base.info(f'✈️ [FLIGHT] {saved.flight_number} status {flight.status} → {status}')
            return saved
