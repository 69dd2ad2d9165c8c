from typing import Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.interface.i_flight_command_repo import IFlightCommandRepo
from src.service.flight_booking.domain.entity.flight_entity import Flight
from src.service.flight_booking.driven_adapter.model.flight_model import FlightModel
from src.service.flight_booking.driven_adapter.repo.entity_mapper import (
    flight_to_entity,
    flight_to_values,
)


class FlightCommandRepoImpl(IFlightCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, flight_id: int) -> Optional[Flight]:
        result = await self.session.execute(select(FlightModel).where(FlightModel.id == flight_id))
        model = result.scalar_one_or_none()
        return flight_to_entity(model) if model else None

    @Logger.io
    async def exists_by_flight_number(
        self, *, flight_number: str, exclude_flight_id: Optional[int] = None
    ) -> bool:
        stmt = select(FlightModel.id).where(FlightModel.flight_number == flight_number.upper())
        if exclude_flight_id is not None:
            stmt = stmt.where(FlightModel.id != exclude_flight_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    @Logger.io
    async def create(self, *, flight: Flight) -> Flight:
        result = await self.session.execute(
            insert(FlightModel).values(**flight_to_values(flight)).returning(FlightModel)
        )
        return flight_to_entity(result.scalar_one())

    @Logger.io
    async def update(self, *, flight: Flight) -> Flight:
        values = flight_to_values(flight)
        values['updated_at'] = flight.updated_at or func.now()
        result = await self.session.execute(
            update(FlightModel)
            .where(FlightModel.id == flight.id)
            .values(**values)
            .returning(FlightModel)
        )
        return flight_to_entity(result.scalar_one())

    @Logger.io
    async def delete(self, *, flight_id: int) -> None:
        await self.session.execute(delete(FlightModel).where(FlightModel.id == flight_id))

    @Logger.io
    async def decrement_available_seats(self, *, flight_id: int) -> bool:
        result = await self.session.execute(
            update(FlightModel)
            .where(FlightModel.id == flight_id, FlightModel.available_seats > 0)
            .values(available_seats=FlightModel.available_seats - 1)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def increment_available_seats(self, *, flight_id: int) -> bool:
        result = await self.session.execute(
            update(FlightModel)
            .where(
                FlightModel.id == flight_id,
                FlightModel.available_seats < FlightModel.capacity,
            )
            .values(available_seats=FlightModel.available_seats + 1)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]
