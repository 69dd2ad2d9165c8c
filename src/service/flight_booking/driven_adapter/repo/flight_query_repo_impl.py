from contextlib import asynccontextmanager
from datetime import date, datetime, time, timedelta, timezone
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto.booking_views import FlightFilter, Page
from src.service.flight_booking.app.interface.i_flight_query_repo import IFlightQueryRepo
from src.service.flight_booking.domain.entity.flight_entity import Flight
from src.service.flight_booking.domain.enum.flight_status import FlightStatus
from src.service.flight_booking.driven_adapter.model.flight_model import FlightModel
from src.service.flight_booking.driven_adapter.repo.entity_mapper import flight_to_entity


def _day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


class FlightQueryRepoImpl(IFlightQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def get_by_id(self, *, flight_id: int) -> Optional[Flight]:
        async with self._get_session() as session:
            result = await session.execute(select(FlightModel).where(FlightModel.id == flight_id))
            model = result.scalar_one_or_none()
            return flight_to_entity(model) if model else None

    @Logger.io
    async def list_flights(self, *, filters: FlightFilter, page: int, limit: int) -> Page[Flight]:
        conditions = []
        if filters.origin_code:
            conditions.append(FlightModel.origin_code == filters.origin_code.upper())
        if filters.destination_code:
            conditions.append(FlightModel.destination_code == filters.destination_code.upper())
        if filters.departure_date:
            start, end = _day_bounds(filters.departure_date)
            conditions += [FlightModel.departure_at >= start, FlightModel.departure_at < end]
        if filters.status:
            conditions.append(FlightModel.status == filters.status)

        async with self._get_session() as session:
            total = (
                await session.execute(select(func.count(FlightModel.id)).where(*conditions))
            ).scalar_one()
            result = await session.execute(
                select(FlightModel)
                .where(*conditions)
                .order_by(FlightModel.departure_at.asc(), FlightModel.id.asc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            flights = [flight_to_entity(model) for model in result.scalars().all()]

        return Page(items=flights, total=total, page=page, limit=limit)

    @Logger.io
    async def search(
        self,
        *,
        origin_code: str,
        destination_code: str,
        departure_date: Optional[date],
        now: datetime,
    ) -> List[Flight]:
        conditions = [
            FlightModel.origin_code == origin_code.upper(),
            FlightModel.destination_code == destination_code.upper(),
            FlightModel.status == FlightStatus.SCHEDULED.value,
            FlightModel.available_seats > 0,
        ]
        if departure_date:
            start, end = _day_bounds(departure_date)
            conditions += [FlightModel.departure_at >= start, FlightModel.departure_at < end]
        else:
            conditions.append(FlightModel.departure_at > now)

        async with self._get_session() as session:
            result = await session.execute(
                select(FlightModel).where(*conditions).order_by(FlightModel.departure_at.asc())
            )
            return [flight_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_upcoming(self, *, now: datetime) -> List[Flight]:
        async with self._get_session() as session:
            result = await session.execute(
                select(FlightModel)
                .where(
                    FlightModel.departure_at > now,
                    FlightModel.status.in_(
                        [FlightStatus.SCHEDULED.value, FlightStatus.IN_FLIGHT.value]
                    ),
                )
                .order_by(FlightModel.departure_at.asc())
            )
            return [flight_to_entity(model) for model in result.scalars().all()]
