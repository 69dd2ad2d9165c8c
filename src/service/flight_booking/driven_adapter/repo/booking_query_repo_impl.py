from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types import to_std_uuid
from src.service.flight_booking.app.dto.booking_views import BookingDetail, Page
from src.service.flight_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.flight_booking.domain.enum.booking_status import BookingStatus
from src.service.flight_booking.domain.value_object.airport import Airport
from src.service.flight_booking.driven_adapter.model.booking_model import BookingModel
from src.service.flight_booking.driven_adapter.model.flight_model import FlightModel
from src.service.flight_booking.driven_adapter.model.seat_model import SeatModel
from src.service.flight_booking.driven_adapter.repo.entity_mapper import booking_to_entity


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Get session for query execution.

        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _detail_query() -> Select[Any]:
        return (
            select(BookingModel, FlightModel, SeatModel)
            .join(FlightModel, BookingModel.flight_id == FlightModel.id)
            .join(SeatModel, BookingModel.seat_id == SeatModel.id)
        )

    @staticmethod
    def _to_detail(
        booking_model: BookingModel, flight_model: FlightModel, seat_model: SeatModel
    ) -> BookingDetail:
        return BookingDetail(
            booking=booking_to_entity(booking_model),
            flight_number=flight_model.flight_number,
            origin=Airport(
                city=flight_model.origin_city,
                code=flight_model.origin_code,
                name=flight_model.origin_airport,
            ),
            destination=Airport(
                city=flight_model.destination_city,
                code=flight_model.destination_code,
                name=flight_model.destination_airport,
            ),
            departure_at=flight_model.departure_at,
            arrival_at=flight_model.arrival_at,
            seat_number=seat_model.seat_number,
            fare_class=seat_model.fare_class,
        )

    @Logger.io
    async def get_detail(self, *, booking_id: UUID) -> Optional[BookingDetail]:
        async with self._get_session() as session:
            result = await session.execute(
                self._detail_query().where(BookingModel.id == to_std_uuid(booking_id))
            )
            row = result.first()
            if not row:
                return None
            return self._to_detail(*row)

    @Logger.io
    async def list_by_user(
        self, *, user_id: int, status: Optional[BookingStatus] = None
    ) -> List[BookingDetail]:
        stmt = self._detail_query().where(BookingModel.user_id == user_id)
        if status:
            stmt = stmt.where(BookingModel.status == status.value)
        stmt = stmt.order_by(BookingModel.created_at.desc(), BookingModel.id.desc())

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [self._to_detail(*row) for row in result.all()]

    @Logger.io
    async def list_all(
        self,
        *,
        flight_id: Optional[int],
        status: Optional[BookingStatus],
        page: int,
        limit: int,
    ) -> Page[BookingDetail]:
        conditions = []
        if flight_id is not None:
            conditions.append(BookingModel.flight_id == flight_id)
        if status:
            conditions.append(BookingModel.status == status.value)

        async with self._get_session() as session:
            total = (
                await session.execute(select(func.count(BookingModel.id)).where(*conditions))
            ).scalar_one()
            result = await session.execute(
                self._detail_query()
                .where(*conditions)
                .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            items = [self._to_detail(*row) for row in result.all()]

        return Page(items=items, total=total, page=page, limit=limit)
