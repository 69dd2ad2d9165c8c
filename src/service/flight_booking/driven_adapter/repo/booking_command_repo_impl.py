from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types import to_std_uuid
from src.service.flight_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.flight_booking.domain.entity.booking_entity import Booking
from src.service.flight_booking.domain.enum.booking_status import BookingStatus
from src.service.flight_booking.driven_adapter.model.booking_model import BookingModel
from src.service.flight_booking.driven_adapter.repo.entity_mapper import (
    booking_to_entity,
    booking_to_model,
)


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        booking_model = booking_to_model(booking)
        self.session.add(booking_model)
        await self.session.flush()
        return booking_to_entity(booking_model)

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel).where(BookingModel.id == to_std_uuid(booking_id))
        )
        booking_model = result.scalar_one_or_none()
        return booking_to_entity(booking_model) if booking_model else None

    @Logger.io
    async def exists_by_reservation_code(self, *, reservation_code: str) -> bool:
        result = await self.session.execute(
            select(BookingModel.id).where(BookingModel.reservation_code == reservation_code)
        )
        return result.first() is not None

    @Logger.io
    async def update_status(self, *, booking: Booking, expected_status: BookingStatus) -> bool:
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id == to_std_uuid(booking.id),
                BookingModel.status == expected_status.value,
            )
            .values(
                status=booking.status.value,
                payment_method=booking.payment_method,
                updated_at=booking.updated_at,
                confirmed_at=booking.confirmed_at,
                cancelled_at=booking.cancelled_at,
            )
            .execution_options(synchronize_session='fetch')
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def expire_pending(self, *, booking_ids: Iterable[UUID], now: datetime) -> int:
        ids = [to_std_uuid(booking_id) for booking_id in booking_ids]
        if not ids:
            return 0
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id.in_(ids),
                BookingModel.status == BookingStatus.PENDING.value,
            )
            .values(status=BookingStatus.CANCELLED.value, updated_at=now, cancelled_at=now)
            .execution_options(synchronize_session='fetch')
        )
        return result.rowcount  # type: ignore[attr-defined]

    @Logger.io
    async def count_by_flight(
        self, *, flight_id: int, statuses: Optional[List[BookingStatus]] = None
    ) -> int:
        stmt = select(func.count(BookingModel.id)).where(BookingModel.flight_id == flight_id)
        if statuses:
            stmt = stmt.where(BookingModel.status.in_([status.value for status in statuses]))
        result = await self.session.execute(stmt)
        return result.scalar_one()
