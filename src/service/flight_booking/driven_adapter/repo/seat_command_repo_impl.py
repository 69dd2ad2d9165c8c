from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types import to_std_uuid, to_utils_uuid
from src.service.flight_booking.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.flight_booking.domain.entity.seat_entity import Seat
from src.service.flight_booking.domain.enum.seat_status import SeatStatus
from src.service.flight_booking.driven_adapter.model.seat_model import SeatModel
from src.service.flight_booking.driven_adapter.repo.entity_mapper import (
    seat_to_entity,
    seat_to_values,
)


class SeatCommandRepoImpl(ISeatCommandRepo):
    """
    Seat writes inside a unit of work.

    Each transition is one `UPDATE ... WHERE status = <expected>`; rowcount == 1
    means this request won the race, 0 means someone else got there first.
    """

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def count_by_flight(self, *, flight_id: int) -> int:
        result = await self.session.execute(
            select(func.count(SeatModel.id)).where(SeatModel.flight_id == flight_id)
        )
        return result.scalar_one()

    @Logger.io
    async def bulk_create(self, *, seats: List[Seat]) -> int:
        if not seats:
            return 0
        await self.session.execute(insert(SeatModel), [seat_to_values(seat) for seat in seats])
        return len(seats)

    @Logger.io
    async def get_by_id(self, *, seat_id: int) -> Optional[Seat]:
        result = await self.session.execute(select(SeatModel).where(SeatModel.id == seat_id))
        model = result.scalar_one_or_none()
        return seat_to_entity(model) if model else None

    @Logger.io
    async def list_by_flight(self, *, flight_id: int) -> List[Seat]:
        result = await self.session.execute(
            select(SeatModel)
            .where(SeatModel.flight_id == flight_id)
            .order_by(SeatModel.row_number, SeatModel.column_letter)
        )
        return [seat_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def claim_for_booking(
        self, *, seat_id: int, booking_id: UUID, hold_expires_at: datetime
    ) -> bool:
        result = await self.session.execute(
            update(SeatModel)
            .where(SeatModel.id == seat_id, SeatModel.status == SeatStatus.AVAILABLE.value)
            .values(
                status=SeatStatus.HELD.value,
                booking_id=to_std_uuid(booking_id),
                hold_expires_at=hold_expires_at,
            )
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def hold(self, *, seat_id: int, hold_expires_at: datetime) -> bool:
        result = await self.session.execute(
            update(SeatModel)
            .where(SeatModel.id == seat_id, SeatModel.status == SeatStatus.AVAILABLE.value)
            .values(status=SeatStatus.HELD.value, booking_id=None, hold_expires_at=hold_expires_at)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def release_hold(self, *, seat_id: int) -> bool:
        result = await self.session.execute(
            update(SeatModel)
            .where(
                SeatModel.id == seat_id,
                SeatModel.status == SeatStatus.HELD.value,
                SeatModel.booking_id.is_(None),
            )
            .values(status=SeatStatus.AVAILABLE.value, hold_expires_at=None)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def occupy(self, *, seat_id: int, booking_id: UUID, now: datetime) -> bool:
        result = await self.session.execute(
            update(SeatModel)
            .where(
                SeatModel.id == seat_id,
                SeatModel.status == SeatStatus.HELD.value,
                SeatModel.booking_id == to_std_uuid(booking_id),
                SeatModel.hold_expires_at > now,
            )
            .values(status=SeatStatus.OCCUPIED.value, hold_expires_at=None)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def free_from_booking(self, *, seat_id: int, booking_id: UUID) -> bool:
        result = await self.session.execute(
            update(SeatModel)
            .where(
                SeatModel.id == seat_id,
                SeatModel.booking_id == to_std_uuid(booking_id),
                SeatModel.status.in_([SeatStatus.HELD.value, SeatStatus.OCCUPIED.value]),
            )
            .values(status=SeatStatus.AVAILABLE.value, booking_id=None, hold_expires_at=None)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def release_expired_holds(
        self, *, now: datetime, flight_id: Optional[int] = None
    ) -> List[Optional[UUID]]:
        conditions = [
            SeatModel.status == SeatStatus.HELD.value,
            SeatModel.hold_expires_at.is_not(None),
            SeatModel.hold_expires_at <= now,
        ]
        if flight_id is not None:
            conditions.append(SeatModel.flight_id == flight_id)

        # lock the expired rows first, so the booking ids read here are exactly
        # the ones released below
        expired = await self.session.execute(
            select(SeatModel.id, SeatModel.booking_id).where(*conditions).with_for_update()
        )
        rows = expired.all()
        if not rows:
            return []

        await self.session.execute(
            update(SeatModel)
            .where(SeatModel.id.in_([row.id for row in rows]), *conditions)
            .values(status=SeatStatus.AVAILABLE.value, booking_id=None, hold_expires_at=None)
        )
        return [to_utils_uuid(row.booking_id) if row.booking_id else None for row in rows]

    @Logger.io
    async def delete_by_flight(self, *, flight_id: int) -> None:
        await self.session.execute(delete(SeatModel).where(SeatModel.flight_id == flight_id))
