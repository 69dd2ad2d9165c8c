from datetime import datetime
from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.flight_booking.domain.enum.seat_status import FareClass, SeatStatus


@attrs.define
class Seat:
    flight_id: int
    seat_number: str  # row + column letter, e.g. '12A'
    row: int
    column: str
    fare_class: FareClass = FareClass.ECONOMY
    status: SeatStatus = SeatStatus.AVAILABLE
    hold_expires_at: Optional[datetime] = None
    booking_id: Optional[UUID] = None
    id: Optional[int] = None

    @property
    def is_available(self) -> bool:
        return self.status == SeatStatus.AVAILABLE

    def is_hold_expired(self, *, now: datetime) -> bool:
        return (
            self.status == SeatStatus.HELD
            and self.hold_expires_at is not None
            and self.hold_expires_at <= now
        )

    def is_held_by(self, *, booking_id: UUID, now: datetime) -> bool:
        return (
            self.status == SeatStatus.HELD
            and self.booking_id is not None
            and str(self.booking_id) == str(booking_id)
            and not self.is_hold_expired(now=now)
        )
