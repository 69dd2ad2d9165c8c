from datetime import datetime
from typing import Optional
import uuid

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.column_types import UtcDateTime
from src.platform.database.orm_db_setting import Base


class SeatModel(Base):
    __tablename__ = 'seat'
    __table_args__ = (
        UniqueConstraint('flight_id', 'seat_number', name='uq_seat_flight_seat_number'),
        Index('ix_seat_status_hold_expires_at', 'status', 'hold_expires_at'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    flight_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('flight.id', ondelete='CASCADE'), nullable=False, index=True
    )
    seat_number: Mapped[str] = mapped_column(String(4), nullable=False)
    row_number: Mapped[int] = mapped_column(Integer, nullable=False)
    column_letter: Mapped[str] = mapped_column(String(1), nullable=False)
    fare_class: Mapped[str] = mapped_column(String(10), nullable=False, default='economy')
    status: Mapped[str] = mapped_column(String(10), nullable=False, default='available')
    hold_expires_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime, nullable=True)
    booking_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True, index=True)

    def __repr__(self) -> str:
        return f'<SeatModel(id={self.id}, flight_id={self.flight_id}, seat_number={self.seat_number}, status={self.status})>'
