from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.column_types import UtcDateTime
from src.platform.database.orm_db_setting import Base


class FlightModel(Base):
    __tablename__ = 'flight'
    __table_args__ = (
        CheckConstraint('available_seats >= 0', name='ck_flight_available_seats_non_negative'),
        CheckConstraint('available_seats <= capacity', name='ck_flight_available_seats_capacity'),
        CheckConstraint('price >= 0', name='ck_flight_price_non_negative'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    flight_number: Mapped[str] = mapped_column(String(10), nullable=False, unique=True, index=True)
    airline: Mapped[str] = mapped_column(String(100), nullable=False, default='AeroLambda')
    origin_city: Mapped[str] = mapped_column(String(100), nullable=False)
    origin_code: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    origin_airport: Mapped[str] = mapped_column(String(200), nullable=False)
    destination_city: Mapped[str] = mapped_column(String(100), nullable=False)
    destination_code: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    destination_airport: Mapped[str] = mapped_column(String(200), nullable=False)
    departure_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False, index=True)
    arrival_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    duration: Mapped[str] = mapped_column(String(20), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='scheduled', index=True)
    route_type: Mapped[str] = mapped_column(String(20), nullable=False, default='direct')
    baggage: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UtcDateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f'<FlightModel(id={self.id}, flight_number={self.flight_number})>'
