from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.service.flight_booking.app.dto.booking_views import SeatMap
from src.service.flight_booking.domain.entity.seat_entity import Seat
from src.service.flight_booking.domain.enum.seat_status import FareClass, SeatStatus
from src.service.flight_booking.driving_adapter.http_controller.schema.flight_schema import (
    AirportSchema,
)


class SeatResponse(BaseModel):
    id: int
    flight_id: int
    seat_number: str
    row: int
    column: str
    fare_class: FareClass
    status: SeatStatus
    hold_expires_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            'example': {
                'id': 7,
                'flight_id': 1,
                'seat_number': '2A',
                'row': 2,
                'column': 'A',
                'fare_class': 'business',
                'status': 'held',
                'hold_expires_at': '2026-03-01T08:10:00Z',
            }
        }

    @classmethod
    def from_entity(cls, seat: Seat) -> 'SeatResponse':
        return cls(
            id=seat.id or 0,
            flight_id=seat.flight_id,
            seat_number=seat.seat_number,
            row=seat.row,
            column=seat.column,
            fare_class=seat.fare_class,
            status=seat.status,
            hold_expires_at=seat.hold_expires_at,
        )


class SeatMapFlight(BaseModel):
    id: int
    flight_number: str
    origin: AirportSchema
    destination: AirportSchema
    departure_at: datetime
    price: int
    capacity: int
    available_seats: int
    status: str


class SeatCounts(BaseModel):
    total: int
    available: int
    held: int
    occupied: int


class SeatMapResponse(BaseModel):
    flight: SeatMapFlight
    seats: List[SeatResponse]
    counts: SeatCounts

    @classmethod
    def from_view(cls, seat_map: SeatMap) -> 'SeatMapResponse':
        flight = seat_map.flight
        return cls(
            flight=SeatMapFlight(
                id=flight.id or 0,
                flight_number=flight.flight_number,
                origin=AirportSchema.from_value_object(flight.origin),
                destination=AirportSchema.from_value_object(flight.destination),
                departure_at=flight.departure_at,
                price=flight.price,
                capacity=flight.capacity,
                available_seats=flight.available_seats,
                status=flight.status.value,
            ),
            seats=[SeatResponse.from_entity(seat) for seat in seat_map.seats],
            counts=SeatCounts(
                total=len(seat_map.seats),
                available=seat_map.count(SeatStatus.AVAILABLE),
                held=seat_map.count(SeatStatus.HELD),
                occupied=seat_map.count(SeatStatus.OCCUPIED),
            ),
        )
