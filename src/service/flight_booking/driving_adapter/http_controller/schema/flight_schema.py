from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from src.service.flight_booking.domain.entity.flight_entity import MAX_CAPACITY, MAX_PRICE, Flight
from src.service.flight_booking.domain.enum.flight_status import FlightStatus, RouteType
from src.service.flight_booking.domain.value_object.airport import Airport
from src.service.flight_booking.domain.value_object.baggage_policy import (
    BaggagePolicy,
    CarryOnAllowance,
    CheckedAllowance,
)


CLOCK_TIME_REGEX = r'^([01]?\d|2[0-3]):[0-5]\d$'


class AirportSchema(BaseModel):
    city: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., pattern=r'^[A-Za-z]{3}$')
    name: str = Field(..., min_length=1, max_length=200)

    def to_value_object(self) -> Airport:
        return Airport(city=self.city, code=self.code, name=self.name)

    @classmethod
    def from_value_object(cls, airport: Airport) -> 'AirportSchema':
        return cls(city=airport.city, code=airport.code, name=airport.name)


class CarryOnSchema(BaseModel):
    allowed: bool = True
    weight_kg: float = Field(10, ge=0)
    dimensions: str = '55x40x20 cm'


class CheckedSchema(BaseModel):
    allowed: bool = True
    weight_kg: float = Field(23, ge=0)
    pieces: int = Field(1, ge=0)
    extra_piece_price: int = Field(500, ge=0)


class BaggageSchema(BaseModel):
    carry_on: CarryOnSchema = Field(default_factory=CarryOnSchema)
    checked: CheckedSchema = Field(default_factory=CheckedSchema)

    def to_value_object(self) -> BaggagePolicy:
        return BaggagePolicy(
            carry_on=CarryOnAllowance(**self.carry_on.model_dump()),
            checked=CheckedAllowance(**self.checked.model_dump()),
        )

    @classmethod
    def from_value_object(cls, baggage: BaggagePolicy) -> 'BaggageSchema':
        return cls.model_validate(baggage.to_dict())


class FlightCreateRequest(BaseModel):
    flight_number: str = Field(..., pattern=r'^[A-Za-z]{2}-\d{3,4}$')
    airline: str = Field('AeroLambda', min_length=1, max_length=100)
    origin: AirportSchema
    destination: AirportSchema
    departure_date: date
    departure_time: str = Field(..., pattern=CLOCK_TIME_REGEX)
    arrival_date: date
    arrival_time: str = Field(..., pattern=CLOCK_TIME_REGEX)
    duration: str = Field(..., min_length=1, max_length=20)
    price: int = Field(..., gt=0, le=MAX_PRICE)
    capacity: int = Field(..., ge=1, le=MAX_CAPACITY)
    status: FlightStatus = FlightStatus.SCHEDULED
    route_type: RouteType = RouteType.DIRECT
    baggage: Optional[BaggageSchema] = None

    class Config:
        json_schema_extra = {
            'example': {
                'flight_number': 'AM-1234',
                'origin': {'city': 'Mexico City', 'code': 'MEX', 'name': 'Benito Juárez'},
                'destination': {'city': 'Cancún', 'code': 'CUN', 'name': 'Cancún Intl'},
                'departure_date': '2026-03-01',
                'departure_time': '08:30',
                'arrival_date': '2026-03-01',
                'arrival_time': '11:00',
                'duration': '2h 30m',
                'price': 2500,
                'capacity': 180,
            }
        }


class FlightUpdateRequest(BaseModel):
    """Every field optional; a schedule change sends date and time together."""

    flight_number: Optional[str] = Field(None, pattern=r'^[A-Za-z]{2}-\d{3,4}$')
    airline: Optional[str] = Field(None, min_length=1, max_length=100)
    origin: Optional[AirportSchema] = None
    destination: Optional[AirportSchema] = None
    departure_date: Optional[date] = None
    departure_time: Optional[str] = Field(None, pattern=CLOCK_TIME_REGEX)
    arrival_date: Optional[date] = None
    arrival_time: Optional[str] = Field(None, pattern=CLOCK_TIME_REGEX)
    duration: Optional[str] = Field(None, min_length=1, max_length=20)
    price: Optional[int] = Field(None, gt=0, le=MAX_PRICE)
    capacity: Optional[int] = Field(None, ge=1, le=MAX_CAPACITY)
    route_type: Optional[RouteType] = None
    baggage: Optional[BaggageSchema] = None

    @model_validator(mode='after')
    def check_schedule_pairs(self) -> 'FlightUpdateRequest':
        if (self.departure_date is None) != (self.departure_time is None):
            raise ValueError('departure_date and departure_time must be sent together')
        if (self.arrival_date is None) != (self.arrival_time is None):
            raise ValueError('arrival_date and arrival_time must be sent together')
        return self


class FlightStatusRequest(BaseModel):
    status: FlightStatus

    class Config:
        json_schema_extra = {'example': {'status': 'cancelled'}}


class FlightResponse(BaseModel):
    id: int
    flight_number: str
    airline: str
    origin: AirportSchema
    destination: AirportSchema
    departure_at: datetime
    arrival_at: datetime
    duration: str
    price: int
    capacity: int
    available_seats: int
    status: FlightStatus
    route_type: RouteType
    baggage: BaggageSchema
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, flight: Flight) -> 'FlightResponse':
        return cls(
            id=flight.id or 0,
            flight_number=flight.flight_number,
            airline=flight.airline,
            origin=AirportSchema.from_value_object(flight.origin),
            destination=AirportSchema.from_value_object(flight.destination),
            departure_at=flight.departure_at,
            arrival_at=flight.arrival_at,
            duration=flight.duration,
            price=flight.price,
            capacity=flight.capacity,
            available_seats=flight.available_seats,
            status=flight.status,
            route_type=flight.route_type,
            baggage=BaggageSchema.from_value_object(flight.baggage),
            created_at=flight.created_at,
            updated_at=flight.updated_at,
        )


class FlightPageResponse(BaseModel):
    items: List[FlightResponse]
    total: int
    page: int
    limit: int
    pages: int


class FlightRouteResponse(BaseModel):
    origin: AirportSchema
    destination: AirportSchema
    departure_dates: List[str]

    class Config:
        json_schema_extra = {
            'example': {
                'origin': {'city': 'Mexico City', 'code': 'MEX', 'name': 'Benito Juárez'},
                'destination': {'city': 'Cancún', 'code': 'CUN', 'name': 'Cancún Intl'},
                'departure_dates': ['2026-03-01', '2026-03-04'],
            }
        }
