from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from src.platform.types import UtilsUUID7
from src.service.flight_booking.app.dto.booking_views import (
    BookingDetail,
    CreatedBookings,
    Page,
    SeatSelection,
)
from src.service.flight_booking.domain.entity.booking_entity import Booking
from src.service.flight_booking.domain.enum.booking_status import BookingStatus
from src.service.flight_booking.domain.value_object.passenger import DocumentType, Passenger
from src.service.flight_booking.driving_adapter.http_controller.schema.flight_schema import (
    AirportSchema,
    BaggageSchema,
)
from src.service.flight_booking.driving_adapter.http_controller.schema.seat_schema import (
    SeatResponse,
)


MAX_SEATS_PER_BOOKING = 9


class PassengerSchema(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    document_type: DocumentType
    document_number: str = Field(..., min_length=3, max_length=30)

    def to_value_object(self) -> Passenger:
        return Passenger(
            first_name=self.first_name,
            last_name=self.last_name,
            email=str(self.email),
            phone=self.phone,
            document_type=self.document_type,
            document_number=self.document_number,
        )


class BookingCreateRequest(BaseModel):
    """
    Single seat: `seat_id` + `passenger`.
    Batch: `seats` + `passengers`, paired by position.
    """

    flight_id: int = Field(..., gt=0)
    seat_id: Optional[int] = Field(None, gt=0)
    passenger: Optional[PassengerSchema] = None
    seats: Optional[List[int]] = Field(None, max_length=MAX_SEATS_PER_BOOKING)
    passengers: Optional[List[PassengerSchema]] = Field(None, max_length=MAX_SEATS_PER_BOOKING)

    class Config:
        json_schema_extra = {
            'examples': [
                {
                    'flight_id': 1,
                    'seat_id': 7,
                    'passenger': {
                        'first_name': 'Ana',
                        'last_name': 'López',
                        'email': 'ana@example.com',
                        'document_type': 'passport',
                        'document_number': 'G12345678',
                    },
                },
                {
                    'flight_id': 1,
                    'seats': [7, 8],
                    'passengers': [
                        {
                            'first_name': 'Ana',
                            'last_name': 'López',
                            'email': 'ana@example.com',
                            'document_type': 'passport',
                            'document_number': 'G12345678',
                        },
                        {
                            'first_name': 'Luis',
                            'last_name': 'López',
                            'email': 'luis@example.com',
                            'document_type': 'national_id',
                            'document_number': 'LOPL900101',
                        },
                    ],
                },
            ]
        }

    @model_validator(mode='after')
    def check_seat_passenger_pairs(self) -> 'BookingCreateRequest':
        single = self.seat_id is not None or self.passenger is not None
        batch = self.seats is not None or self.passengers is not None
        if single and batch:
            raise ValueError('Send either seat_id/passenger or seats/passengers, not both')
        if single:
            if self.seat_id is None or self.passenger is None:
                raise ValueError('seat_id and passenger are both required')
            return self
        if not self.seats or not self.passengers:
            raise ValueError('At least one seat and passenger are required')
        if len(self.seats) != len(self.passengers):
            raise ValueError('The number of seats and passengers must match')
        return self

    def to_selections(self) -> List[SeatSelection]:
        if self.seat_id is not None and self.passenger is not None:
            return [
                SeatSelection(seat_id=self.seat_id, passenger=self.passenger.to_value_object())
            ]
        return [
            SeatSelection(seat_id=seat_id, passenger=passenger.to_value_object())
            for seat_id, passenger in zip(self.seats or [], self.passengers or [], strict=True)
        ]


class PaymentRequest(BaseModel):
    booking_id: UtilsUUID7
    payment_method: Optional[str] = Field(None, min_length=1, max_length=50)

    class Config:
        json_schema_extra = {
            'example': {
                'booking_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'payment_method': 'Card (simulated)',
            }
        }


class PassengerResponse(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    document_type: DocumentType
    document_number: str


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'reservation_code': 'AL-2026-7QX2KD',
                'user_id': 2,
                'flight_id': 1,
                'seat_id': 7,
                'total_price': 5000,
                'status': 'pending',
                'created_at': '2026-01-10T10:30:00Z',
            }
        },
    }

    id: UtilsUUID7  # UUID7
    reservation_code: str
    user_id: int
    flight_id: int
    seat_id: int
    passenger: PassengerResponse
    baggage: BaggageSchema
    total_price: int
    status: BookingStatus
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            reservation_code=booking.reservation_code,
            user_id=booking.user_id,
            flight_id=booking.flight_id,
            seat_id=booking.seat_id,
            passenger=PassengerResponse.model_validate(booking.passenger.to_dict()),
            baggage=BaggageSchema.from_value_object(booking.baggage),
            total_price=booking.total_price,
            status=booking.status,
            payment_method=booking.payment_method,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            confirmed_at=booking.confirmed_at,
            cancelled_at=booking.cancelled_at,
        )


class CreateBookingResponse(BaseModel):
    bookings: List[BookingResponse]
    seats: List[SeatResponse]
    total_price: int
    hold_expires_at: datetime

    @classmethod
    def from_view(cls, created: CreatedBookings) -> 'CreateBookingResponse':
        return cls(
            bookings=[BookingResponse.from_entity(booking) for booking in created.bookings],
            seats=[SeatResponse.from_entity(seat) for seat in created.seats],
            total_price=created.total_price,
            hold_expires_at=created.hold_expires_at,
        )


class BookingDetailResponse(BookingResponse):
    """Booking with the flight and seat fields shown in booking lists"""

    flight_number: str
    origin: AirportSchema
    destination: AirportSchema
    departure_at: datetime
    arrival_at: datetime
    seat_number: str
    fare_class: str

    @classmethod
    def from_view(cls, detail: BookingDetail) -> 'BookingDetailResponse':
        return cls(
            **BookingResponse.from_entity(detail.booking).model_dump(),
            flight_number=detail.flight_number,
            origin=AirportSchema.from_value_object(detail.origin),
            destination=AirportSchema.from_value_object(detail.destination),
            departure_at=detail.departure_at,
            arrival_at=detail.arrival_at,
            seat_number=detail.seat_number,
            fare_class=detail.fare_class,
        )


class BookingPageResponse(BaseModel):
    items: List[BookingDetailResponse]
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def from_page(cls, page: Page[BookingDetail]) -> 'BookingPageResponse':
        return cls(
            items=[BookingDetailResponse.from_view(detail) for detail in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            pages=page.pages,
        )
