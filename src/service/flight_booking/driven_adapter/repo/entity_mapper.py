"""Row <-> entity conversion shared by the command and query repositories"""

from typing import Any

from src.platform.types import to_std_uuid, to_utils_uuid
from src.service.flight_booking.domain.entity.booking_entity import Booking
from src.service.flight_booking.domain.entity.flight_entity import Flight
from src.service.flight_booking.domain.entity.seat_entity import Seat
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.domain.enum.booking_status import BookingStatus
from src.service.flight_booking.domain.enum.flight_status import FlightStatus, RouteType
from src.service.flight_booking.domain.enum.seat_status import FareClass, SeatStatus
from src.service.flight_booking.domain.enum.user_role import UserRole
from src.service.flight_booking.domain.value_object.airport import Airport
from src.service.flight_booking.domain.value_object.baggage_policy import BaggagePolicy
from src.service.flight_booking.domain.value_object.passenger import Passenger
from src.service.flight_booking.driven_adapter.model.booking_model import BookingModel
from src.service.flight_booking.driven_adapter.model.flight_model import FlightModel
from src.service.flight_booking.driven_adapter.model.seat_model import SeatModel
from src.service.flight_booking.driven_adapter.model.user_model import UserModel


def flight_to_entity(model: FlightModel) -> Flight:
    return Flight(
        id=model.id,
        flight_number=model.flight_number,
        airline=model.airline,
        origin=Airport(city=model.origin_city, code=model.origin_code, name=model.origin_airport),
        destination=Airport(
            city=model.destination_city,
            code=model.destination_code,
            name=model.destination_airport,
        ),
        departure_at=model.departure_at,
        arrival_at=model.arrival_at,
        duration=model.duration,
        price=model.price,
        capacity=model.capacity,
        available_seats=model.available_seats,
        status=FlightStatus(model.status),
        route_type=RouteType(model.route_type),
        baggage=BaggagePolicy.from_dict(model.baggage),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def flight_to_values(flight: Flight) -> dict[str, Any]:
    """Column values for insert/update; counters and timestamps included"""
    return {
        'flight_number': flight.flight_number,
        'airline': flight.airline,
        'origin_city': flight.origin.city,
        'origin_code': flight.origin.code,
        'origin_airport': flight.origin.name,
        'destination_city': flight.destination.city,
        'destination_code': flight.destination.code,
        'destination_airport': flight.destination.name,
        'departure_at': flight.departure_at,
        'arrival_at': flight.arrival_at,
        'duration': flight.duration,
        'price': flight.price,
        'capacity': flight.capacity,
        'available_seats': flight.available_seats,
        'status': flight.status.value,
        'route_type': flight.route_type.value,
        'baggage': flight.baggage.to_dict(),
    }


def seat_to_entity(model: SeatModel) -> Seat:
    return Seat(
        id=model.id,
        flight_id=model.flight_id,
        seat_number=model.seat_number,
        row=model.row_number,
        column=model.column_letter,
        fare_class=FareClass(model.fare_class),
        status=SeatStatus(model.status),
        hold_expires_at=model.hold_expires_at,
        booking_id=to_utils_uuid(model.booking_id) if model.booking_id else None,
    )


def seat_to_values(seat: Seat) -> dict[str, Any]:
    return {
        'flight_id': seat.flight_id,
        'seat_number': seat.seat_number,
        'row_number': seat.row,
        'column_letter': seat.column,
        'fare_class': seat.fare_class.value,
        'status': seat.status.value,
        'hold_expires_at': seat.hold_expires_at,
        'booking_id': to_std_uuid(seat.booking_id) if seat.booking_id else None,
    }


def booking_to_entity(model: BookingModel) -> Booking:
    return Booking(
        id=to_utils_uuid(model.id),  # stdlib uuid.UUID -> uuid_utils.UUID
        reservation_code=model.reservation_code,
        user_id=model.user_id,
        flight_id=model.flight_id,
        seat_id=model.seat_id,
        passenger=Passenger.from_dict(model.passenger),
        baggage=BaggagePolicy.from_dict(model.baggage),
        total_price=model.total_price,
        status=BookingStatus(model.status),
        payment_method=model.payment_method,
        created_at=model.created_at,
        updated_at=model.updated_at,
        confirmed_at=model.confirmed_at,
        cancelled_at=model.cancelled_at,
    )


def booking_to_model(booking: Booking) -> BookingModel:
    return BookingModel(
        id=to_std_uuid(booking.id),
        reservation_code=booking.reservation_code,
        user_id=booking.user_id,
        flight_id=booking.flight_id,
        seat_id=booking.seat_id,
        passenger=booking.passenger.to_dict(),
        baggage=booking.baggage.to_dict(),
        total_price=booking.total_price,
        status=booking.status.value,
        payment_method=booking.payment_method,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
        confirmed_at=booking.confirmed_at,
        cancelled_at=booking.cancelled_at,
    )


def user_to_entity(model: UserModel) -> UserEntity:
    return UserEntity(
        id=model.id,
        email=model.email,
        name=model.name,
        role=UserRole(model.role),
        is_active=model.is_active,
        created_at=model.created_at,
    )
