"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.flight_booking.app.command import (
    create_booking_use_case,
    create_user_use_case,
    hold_seat_use_case,
)
from src.service.flight_booking.app.query import (
    get_booking_use_case,
    get_seat_map_use_case,
    list_bookings_use_case,
    list_flights_use_case,
    search_flights_use_case,
)
from src.service.flight_booking.driving_adapter.http_controller import user_controller
from src.service.flight_booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    create_user_use_case,
    hold_seat_use_case,
    get_booking_use_case,
    get_seat_map_use_case,
    list_bookings_use_case,
    list_flights_use_case,
    search_flights_use_case,
    role_auth,
    user_controller,
]
