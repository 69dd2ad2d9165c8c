from src.service.flight_booking.driven_adapter.model.booking_model import BookingModel
from src.service.flight_booking.driven_adapter.model.flight_model import FlightModel
from src.service.flight_booking.driven_adapter.model.seat_model import SeatModel
from src.service.flight_booking.driven_adapter.model.user_model import UserModel

__all__ = ['BookingModel', 'FlightModel', 'SeatModel', 'UserModel']
