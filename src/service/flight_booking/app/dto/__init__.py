from src.service.flight_booking.app.dto.booking_views import (
    BookingDetail,
    CreatedBookings,
    FlightFilter,
    FlightRoute,
    Page,
    SeatMap,
    SeatSelection,
)

__all__ = [
    'BookingDetail',
    'CreatedBookings',
    'FlightFilter',
    'FlightRoute',
    'Page',
    'SeatMap',
    'SeatSelection',
]
