from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.flight_booking.app.interface.i_flight_command_repo import IFlightCommandRepo
from src.service.flight_booking.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.flight_booking.domain.seat_layout import build_seat_layout


class SeatGenerator:
    """Lazily creates a flight's seat grid the first time it is needed."""

    @Logger.io
    async def ensure_seats(
        self,
        *,
        flight_id: int,
        flight_command_repo: IFlightCommandRepo,
        seat_command_repo: ISeatCommandRepo,
    ) -> int:
        """
        Create the seat grid if the flight has none.

        Idempotent: a flight that already has seats is left alone.

        Returns:
            Number of seats created (0 when they already existed)

        Raises:
            NotFoundError: flight does not exist
        """
        flight = await flight_command_repo.get_by_id(flight_id=flight_id)
        if not flight:
            raise NotFoundError('Flight not found')

        if await seat_command_repo.count_by_flight(flight_id=flight_id) > 0:
            return 0

        seats = build_seat_layout(flight_id=flight_id, capacity=flight.capacity)
        created = await seat_command_repo.bulk_create(seats=seats)
        metrics.record_seats_generated(count=created)
        Logger.base.info(f'💺 [SEATS] Generated {created} seats for flight {flight.flight_number}')
        return created
