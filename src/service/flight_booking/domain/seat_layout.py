"""
Seat grid layout

Pure layout rules for turning a flight's capacity into seat records. Storage
and idempotence live in the SeatGenerator service.
"""

from src.platform.exception.exceptions import DomainError
from src.service.flight_booking.domain.entity.flight_entity import MAX_CAPACITY, MIN_CAPACITY
from src.service.flight_booking.domain.entity.seat_entity import Seat
from src.service.flight_booking.domain.enum.seat_status import FareClass, SeatStatus


SEAT_COLUMNS = 'ABCDEF'
BUSINESS_CLASS_ROWS = 3


def fare_class_for_row(row: int) -> FareClass:
    return FareClass.BUSINESS if row <= BUSINESS_CLASS_ROWS else FareClass.ECONOMY


def build_seat_layout(*, flight_id: int, capacity: int) -> list[Seat]:
    """
    Exactly `capacity` seats, six per row from row 1; the last row is partial
    when capacity is not a multiple of six.

    >>> [s.seat_number for s in build_seat_layout(flight_id=1, capacity=8)]
    ['1A', '1B', '1C', '1D', '1E', '1F', '2A', '2B']
    """
    if not MIN_CAPACITY <= capacity <= MAX_CAPACITY:
        raise DomainError(f'Capacity must be between {MIN_CAPACITY} and {MAX_CAPACITY}')

    seats = []
    for index in range(capacity):
        row, column_index = divmod(index, len(SEAT_COLUMNS))
        row += 1
        column = SEAT_COLUMNS[column_index]
        seats.append(
            Seat(
                flight_id=flight_id,
                seat_number=f'{row}{column}',
                row=row,
                column=column,
                fare_class=fare_class_for_row(row),
                status=SeatStatus.AVAILABLE,
            )
        )
    return seats
