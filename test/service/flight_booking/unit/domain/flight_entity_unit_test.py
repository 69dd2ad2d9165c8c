from datetime import date, datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.flight_booking.domain.entity.flight_entity import (
    Flight,
    combine_date_and_clock,
    normalize_duration,
)
from src.service.flight_booking.domain.enum.flight_status import FlightStatus
from src.service.flight_booking.domain.enum.seat_status import FareClass
from test.service.flight_booking.unit.helpers import CUN, MEX, NOW, make_flight


def _create(**overrides) -> Flight:
    fields = {
        'flight_number': 'am-1234',
        'origin': MEX,
        'destination': CUN,
        'departure_at': NOW + timedelta(days=3),
        'arrival_at': NOW + timedelta(days=3, hours=2),
        'duration': '2h',
        'price': 2500,
        'capacity': 180,
    }
    fields.update(overrides)
    return Flight.create(**fields)


@pytest.mark.unit
class TestNormalizeDuration:
    @pytest.mark.parametrize(
        'raw, expected',
        [
            ('2h 30m', '2h 30m'),
            ('2h30m', '2h 30m'),
            ('5h', '5h 0m'),
            ('45m', '0h 45m'),
            ('  1H 5M ', '1h 5m'),
        ],
    )
    def test_accepted_formats(self, raw: str, expected: str) -> None:
        assert normalize_duration(raw) == expected

    @pytest.mark.parametrize('raw', ['', 'abc', '2 hours', '150'])
    def test_rejected_formats(self, raw: str) -> None:
        with pytest.raises(DomainError, match='Invalid duration format'):
            normalize_duration(raw)


@pytest.mark.unit
class TestCombineDateAndClock:
    def test_builds_utc_datetime(self) -> None:
        assert combine_date_and_clock(date(2026, 3, 1), '14:30') == datetime(
            2026, 3, 1, 14, 30, tzinfo=timezone.utc
        )

    def test_rejects_bad_clock(self) -> None:
        with pytest.raises(DomainError, match='Invalid time format'):
            combine_date_and_clock(date(2026, 3, 1), '25:00')


@pytest.mark.unit
class TestFlightCreate:
    def test_create_normalizes_and_fills_counter(self) -> None:
        flight = _create()

        assert flight.flight_number == 'AM-1234'
        assert flight.duration == '2h 0m'
        assert flight.available_seats == 180
        assert flight.status == FlightStatus.SCHEDULED

    @pytest.mark.parametrize('flight_number', ['A-1234', 'AM1234', 'AM-12', 'AM-12345'])
    def test_invalid_flight_number(self, flight_number: str) -> None:
        with pytest.raises(DomainError, match='Invalid flight number'):
            _create(flight_number=flight_number)

    @pytest.mark.parametrize('capacity', [0, 301])
    def test_capacity_out_of_range(self, capacity: int) -> None:
        with pytest.raises(DomainError, match='Capacity must be between 1 and 300'):
            _create(capacity=capacity)

    @pytest.mark.parametrize('price', [0, -1, 100_001])
    def test_price_out_of_range(self, price: int) -> None:
        with pytest.raises(DomainError, match='Price must be greater than 0'):
            _create(price=price)

    def test_arrival_must_follow_departure(self) -> None:
        with pytest.raises(DomainError, match='Arrival must be after departure'):
            _create(arrival_at=NOW + timedelta(days=3))


@pytest.mark.unit
class TestFlightRules:
    def test_business_seat_costs_double(self) -> None:
        flight = make_flight(price=1000)

        assert flight.price_for(FareClass.ECONOMY) == 1000
        assert flight.price_for(FareClass.BUSINESS) == 2000

    @pytest.mark.parametrize(
        'status', [FlightStatus.CANCELLED, FlightStatus.IN_FLIGHT, FlightStatus.COMPLETED]
    )
    def test_only_scheduled_flights_are_bookable(self, status: FlightStatus) -> None:
        with pytest.raises(DomainError, match='not open for booking'):
            make_flight(status=status).ensure_bookable(seats_requested=1)

    def test_not_enough_seats_left(self) -> None:
        with pytest.raises(DomainError, match='has only 1 seats left'):
            make_flight(available_seats=1).ensure_bookable(seats_requested=2)

    def test_cancellation_allowed_exactly_at_cutoff(self) -> None:
        flight = make_flight(departure_at=NOW + timedelta(hours=24))

        flight.ensure_cancellation_window(now=NOW, cutoff=timedelta(hours=24))

    def test_cancellation_refused_one_second_inside_cutoff(self) -> None:
        flight = make_flight(departure_at=NOW + timedelta(hours=24) - timedelta(seconds=1))

        with pytest.raises(DomainError, match='at least 24 hours before departure'):
            flight.ensure_cancellation_window(now=NOW, cutoff=timedelta(hours=24))

    def test_capacity_change_shifts_available_seats(self) -> None:
        flight = make_flight(capacity=12, available_seats=10)

        updated = flight.update(now=NOW, capacity=20)

        assert updated.capacity == 20
        assert updated.available_seats == 18

    def test_capacity_cannot_drop_below_sold_seats(self) -> None:
        flight = make_flight(capacity=12, available_seats=2)

        with pytest.raises(DomainError, match='below the seats already sold'):
            flight.update(now=NOW, capacity=5)

    def test_change_status_keeps_other_fields(self) -> None:
        flight = make_flight()

        cancelled = flight.change_status(status=FlightStatus.CANCELLED, now=NOW)

        assert cancelled.status == FlightStatus.CANCELLED
        assert cancelled.flight_number == flight.flight_number
        assert flight.status == FlightStatus.SCHEDULED
