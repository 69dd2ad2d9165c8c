from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.service.flight_booking.app.command.create_flight_use_case import CreateFlightUseCase
from src.service.flight_booking.app.command.delete_flight_use_case import DeleteFlightUseCase
from src.service.flight_booking.app.command.update_flight_use_case import UpdateFlightUseCase
from src.service.flight_booking.app.query.search_flights_use_case import SearchFlightsUseCase
from src.service.flight_booking.domain.enum.flight_status import FlightStatus
from src.service.flight_booking.domain.value_object.airport import Airport
from test.service.flight_booking.unit.helpers import CUN, MEX, NOW, FakeUnitOfWork, make_flight


@pytest.mark.unit
class TestCreateFlightUseCase:
    @pytest.mark.asyncio
    async def test_create(self) -> None:
        uow = FakeUnitOfWork()
        uow.flight_command_repo.exists_by_flight_number = AsyncMock(return_value=False)
        uow.flight_command_repo.create = AsyncMock(side_effect=lambda *, flight: flight)

        flight = await CreateFlightUseCase(uow=uow).create_flight(
            flight_number='am-1234',
            origin=MEX,
            destination=CUN,
            departure_at=NOW + timedelta(days=2),
            arrival_at=NOW + timedelta(days=2, hours=2),
            duration='2h',
            price=2500,
            capacity=180,
        )

        assert flight.flight_number == 'AM-1234'
        assert flight.available_seats == 180
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_duplicate_flight_number(self) -> None:
        uow = FakeUnitOfWork()
        uow.flight_command_repo.exists_by_flight_number = AsyncMock(return_value=True)

        with pytest.raises(ConflictError, match='AM-1234 already exists'):
            await CreateFlightUseCase(uow=uow).create_flight(
                flight_number='AM-1234',
                origin=MEX,
                destination=CUN,
                departure_at=NOW + timedelta(days=2),
                arrival_at=NOW + timedelta(days=2, hours=2),
                duration='2h',
                price=2500,
                capacity=180,
            )

        uow.flight_command_repo.create.assert_not_awaited()


@pytest.mark.unit
class TestUpdateFlightUseCase:
    @pytest.fixture
    def uow(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        uow.flight_command_repo.get_by_id = AsyncMock(return_value=make_flight(capacity=12))
        uow.flight_command_repo.exists_by_flight_number = AsyncMock(return_value=False)
        uow.flight_command_repo.update = AsyncMock(side_effect=lambda *, flight: flight)
        uow.seat_command_repo.count_by_flight = AsyncMock(return_value=0)
        return uow

    @pytest.mark.asyncio
    async def test_partial_update(self, uow: FakeUnitOfWork) -> None:
        flight = await UpdateFlightUseCase(uow=uow).update_flight(
            flight_id=1, changes={'price': 1800, 'duration': '3h'}, now=NOW
        )

        assert flight.price == 1800
        assert flight.duration == '3h 0m'
        assert flight.flight_number == 'AM-1234'

    @pytest.mark.asyncio
    async def test_capacity_frozen_once_seats_exist(self, uow: FakeUnitOfWork) -> None:
        uow.seat_command_repo.count_by_flight = AsyncMock(return_value=12)

        with pytest.raises(DomainError, match='Capacity cannot change'):
            await UpdateFlightUseCase(uow=uow).update_flight(
                flight_id=1, changes={'capacity': 30}, now=NOW
            )

        uow.flight_command_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_flight_number_taken(self, uow: FakeUnitOfWork) -> None:
        uow.flight_command_repo.exists_by_flight_number = AsyncMock(return_value=True)

        with pytest.raises(ConflictError):
            await UpdateFlightUseCase(uow=uow).update_flight(
                flight_id=1, changes={'flight_number': 'xy-999'}, now=NOW
            )

        uow.flight_command_repo.exists_by_flight_number.assert_awaited_once_with(
            flight_number='XY-999', exclude_flight_id=1
        )

    @pytest.mark.asyncio
    async def test_change_status(self, uow: FakeUnitOfWork) -> None:
        flight = await UpdateFlightUseCase(uow=uow).change_status(
            flight_id=1, status=FlightStatus.CANCELLED, now=NOW
        )

        assert flight.status == FlightStatus.CANCELLED
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_unknown_flight(self, uow: FakeUnitOfWork) -> None:
        uow.flight_command_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await UpdateFlightUseCase(uow=uow).change_status(
                flight_id=1, status=FlightStatus.CANCELLED, now=NOW
            )


@pytest.mark.unit
class TestDeleteFlightUseCase:
    @pytest.fixture
    def uow(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        uow.flight_command_repo.get_by_id = AsyncMock(return_value=make_flight())
        uow.booking_command_repo.count_by_flight = AsyncMock(return_value=0)
        return uow

    @pytest.mark.asyncio
    async def test_delete_flight_without_bookings(self, uow: FakeUnitOfWork) -> None:
        await DeleteFlightUseCase(uow=uow).delete_flight(flight_id=1)

        uow.seat_command_repo.delete_by_flight.assert_awaited_once_with(flight_id=1)
        uow.flight_command_repo.delete.assert_awaited_once_with(flight_id=1)
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_active_bookings_block_delete(self, uow: FakeUnitOfWork) -> None:
        uow.booking_command_repo.count_by_flight = AsyncMock(return_value=2)

        with pytest.raises(ConflictError, match='has active bookings'):
            await DeleteFlightUseCase(uow=uow).delete_flight(flight_id=1)

        uow.flight_command_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_booking_history_blocks_delete(self, uow: FakeUnitOfWork) -> None:
        uow.booking_command_repo.count_by_flight = AsyncMock(side_effect=[0, 3])

        with pytest.raises(ConflictError, match='booking history'):
            await DeleteFlightUseCase(uow=uow).delete_flight(flight_id=1)


@pytest.mark.unit
class TestSearchFlightsUseCase:
    @pytest.mark.asyncio
    async def test_routes_group_dates(self) -> None:
        gdl = Airport(city='Guadalajara', code='GDL', name='Miguel Hidalgo')
        later = make_flight(flight_id=2, departure_at=NOW + timedelta(days=5))
        earlier = make_flight(flight_id=1, departure_at=NOW + timedelta(days=1))
        same_day = make_flight(flight_id=3, departure_at=NOW + timedelta(days=1, hours=3))
        other = make_flight(flight_id=4, departure_at=NOW + timedelta(days=2))
        other.origin = gdl
        repo = AsyncMock()
        repo.list_upcoming = AsyncMock(return_value=[later, earlier, same_day, other])

        routes = await SearchFlightsUseCase(flight_query_repo=repo).list_routes(now=NOW)

        assert [(r.origin.code, r.destination.code) for r in routes] == [
            ('GDL', 'CUN'),
            ('MEX', 'CUN'),
        ]
        assert routes[1].departure_dates == ['2026-03-02', '2026-03-06']

    @pytest.mark.asyncio
    async def test_search_passes_filters(self) -> None:
        repo = AsyncMock()
        repo.search = AsyncMock(return_value=[])

        await SearchFlightsUseCase(flight_query_repo=repo).search(
            origin_code='mex', destination_code='cun', now=NOW
        )

        repo.search.assert_awaited_once_with(
            origin_code='mex', destination_code='cun', departure_date=None, now=NOW
        )
