"""
Unit tests for ConfirmPaymentUseCase and CancelBookingUseCase

Test Focus:
1. confirm: pending → confirmed, seat occupied, flight counter −1
2. confirm on a run-out hold: booking expired, seat freed, DomainError
3. cancel: confirmed → cancelled, seat freed, flight counter +1
4. cancel respects the 24h cutoff (boundary inclusive)
5. Ownership checks on both
6. Cancel logs a warning when the seat or the counter was already released
"""

from collections.abc import Iterator
from datetime import timedelta
from typing import List
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import DomainError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io_config import custom_logger
from src.service.flight_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.flight_booking.app.command.confirm_payment_use_case import (
    ConfirmPaymentUseCase,
)
from src.service.flight_booking.domain.enum.booking_status import BookingStatus
from test.service.flight_booking.unit.helpers import NOW, FakeUnitOfWork, make_booking, make_flight


@pytest.fixture
def warning_lines() -> Iterator[List[str]]:
    lines: List[str] = []
    handler_id = custom_logger.add(
        lambda message: lines.append(str(message)), level='WARNING', format='{message}'
    )
    yield lines
    custom_logger.remove(handler_id)


@pytest.mark.unit
class TestConfirmPaymentUseCase:
    @pytest.fixture
    def uow(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        uow.booking_command_repo.get_by_id = AsyncMock(return_value=make_booking(user_id=2))
        uow.booking_command_repo.update_status = AsyncMock(return_value=True)
        uow.seat_command_repo.occupy = AsyncMock(return_value=True)
        uow.flight_command_repo.decrement_available_seats = AsyncMock(return_value=True)
        return uow

    @pytest.mark.asyncio
    async def test_confirm_pending_booking(self, uow: FakeUnitOfWork) -> None:
        # Act
        confirmed = await ConfirmPaymentUseCase(uow=uow).confirm_payment(
            booking_id=make_booking().id, user_id=2, payment_method='Visa', now=NOW
        )

        # Assert
        assert confirmed.status == BookingStatus.CONFIRMED
        assert confirmed.payment_method == 'Visa'
        assert confirmed.confirmed_at == NOW
        uow.seat_command_repo.occupy.assert_awaited_once()
        uow.booking_command_repo.update_status.assert_awaited_once_with(
            booking=confirmed, expected_status=BookingStatus.PENDING
        )
        uow.flight_command_repo.decrement_available_seats.assert_awaited_once_with(flight_id=1)
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_default_payment_method(self, uow: FakeUnitOfWork) -> None:
        confirmed = await ConfirmPaymentUseCase(uow=uow).confirm_payment(
            booking_id=make_booking().id, user_id=2, now=NOW
        )

        assert confirmed.payment_method == 'Card (simulated)'

    @pytest.mark.asyncio
    async def test_expired_hold_cancels_booking(self, uow: FakeUnitOfWork) -> None:
        """
        Given: the seat hold ran out, so the conditional occupy matches nothing
        When: the owner confirms payment
        Then: the booking is expired, its seat freed, and DomainError is raised
        """
        uow.seat_command_repo.occupy = AsyncMock(return_value=False)
        booking = make_booking(user_id=2)
        uow.booking_command_repo.get_by_id = AsyncMock(return_value=booking)

        with pytest.raises(DomainError, match='Seat hold has expired'):
            await ConfirmPaymentUseCase(uow=uow).confirm_payment(
                booking_id=booking.id, user_id=2, now=NOW
            )

        expired = uow.booking_command_repo.update_status.await_args.kwargs['booking']
        assert expired.status == BookingStatus.CANCELLED
        uow.seat_command_repo.free_from_booking.assert_awaited_once_with(
            seat_id=booking.seat_id, booking_id=booking.id
        )
        uow.flight_command_repo.decrement_available_seats.assert_not_awaited()
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_already_confirmed(self, uow: FakeUnitOfWork) -> None:
        uow.booking_command_repo.get_by_id = AsyncMock(
            return_value=make_booking(status=BookingStatus.CONFIRMED)
        )

        with pytest.raises(DomainError, match='Booking is not pending'):
            await ConfirmPaymentUseCase(uow=uow).confirm_payment(
                booking_id=make_booking().id, user_id=2, now=NOW
            )

        uow.seat_command_repo.occupy.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_status_change(self, uow: FakeUnitOfWork) -> None:
        uow.booking_command_repo.update_status = AsyncMock(return_value=False)

        with pytest.raises(DomainError, match='no longer pending'):
            await ConfirmPaymentUseCase(uow=uow).confirm_payment(
                booking_id=make_booking().id, user_id=2, now=NOW
            )

        assert uow.commits == 0

    @pytest.mark.asyncio
    async def test_not_owner(self, uow: FakeUnitOfWork) -> None:
        with pytest.raises(ForbiddenError):
            await ConfirmPaymentUseCase(uow=uow).confirm_payment(
                booking_id=make_booking().id, user_id=3, now=NOW
            )

    @pytest.mark.asyncio
    async def test_not_found(self, uow: FakeUnitOfWork) -> None:
        uow.booking_command_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='Booking not found'):
            await ConfirmPaymentUseCase(uow=uow).confirm_payment(
                booking_id=make_booking().id, user_id=2, now=NOW
            )


@pytest.mark.unit
class TestCancelBookingUseCase:
    @pytest.fixture
    def uow(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        uow.booking_command_repo.get_by_id = AsyncMock(
            return_value=make_booking(user_id=2, status=BookingStatus.CONFIRMED)
        )
        uow.booking_command_repo.update_status = AsyncMock(return_value=True)
        uow.flight_command_repo.get_by_id = AsyncMock(
            return_value=make_flight(departure_at=NOW + timedelta(days=3), available_seats=11)
        )
        uow.seat_command_repo.free_from_booking = AsyncMock(return_value=True)
        uow.flight_command_repo.increment_available_seats = AsyncMock(return_value=True)
        return uow

    @pytest.mark.asyncio
    async def test_cancel_confirmed_booking(self, uow: FakeUnitOfWork) -> None:
        booking = await CancelBookingUseCase(uow=uow).cancel_booking(
            booking_id=make_booking().id, user_id=2, now=NOW
        )

        assert booking.status == BookingStatus.CANCELLED
        assert booking.cancelled_at == NOW
        uow.booking_command_repo.update_status.assert_awaited_once_with(
            booking=booking, expected_status=BookingStatus.CONFIRMED
        )
        uow.seat_command_repo.free_from_booking.assert_awaited_once()
        uow.flight_command_repo.increment_available_seats.assert_awaited_once_with(flight_id=1)
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_cancel_exactly_24h_before_departure(self, uow: FakeUnitOfWork) -> None:
        uow.flight_command_repo.get_by_id = AsyncMock(
            return_value=make_flight(departure_at=NOW + timedelta(hours=24))
        )

        booking = await CancelBookingUseCase(uow=uow).cancel_booking(
            booking_id=make_booking().id, user_id=2, now=NOW
        )

        assert booking.status == BookingStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_cancel_inside_cutoff_refused(self, uow: FakeUnitOfWork) -> None:
        uow.flight_command_repo.get_by_id = AsyncMock(
            return_value=make_flight(
                departure_at=NOW + timedelta(hours=24) - timedelta(seconds=1)
            )
        )

        with pytest.raises(DomainError, match='at least 24 hours before departure'):
            await CancelBookingUseCase(uow=uow).cancel_booking(
                booking_id=make_booking().id, user_id=2, now=NOW
            )

        uow.booking_command_repo.update_status.assert_not_awaited()
        uow.flight_command_repo.increment_available_seats.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_pending_booking_cannot_be_cancelled(self, uow: FakeUnitOfWork) -> None:
        uow.booking_command_repo.get_by_id = AsyncMock(return_value=make_booking(user_id=2))

        with pytest.raises(DomainError, match='Only confirmed bookings can be cancelled'):
            await CancelBookingUseCase(uow=uow).cancel_booking(
                booking_id=make_booking().id, user_id=2, now=NOW
            )

    @pytest.mark.asyncio
    async def test_not_owner(self, uow: FakeUnitOfWork) -> None:
        with pytest.raises(ForbiddenError):
            await CancelBookingUseCase(uow=uow).cancel_booking(
                booking_id=make_booking().id, user_id=3, now=NOW
            )

    @pytest.mark.asyncio
    async def test_cancelled_twice(self, uow: FakeUnitOfWork) -> None:
        uow.booking_command_repo.update_status = AsyncMock(return_value=False)

        with pytest.raises(DomainError, match='no longer confirmed'):
            await CancelBookingUseCase(uow=uow).cancel_booking(
                booking_id=make_booking().id, user_id=2, now=NOW
            )

        uow.seat_command_repo.free_from_booking.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_op_seat_free_and_counter_are_logged(
        self, uow: FakeUnitOfWork, warning_lines: List[str]
    ) -> None:
        uow.seat_command_repo.free_from_booking = AsyncMock(return_value=False)
        uow.flight_command_repo.increment_available_seats = AsyncMock(return_value=False)

        booking = await CancelBookingUseCase(uow=uow).cancel_booking(
            booking_id=make_booking().id, user_id=2, now=NOW
        )

        assert booking.status == BookingStatus.CANCELLED
        assert uow.commits == 1
        assert any('nothing to free' in line for line in warning_lines)
        assert any('counter already at capacity' in line for line in warning_lines)
