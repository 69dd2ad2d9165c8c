from datetime import timedelta

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.flight_booking.domain.entity.booking_entity import Booking
from src.service.flight_booking.domain.enum.booking_status import BOOKING_TRANSITIONS, BookingStatus
from src.service.flight_booking.domain.value_object.baggage_policy import BaggagePolicy
from test.service.flight_booking.unit.helpers import NOW, make_booking, make_passenger


LATER = NOW + timedelta(minutes=5)


@pytest.mark.unit
class TestBookingCreate:
    def test_new_booking_is_pending_with_uuid7(self) -> None:
        booking = Booking.create(
            reservation_code='AL-2026-ABC123',
            user_id=2,
            flight_id=1,
            seat_id=7,
            passenger=make_passenger(),
            baggage=BaggagePolicy(),
            total_price=2000,
            now=NOW,
        )

        assert booking.status == BookingStatus.PENDING
        assert str(booking.id)[14] == '7'  # UUID7
        assert booking.created_at == NOW
        assert booking.confirmed_at is None

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(DomainError, match='cannot be negative'):
            Booking.create(
                reservation_code='AL-2026-ABC123',
                user_id=2,
                flight_id=1,
                seat_id=7,
                passenger=make_passenger(),
                baggage=BaggagePolicy(),
                total_price=-1,
                now=NOW,
            )


@pytest.mark.unit
class TestBookingTransitions:
    def test_confirm_pending(self) -> None:
        confirmed = make_booking().confirm(payment_method='Card (simulated)', now=LATER)

        assert confirmed.status == BookingStatus.CONFIRMED
        assert confirmed.payment_method == 'Card (simulated)'
        assert confirmed.confirmed_at == LATER
        assert confirmed.updated_at == LATER

    @pytest.mark.parametrize(
        'status', [BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.COMPLETED]
    )
    def test_confirm_requires_pending(self, status: BookingStatus) -> None:
        with pytest.raises(DomainError, match='Booking is not pending'):
            make_booking(status=status).confirm(payment_method='Card', now=LATER)

    def test_cancel_confirmed(self) -> None:
        cancelled = make_booking(status=BookingStatus.CONFIRMED).cancel(now=LATER)

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.cancelled_at == LATER

    @pytest.mark.parametrize(
        'status', [BookingStatus.PENDING, BookingStatus.CANCELLED, BookingStatus.COMPLETED]
    )
    def test_cancel_requires_confirmed(self, status: BookingStatus) -> None:
        with pytest.raises(DomainError, match='Only confirmed bookings can be cancelled'):
            make_booking(status=status).cancel(now=LATER)

    def test_expire_pending(self) -> None:
        expired = make_booking().expire(now=LATER)

        assert expired.status == BookingStatus.CANCELLED
        assert expired.cancelled_at == LATER

    def test_cancelled_is_terminal(self) -> None:
        booking = make_booking(status=BookingStatus.CANCELLED)

        for target in BookingStatus:
            with pytest.raises(DomainError, match='cannot move from'):
                booking.transition_to(target, now=LATER)

    def test_completed_is_never_a_target(self) -> None:
        assert all(
            BookingStatus.COMPLETED not in targets for targets in BOOKING_TRANSITIONS.values()
        )

    def test_transitions_do_not_mutate_original(self) -> None:
        booking = make_booking()

        booking.confirm(payment_method='Card', now=LATER)

        assert booking.status == BookingStatus.PENDING

    def test_ownership(self) -> None:
        booking = make_booking(user_id=2)

        assert booking.is_owned_by(2)
        assert not booking.is_owned_by(3)
