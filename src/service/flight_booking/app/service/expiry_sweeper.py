from datetime import datetime
from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.flight_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.flight_booking.app.interface.i_seat_command_repo import ISeatCommandRepo


class ExpirySweeper:
    """
    Releases seats whose hold ran out and cancels the pending bookings that
    were waiting on them.

    Runs on seat-map reads and before booking creation; there is no timer.
    """

    @Logger.io
    async def sweep(
        self,
        *,
        now: datetime,
        seat_command_repo: ISeatCommandRepo,
        booking_command_repo: IBookingCommandRepo,
        flight_id: Optional[int] = None,
    ) -> int:
        released_for = await seat_command_repo.release_expired_holds(now=now, flight_id=flight_id)
        if not released_for:
            return 0

        orphaned = [booking_id for booking_id in released_for if booking_id is not None]
        expired_bookings = 0
        if orphaned:
            expired_bookings = await booking_command_repo.expire_pending(
                booking_ids=orphaned, now=now
            )

        metrics.record_expired_holds(count=len(released_for))
        if expired_bookings:
            metrics.record_transition(
                from_status='pending', to_status='cancelled', count=expired_bookings
            )
        Logger.base.info(
            f'🧹 [SWEEP] Released {len(released_for)} expired holds, '
            f'expired {expired_bookings} pending bookings (flight={flight_id})'
        )
        return len(released_for)
