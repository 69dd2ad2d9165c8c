from datetime import datetime, timedelta, timezone
from typing import List, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import DomainError, NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.flight_booking.app.dto.booking_views import CreatedBookings, SeatSelection
from src.service.flight_booking.app.service.expiry_sweeper import ExpirySweeper
from src.service.flight_booking.domain.entity.booking_entity import Booking
from src.service.flight_booking.domain.entity.seat_entity import Seat
from src.service.flight_booking.domain.enum.seat_status import SeatStatus
from src.service.flight_booking.domain.reservation_code import ReservationCodeGenerator


class CreateBookingUseCase:
    """
    Create one pending booking per (seat, passenger) pair.

    Flow:
    1. Reject malformed batches before touching the database
    2. Sweep the flight's expired holds
    3. Check flight and every seat up front (fail fast, no partial writes)
    4. Per pair: reservation code → insert booking → conditional seat claim
    5. Commit once; a lost seat claim rolls the whole batch back

    The flight's available_seats counter is not touched here; it moves on
    payment confirmation.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        expiry_sweeper: ExpirySweeper,
        reservation_code_generator: ReservationCodeGenerator,
    ) -> None:
        self.uow = uow
        self.expiry_sweeper = expiry_sweeper
        self.reservation_code_generator = reservation_code_generator
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        expiry_sweeper: ExpirySweeper = Depends(Provide[Container.expiry_sweeper]),
        reservation_code_generator: ReservationCodeGenerator = Depends(
            Provide[Container.reservation_code_generator]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            expiry_sweeper=expiry_sweeper,
            reservation_code_generator=reservation_code_generator,
        )

    @staticmethod
    def _validate_selections(selections: List[SeatSelection]) -> None:
        if not selections:
            raise ValidationError(
                'At least one seat is required',
                errors=[{'field': 'seats', 'message': 'At least one seat is required'}],
            )
        seat_ids = [selection.seat_id for selection in selections]
        if len(set(seat_ids)) != len(seat_ids):
            raise ValidationError(
                'Duplicate seats in request',
                errors=[{'field': 'seats', 'message': 'Each seat can only be booked once'}],
            )

    @Logger.io
    async def create_booking(
        self,
        *,
        user_id: int,
        flight_id: int,
        selections: List[SeatSelection],
        now: Optional[datetime] = None,
    ) -> CreatedBookings:
        """
        Raises:
            ValidationError: empty batch or duplicate seats
            NotFoundError: flight or seat missing
            DomainError: flight not bookable, seat taken or on another flight
            GenerationExhaustedError: no free reservation code
        """
        self._validate_selections(selections)
        now = now or datetime.now(timezone.utc)
        metrics.record_batch_size(size=len(selections))

        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'user.id': user_id,
                'flight.id': flight_id,
                'booking.seat_count': len(selections),
            },
        ):
            async with self.uow:
                await self.expiry_sweeper.sweep(
                    now=now,
                    seat_command_repo=self.uow.seat_command_repo,
                    booking_command_repo=self.uow.booking_command_repo,
                    flight_id=flight_id,
                )
                await self.uow.commit()

                flight = await self.uow.flight_command_repo.get_by_id(flight_id=flight_id)
                if not flight:
                    raise NotFoundError('Flight not found')
                try:
                    flight.ensure_bookable(seats_requested=len(selections))
                except DomainError:
                    metrics.record_rejection(operation='create', reason='flight_not_bookable')
                    raise

                # Step 1: check the whole batch before any write
                seats: List[Seat] = []
                for selection in selections:
                    seat = await self.uow.seat_command_repo.get_by_id(seat_id=selection.seat_id)
                    if not seat:
                        raise NotFoundError(f'Seat {selection.seat_id} not found')
                    if seat.flight_id != flight.id:
                        raise DomainError(
                            f'Seat {seat.seat_number} does not belong to flight {flight.flight_number}'
                        )
                    if not seat.is_available:
                        metrics.record_rejection(operation='create', reason='seat_unavailable')
                        raise DomainError(f'Seat {seat.seat_number} is not available')
                    seats.append(seat)

                # Step 2: write bookings and claim seats in one transaction
                hold_expires_at = now + timedelta(minutes=settings.BOOKING_HOLD_MINUTES)
                bookings: List[Booking] = []
                held_seats: List[Seat] = []
                booking_repo = self.uow.booking_command_repo
                for selection, seat in zip(selections, seats, strict=True):
                    reservation_code = await self.reservation_code_generator.generate(
                        exists=lambda code: booking_repo.exists_by_reservation_code(
                            reservation_code=code
                        ),
                        now=now,
                    )
                    booking = Booking.create(
                        reservation_code=reservation_code,
                        user_id=user_id,
                        flight_id=flight_id,
                        seat_id=seat.id,  # type: ignore[arg-type]
                        passenger=selection.passenger,
                        baggage=flight.baggage,
                        total_price=flight.price_for(seat.fare_class),
                        now=now,
                    )
                    booking = await booking_repo.create(booking=booking)

                    claimed = await self.uow.seat_command_repo.claim_for_booking(
                        seat_id=seat.id,  # type: ignore[arg-type]
                        booking_id=booking.id,
                        hold_expires_at=hold_expires_at,
                    )
                    if not claimed:
                        # another request took the seat between the check and the claim
                        metrics.record_rejection(operation='create', reason='seat_race_lost')
                        raise DomainError(f'Seat {seat.seat_number} is not available')

                    bookings.append(booking)
                    held_seats.append(
                        attrs.evolve(
                            seat,
                            status=SeatStatus.HELD,
                            hold_expires_at=hold_expires_at,
                            booking_id=booking.id,
                        )
                    )

                await self.uow.commit()

            for seat in held_seats:
                metrics.record_booking_created(fare_class=seat.fare_class.value)
                metrics.record_seat_hold(source='booking')

            total_price = sum(booking.total_price for booking in bookings)
            Logger.base.info(
                f'🎫 [CREATE-BOOKING] {len(bookings)} pending bookings on flight '
                f'{flight.flight_number} for user {user_id}, total {total_price}'
            )
            return CreatedBookings(
                bookings=bookings,
                seats=held_seats,
                total_price=total_price,
                hold_expires_at=hold_expires_at,
            )
