from datetime import datetime
from typing import Optional, Self

from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import IntegrityError

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.domain.entity.flight_entity import DEFAULT_AIRLINE, Flight
from src.service.flight_booking.domain.enum.flight_status import FlightStatus, RouteType
from src.service.flight_booking.domain.value_object.airport import Airport
from src.service.flight_booking.domain.value_object.baggage_policy import BaggagePolicy


class CreateFlightUseCase:
    """Admin: register a flight. Seats are generated lazily on the first seat-map read."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_flight(
        self,
        *,
        flight_number: str,
        origin: Airport,
        destination: Airport,
        departure_at: datetime,
        arrival_at: datetime,
        duration: str,
        price: int,
        capacity: int,
        airline: str = DEFAULT_AIRLINE,
        status: FlightStatus = FlightStatus.SCHEDULED,
        route_type: RouteType = RouteType.DIRECT,
        baggage: Optional[BaggagePolicy] = None,
    ) -> Flight:
        with self.tracer.start_as_current_span(
            'use_case.create_flight', attributes={'flight.number': flight_number.upper()}
        ):
            flight = Flight.create(
                flight_number=flight_number,
                airline=airline,
                origin=origin,
                destination=destination,
                departure_at=departure_at,
                arrival_at=arrival_at,
                duration=duration,
                price=price,
                capacity=capacity,
                status=status,
                route_type=route_type,
                baggage=baggage,
            )

            async with self.uow:
                if await self.uow.flight_command_repo.exists_by_flight_number(
                    flight_number=flight.flight_number
                ):
                    raise ConflictError(f'Flight {flight.flight_number} already exists')
                try:
                    created = await self.uow.flight_command_repo.create(flight=flight)
                    await self.uow.commit()
                except IntegrityError as e:
                    raise ConflictError(f'Flight {flight.flight_number} already exists') from e

            Logger.base.info(
                f'✈️ [FLIGHT] Created {created.flight_number} '
                f'{created.origin.code}→{created.destination.code} (capacity {created.capacity})'
            )
            return created
