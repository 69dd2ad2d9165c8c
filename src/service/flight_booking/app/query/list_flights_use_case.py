from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto.booking_views import FlightFilter, Page
from src.service.flight_booking.app.interface.i_flight_query_repo import IFlightQueryRepo
from src.service.flight_booking.domain.entity.flight_entity import Flight


class ListFlightsUseCase:
    def __init__(self, flight_query_repo: IFlightQueryRepo):
        self.flight_query_repo = flight_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        flight_query_repo: IFlightQueryRepo = Depends(Provide[Container.flight_query_repo]),
    ) -> Self:
        return cls(flight_query_repo=flight_query_repo)

    @Logger.io
    async def list_flights(
        self, *, filters: FlightFilter, page: int = 1, limit: int = 20
    ) -> Page[Flight]:
        return await self.flight_query_repo.list_flights(filters=filters, page=page, limit=limit)

    @Logger.io
    async def get_flight(self, *, flight_id: int) -> Flight:
        flight = await self.flight_query_repo.get_by_id(flight_id=flight_id)
        if not flight:
            raise NotFoundError('Flight not found')
        return flight
