from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto.booking_views import FlightRoute
from src.service.flight_booking.app.interface.i_flight_query_repo import IFlightQueryRepo
from src.service.flight_booking.domain.entity.flight_entity import Flight


class SearchFlightsUseCase:
    """Public flight discovery: route search and the route catalogue."""

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
    async def search(
        self,
        *,
        origin_code: str,
        destination_code: str,
        departure_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> List[Flight]:
        return await self.flight_query_repo.search(
            origin_code=origin_code,
            destination_code=destination_code,
            departure_date=departure_date,
            now=now or datetime.now(timezone.utc),
        )

    @Logger.io
    async def list_routes(self, *, now: Optional[datetime] = None) -> List[FlightRoute]:
        flights = await self.flight_query_repo.list_upcoming(now=now or datetime.now(timezone.utc))

        routes: Dict[Tuple[str, str], FlightRoute] = {}
        for flight in flights:
            key = (flight.origin.code, flight.destination.code)
            route = routes.setdefault(
                key, FlightRoute(origin=flight.origin, destination=flight.destination)
            )
            departure_day = flight.departure_at.date().isoformat()
            if departure_day not in route.departure_dates:
                route.departure_dates.append(departure_day)

        for route in routes.values():
            route.departure_dates.sort()
        return sorted(routes.values(), key=lambda r: (r.origin.code, r.destination.code))
