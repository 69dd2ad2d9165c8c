from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional

from src.service.flight_booking.app.dto.booking_views import FlightFilter, Page
from src.service.flight_booking.domain.entity.flight_entity import Flight


class IFlightQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, flight_id: int) -> Optional[Flight]:
        pass

    @abstractmethod
    async def list_flights(self, *, filters: FlightFilter, page: int, limit: int) -> Page[Flight]:
        pass

    @abstractmethod
    async def search(
        self,
        *,
        origin_code: str,
        destination_code: str,
        departure_date: Optional[date],
        now: datetime,
    ) -> List[Flight]:
        """Scheduled flights on the route with seats left; future flights when no date given"""
        pass

    @abstractmethod
    async def list_upcoming(self, *, now: datetime) -> List[Flight]:
        """Scheduled or in-flight flights departing after now, earliest first"""
        pass
