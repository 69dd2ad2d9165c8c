from abc import ABC, abstractmethod
from typing import Optional

from src.service.flight_booking.domain.entity.flight_entity import Flight


class IFlightCommandRepo(ABC):
    """Flight writes, run inside a unit of work"""

    @abstractmethod
    async def get_by_id(self, *, flight_id: int) -> Optional[Flight]:
        pass

    @abstractmethod
    async def exists_by_flight_number(
        self, *, flight_number: str, exclude_flight_id: Optional[int] = None
    ) -> bool:
        pass

    @abstractmethod
    async def create(self, *, flight: Flight) -> Flight:
        pass

    @abstractmethod
    async def update(self, *, flight: Flight) -> Flight:
        pass

    @abstractmethod
    async def delete(self, *, flight_id: int) -> None:
        pass

    @abstractmethod
    async def decrement_available_seats(self, *, flight_id: int) -> bool:
        """
        available_seats -= 1 only while it is above zero.

        Returns False when the counter was already at zero (left untouched).
        """
        pass

    @abstractmethod
    async def increment_available_seats(self, *, flight_id: int) -> bool:
        """
        available_seats += 1 only while it is below capacity.

        Returns False when the counter was already at capacity (left untouched).
        """
        pass
