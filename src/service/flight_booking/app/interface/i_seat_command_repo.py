from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from uuid_utils import UUID

from src.service.flight_booking.domain.entity.seat_entity import Seat


class ISeatCommandRepo(ABC):
    """
    Seat writes. Every state change is a single conditional UPDATE guarded on
    the current status; the boolean result says whether this caller won.
    """

    @abstractmethod
    async def count_by_flight(self, *, flight_id: int) -> int:
        pass

    @abstractmethod
    async def bulk_create(self, *, seats: List[Seat]) -> int:
        pass

    @abstractmethod
    async def get_by_id(self, *, seat_id: int) -> Optional[Seat]:
        pass

    @abstractmethod
    async def list_by_flight(self, *, flight_id: int) -> List[Seat]:
        pass

    @abstractmethod
    async def claim_for_booking(
        self, *, seat_id: int, booking_id: UUID, hold_expires_at: datetime
    ) -> bool:
        """available → held, linked to booking_id"""
        pass

    @abstractmethod
    async def hold(self, *, seat_id: int, hold_expires_at: datetime) -> bool:
        """available → held without a booking link (standalone hold)"""
        pass

    @abstractmethod
    async def release_hold(self, *, seat_id: int) -> bool:
        """held (no booking link) → available"""
        pass

    @abstractmethod
    async def occupy(self, *, seat_id: int, booking_id: UUID, now: datetime) -> bool:
        """held by booking_id with an unexpired hold → occupied, hold cleared"""
        pass

    @abstractmethod
    async def free_from_booking(self, *, seat_id: int, booking_id: UUID) -> bool:
        """held/occupied by booking_id → available, link and hold cleared"""
        pass

    @abstractmethod
    async def release_expired_holds(
        self, *, now: datetime, flight_id: Optional[int] = None
    ) -> List[Optional[UUID]]:
        """
        held with hold_expires_at <= now → available.

        Returns the booking ids that were linked to the released seats (None for
        standalone holds).
        """
        pass

    @abstractmethod
    async def delete_by_flight(self, *, flight_id: int) -> None:
        pass
