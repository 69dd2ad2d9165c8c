from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from uuid_utils import UUID

from src.service.flight_booking.domain.entity.booking_entity import Booking
from src.service.flight_booking.domain.enum.booking_status import BookingStatus


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """Insert and flush, so later statements in the same transaction can see it"""
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def exists_by_reservation_code(self, *, reservation_code: str) -> bool:
        pass

    @abstractmethod
    async def update_status(self, *, booking: Booking, expected_status: BookingStatus) -> bool:
        """
        Persist booking's status fields only while the stored status still
        equals expected_status. False means another request moved it first.
        """
        pass

    @abstractmethod
    async def expire_pending(self, *, booking_ids: Iterable[UUID], now: datetime) -> int:
        """pending → cancelled for the given ids; returns how many moved"""
        pass

    @abstractmethod
    async def count_by_flight(
        self, *, flight_id: int, statuses: Optional[List[BookingStatus]] = None
    ) -> int:
        pass
