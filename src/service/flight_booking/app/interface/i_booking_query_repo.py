from abc import ABC, abstractmethod
from typing import List, Optional

from uuid_utils import UUID

from src.service.flight_booking.app.dto.booking_views import BookingDetail, Page
from src.service.flight_booking.domain.enum.booking_status import BookingStatus


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_detail(self, *, booking_id: UUID) -> Optional[BookingDetail]:
        pass

    @abstractmethod
    async def list_by_user(
        self, *, user_id: int, status: Optional[BookingStatus] = None
    ) -> List[BookingDetail]:
        """Newest first"""
        pass

    @abstractmethod
    async def list_all(
        self,
        *,
        flight_id: Optional[int],
        status: Optional[BookingStatus],
        page: int,
        limit: int,
    ) -> Page[BookingDetail]:
        pass
