from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto.booking_views import BookingDetail, Page
from src.service.flight_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.flight_booking.domain.enum.booking_status import BookingStatus


class ListBookingsUseCase:
    def __init__(self, booking_query_repo: IBookingQueryRepo):
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def list_my_bookings(
        self, *, user_id: int, status: Optional[BookingStatus] = None
    ) -> List[BookingDetail]:
        return await self.booking_query_repo.list_by_user(user_id=user_id, status=status)

    @Logger.io
    async def list_all_bookings(
        self,
        *,
        flight_id: Optional[int] = None,
        status: Optional[BookingStatus] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[BookingDetail]:
        return await self.booking_query_repo.list_all(
            flight_id=flight_id, status=status, page=page, limit=limit
        )
