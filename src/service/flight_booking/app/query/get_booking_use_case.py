from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto.booking_views import BookingDetail
from src.service.flight_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.flight_booking.domain.entity.user_entity import UserEntity


class GetBookingUseCase:
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
    async def get_booking(self, *, booking_id: UUID, requester: UserEntity) -> BookingDetail:
        detail = await self.booking_query_repo.get_detail(booking_id=booking_id)

        if not detail:
            raise NotFoundError('Booking not found')
        if not requester.is_admin and not detail.booking.is_owned_by(requester.id or 0):
            raise ForbiddenError('You can only view your own bookings')

        return detail
