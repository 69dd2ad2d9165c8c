from typing import Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.domain.enum.booking_status import ACTIVE_BOOKING_STATUSES


class DeleteFlightUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete_flight(self, *, flight_id: int) -> None:
        async with self.uow:
            flight = await self.uow.flight_command_repo.get_by_id(flight_id=flight_id)
            if not flight:
                raise NotFoundError('Flight not found')

            booking_repo = self.uow.booking_command_repo
            if await booking_repo.count_by_flight(
                flight_id=flight_id, statuses=list(ACTIVE_BOOKING_STATUSES)
            ):
                raise ConflictError(
                    f'Flight {flight.flight_number} has active bookings; cancel the flight instead'
                )
            if await booking_repo.count_by_flight(flight_id=flight_id):
                raise ConflictError(
                    f'Flight {flight.flight_number} has booking history and cannot be deleted'
                )

            await self.uow.seat_command_repo.delete_by_flight(flight_id=flight_id)
            await self.uow.flight_command_repo.delete(flight_id=flight_id)
            await self.uow.commit()

        Logger.base.info(f'🗑️ [FLIGHT] Deleted {flight.flight_number}')
