"""
Unit of Work Pattern - one database session shared by the flight, seat and booking repositories

Architecture:
- UoW owns the session lifecycle and the commit/rollback boundary
- Repositories inside a UoW share the session, so every conditional update of
  one operation lands in the same transaction
- Leaving the `async with` block without commit rolls back
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import get_async_session


if TYPE_CHECKING:
    from src.service.flight_booking.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.flight_booking.app.interface.i_flight_command_repo import (
        IFlightCommandRepo,
    )
    from src.service.flight_booking.app.interface.i_seat_command_repo import ISeatCommandRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            claimed = await uow.seat_command_repo.claim_for_booking(...)
            await uow.commit()
    """

    flight_command_repo: IFlightCommandRepo
    seat_command_repo: ISeatCommandRepo
    booking_command_repo: IBookingCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.flight_booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.flight_booking.driven_adapter.repo.flight_command_repo_impl import (
            FlightCommandRepoImpl,
        )
        from src.service.flight_booking.driven_adapter.repo.seat_command_repo_impl import (
            SeatCommandRepoImpl,
        )

        self.flight_command_repo = FlightCommandRepoImpl(session=self.session)
        self.seat_command_repo = SeatCommandRepoImpl(session=self.session)
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)

        return await super().__aenter__()

    async def _commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """FastAPI dependency: a fresh UoW bound to the request's session"""
    return SqlAlchemyUnitOfWork(session)
