from typing import AsyncContextManager, Callable, Optional

from pydantic import SecretStr
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.flight_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.driven_adapter.model.user_model import UserModel
from src.service.flight_booking.driven_adapter.repo.entity_mapper import user_to_entity
from src.service.flight_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        password_hasher: Optional[IPasswordHasher] = None,
    ) -> None:
        self.session_factory = session_factory
        self.password_hasher = password_hasher or BcryptPasswordHasher()

    @Logger.io
    async def get_by_email(self, *, email: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.email == email.lower())
            )
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return user_to_entity(user_model)

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_id))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return user_to_entity(user_model)

    @Logger.io
    async def verify_password(self, *, email: str, plain_password: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.email == email.lower())
            )
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            if not self.password_hasher.verify_password(
                plain_password=SecretStr(plain_password),
                hashed_password=user_model.hashed_password,
            ):
                return None

            return user_to_entity(user_model)
