from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.flight_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.domain.enum.user_role import UserRole


class CreateUserUseCase:
    def __init__(
        self, *, user_command_repo: IUserCommandRepo, password_hasher: IPasswordHasher
    ) -> None:
        self.user_command_repo = user_command_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_command_repo=user_command_repo, password_hasher=password_hasher)

    @Logger.io
    async def create_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.CUSTOMER,
        requested_by: Optional[UserEntity] = None,
    ) -> UserEntity:
        """
        Self-registration always yields a customer account; only a signed-in
        administrator may create another administrator.
        """
        if role == UserRole.ADMIN and not (requested_by and requested_by.is_admin):
            raise ForbiddenError('Only administrators can create administrator accounts')
        return await self._create(email=email, password=password, name=name, role=role)

    @Logger.io
    async def ensure_admin(self, *, email: str, password: str, name: str) -> Optional[UserEntity]:
        """Bootstrap the first administrator; None when the email is already registered."""
        try:
            return await self._create(
                email=email, password=password, name=name, role=UserRole.ADMIN
            )
        except ConflictError:
            Logger.base.info(f'👤 [BOOTSTRAP] Admin {email.lower()} already registered')
            return None

    async def _create(self, *, email: str, password: str, name: str, role: UserRole) -> UserEntity:
        user_entity = UserEntity(email=email.lower(), name=name, role=role, is_active=True)
        user_entity.set_password(password, self.password_hasher)
        return await self.user_command_repo.create(user_entity=user_entity)
