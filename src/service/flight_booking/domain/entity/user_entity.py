from datetime import datetime
from typing import Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import AuthenticationError, DomainError, ForbiddenError
from src.service.flight_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.flight_booking.domain.enum.user_role import UserRole


MIN_PASSWORD_LENGTH = 6


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    role: UserRole = UserRole.CUSTOMER
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise AuthenticationError('Invalid email or password')
        return user_entity

    def set_password(self, plain_password: str, password_hasher: IPasswordHasher) -> None:
        if len(plain_password) < MIN_PASSWORD_LENGTH:
            raise DomainError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )
