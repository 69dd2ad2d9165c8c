from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.domain.enum.user_role import UserRole
from src.service.flight_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


class RoleAuthStrategy:
    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN

    @staticmethod
    def can_view_booking(user: UserEntity, owner_id: int) -> bool:
        return user.role == UserRole.ADMIN or user.id == owner_id


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    cookie_token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """
    Stateless: the user is rebuilt from the JWT claims, no DB query.

    `Authorization: Bearer <token>` wins over the auth cookie.
    """
    token = credentials.credentials if credentials else cookie_token
    return jwt_auth.get_current_user_info_from_jwt(token)


@inject
async def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    cookie_token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> Optional[UserEntity]:
    """None for anonymous callers; a token that is present must still be valid."""
    token = credentials.credentials if credentials else cookie_token
    if not token:
        return None
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.is_admin(current_user):
            raise ForbiddenError('Only administrators can perform this action')
        return current_user
