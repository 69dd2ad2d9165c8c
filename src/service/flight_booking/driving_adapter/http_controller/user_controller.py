from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.command.create_user_use_case import CreateUserUseCase
from src.service.flight_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.flight_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    get_optional_current_user,
)
from src.service.flight_booking.driving_adapter.http_controller.schema.user_schema import (
    CreateUserRequest,
    LoginRequest,
    TokenResponse,
    UserResponse,
)


# === API Router ===

router = APIRouter()


def _to_response(user_entity: UserEntity) -> UserResponse:
    return UserResponse(
        id=user_entity.id or 0,
        email=user_entity.email,
        name=user_entity.name,
        role=user_entity.role,
        is_active=user_entity.is_active,
    )


def _issue_token(response: Response, jwt_auth: JwtAuth, user_entity: UserEntity) -> TokenResponse:
    token = jwt_auth.create_jwt_token(user_entity)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=jwt_auth.max_age_seconds,
        httponly=True,
        samesite='lax',
        secure=not settings.DEBUG,
    )
    return TokenResponse(access_token=token, user=_to_response(user_entity))


@router.post('', response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def create_user(
    response: Response,
    request: CreateUserRequest,
    use_case: CreateUserUseCase = Depends(CreateUserUseCase.depends),
    caller: Optional[UserEntity] = Depends(get_optional_current_user),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> TokenResponse:
    # duplicate email surfaces as ConflictError (409) from the repository,
    # role=admin from a non-admin caller as ForbiddenError (403)
    user_entity = await use_case.create_user(
        email=str(request.email),
        password=request.password.get_secret_value(),
        name=request.name,
        role=request.role,
        requested_by=caller,
    )
    return _issue_token(response, jwt_auth, user_entity)


@router.post('/login', response_model=TokenResponse)
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> TokenResponse:
    user_entity = await jwt_auth.authenticate_user(
        user_query_repo=user_query_repo,
        email=str(request.email),
        password=request.password.get_secret_value(),
    )
    return _issue_token(response, jwt_auth, user_entity)


@router.get('/me', response_model=UserResponse)
@Logger.io
async def get_me(current_user: UserEntity = Depends(get_current_user)) -> UserResponse:
    return _to_response(current_user)
