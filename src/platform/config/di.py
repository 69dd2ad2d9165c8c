"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.flight_booking.app.service.expiry_sweeper import ExpirySweeper
from src.service.flight_booking.app.service.seat_generator import SeatGenerator
from src.service.flight_booking.domain.reservation_code import ReservationCodeGenerator
from src.service.flight_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.flight_booking.driven_adapter.repo.flight_query_repo_impl import (
    FlightQueryRepoImpl,
)
from src.service.flight_booking.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.flight_booking.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.flight_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.flight_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth)

    # Read-side repositories (stateless - use session_factory per call)
    # Command repositories live inside the unit of work, not here.
    flight_query_repo = providers.Singleton(
        FlightQueryRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl,
        session_factory=database.provided.session,
        password_hasher=password_hasher,
    )

    # Domain services (stateless)
    seat_generator = providers.Singleton(SeatGenerator)
    expiry_sweeper = providers.Singleton(ExpirySweeper)
    reservation_code_generator = providers.Singleton(
        ReservationCodeGenerator,
        prefix=config_service.provided.RESERVATION_CODE_PREFIX,
        max_attempts=config_service.provided.RESERVATION_CODE_MAX_ATTEMPTS,
    )


container = Container()


def setup() -> None:
    container.config_service()
    container.database()


def cleanup() -> None:
    container.reset_singletons()
