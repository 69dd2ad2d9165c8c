from typing import List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.platform.constant.path import ENV_EXAMPLE_FILE, ENV_FILE


_ENV_FILE = ENV_FILE if ENV_FILE.exists() else ENV_EXAMPLE_FILE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Flight Booking System'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    LOG_LEVEL: Optional[str] = None  # defaults to DEBUG when DEBUG is on, else INFO

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ALGORITHM: str = 'HS256'
    AUTH_COOKIE_NAME: str = 'flightbookingauth'

    # First administrator, created at startup when both are set
    FIRST_ADMIN_EMAIL: Optional[str] = None
    FIRST_ADMIN_PASSWORD: Optional[SecretStr] = None
    FIRST_ADMIN_NAME: str = 'Administrator'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'flight_booking'
    POSTGRES_PORT: int = 5432

    # Full async URL override (e.g. sqlite+aiosqlite:///./flight_booking.db)
    DATABASE_URL: Optional[str] = None

    # Connection pool (ignored by sqlite)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800
    DB_POOL_PRE_PING: bool = True
    DB_ECHO: bool = False

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    @property
    def IS_SQLITE(self) -> bool:
        return self.DATABASE_URL_ASYNC.startswith('sqlite')

    # Booking lifecycle
    BOOKING_HOLD_MINUTES: int = 15  # hold placed by booking creation
    SEAT_HOLD_MINUTES: int = 10  # standalone hold endpoint
    CANCELLATION_CUTOFF_HOURS: int = 24
    RESERVATION_CODE_PREFIX: str = 'AL'
    RESERVATION_CODE_MAX_ATTEMPTS: int = 10
    DEFAULT_PAYMENT_METHOD: str = 'Card (simulated)'

    # Tracing (off unless an exporter is configured)
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None
    OTEL_CONSOLE_EXPORT: bool = False


settings = Settings()  # type: ignore
