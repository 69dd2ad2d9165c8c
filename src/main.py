"""
Production FastAPI Application

Single process: HTTP API over the relational store. Seat holds expire lazily,
so there are no background workers to start.

    granian src.main:app --interface asgi --host 0.0.0.0 --port 8100
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.flight_booking.app.command.create_user_use_case import CreateUserUseCase


async def _bootstrap_admin() -> None:
    if not (settings.FIRST_ADMIN_EMAIL and settings.FIRST_ADMIN_PASSWORD):
        return
    use_case = CreateUserUseCase(
        user_command_repo=container.user_command_repo(),
        password_hasher=container.password_hasher(),
    )
    if await use_case.ensure_admin(
        email=settings.FIRST_ADMIN_EMAIL,
        password=settings.FIRST_ADMIN_PASSWORD.get_secret_value(),
        name=settings.FIRST_ADMIN_NAME,
    ):
        Logger.base.info(f'👤 [Flight Booking] First admin {settings.FIRST_ADMIN_EMAIL} created')


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Flight Booking] Starting up...')

    tracing = TracingConfig(service_name='flight-booking')
    if tracing.enabled:
        tracing.setup()
        Logger.base.info('📊 [Flight Booking] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Flight Booking] Dependency injection wired')

    await create_db_and_tables()
    engine = get_engine()
    if tracing.enabled:
        tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [Flight Booking] Database ready')

    await _bootstrap_admin()

    yield

    Logger.base.info('🛑 [Flight Booking] Shutting down...')
    await dispose_engine()
    tracing.shutdown()
    container.unwire()
    Logger.base.info('👋 [Flight Booking] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Flight Booking System - flights, seat maps, bookings and payment confirmation',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
