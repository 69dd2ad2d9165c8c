"""
FastAPI app factory shared by src.main and the test app.

Both run the same routers, middleware and error rendering; only the lifespan
(and the title suffix) differ.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.flight_booking.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.flight_booking.driving_adapter.http_controller.flight_controller import (
    router as flight_router,
)
from src.service.flight_booking.driving_adapter.http_controller.seat_controller import (
    router as seat_router,
)
from src.service.flight_booking.driving_adapter.http_controller.user_controller import (
    router as user_router,
)


API_PREFIX = '/api'

# (router, mount path, OpenAPI tag)
API_ROUTERS: list[tuple[APIRouter, str, str]] = [
    (user_router, '/users', 'user'),
    (flight_router, '/flights', 'flight'),
    (seat_router, '/seats', 'seat'),
    (booking_router, '/bookings', 'booking'),
]


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Flight Booking System',
    service_name: str = 'flight-booking',
) -> FastAPI:
    """
    Args:
        lifespan: startup/shutdown context (DI wiring, schema, engine disposal)
        title_suffix: appended to PROJECT_NAME, e.g. ' (Test)'
        description: OpenAPI description
        service_name: resource name reported on spans
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # instrumentation has to wrap the app before routes are mounted
    tracing_config = TracingConfig(service_name=service_name)
    if tracing_config.enabled:
        tracing_config.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    for router, path, tag in API_ROUTERS:
        app.include_router(router, prefix=f'{API_PREFIX}{path}', tags=[tag])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    @app.get('/health', tags=['ops'])
    async def health_check() -> dict[str, str]:
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics', tags=['ops'])
    async def get_metrics() -> PlainTextResponse:
        """Prometheus exposition of the booking lifecycle counters."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
