"""
Test Configuration and Fixtures

This module provides:
- SQLite (aiosqlite) test database, recreated for every integration test
- Session-scoped TestClient running the real application lifespan
- Per-test users (admin / customer) with bearer headers

Architecture:
- Unit tests (test/**/unit/): Override fixtures with mocks in their own conftest.py
- Integration tests: Use the real DB with a clean schema per test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time of src.platform.config.core_setting
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    from dotenv import load_dotenv

    project_root = Path(__file__).parent.parent
    env_file = project_root / '.env'
    if env_file.exists():
        load_dotenv(env_file)

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # One database file per xdist worker
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_path = test_log_dir / f'flight_booking_test_{worker_id}.db'
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_path}'

    os.environ['DEBUG'] = 'true'
    os.environ['SECRET_KEY'] = 'test_secret_key_for_flight_booking_tests'
    os.environ.pop('OTEL_EXPORTER_OTLP_ENDPOINT', None)
    os.environ['OTEL_CONSOLE_EXPORT'] = 'false'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.database.orm_db_setting import (  # noqa: E402
    create_db_and_tables,
    dispose_engine,
    drop_db_and_tables,
)
from test.shared.utils import auth_headers, create_user, seed_admin  # noqa: E402
from test.util_constant import (  # noqa: E402
    ADMIN_EMAIL,
    ADMIN_NAME,
    ANOTHER_CUSTOMER_EMAIL,
    ANOTHER_CUSTOMER_NAME,
    CUSTOMER_EMAIL,
    CUSTOMER_NAME,
    DEFAULT_PASSWORD,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # before any fixture that writes through the API
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _reset_tables() -> None:
    await drop_db_and_tables()
    await create_db_and_tables()


@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    # runs on its own loop; the engine manager swaps engines per loop
    asyncio.run(_reset_tables())
    yield


# =============================================================================
# HTTP Client
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    asyncio.run(dispose_engine())


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Skip for unit tests - they don't use the HTTP client
    if request.node.get_closest_marker('unit'):
        yield
        return

    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


# =============================================================================
# Users
# =============================================================================
@pytest.fixture
def admin_user(client: TestClient) -> dict[str, Any]:
    return seed_admin(client, ADMIN_EMAIL, DEFAULT_PASSWORD, ADMIN_NAME)


@pytest.fixture
def customer_user(client: TestClient) -> dict[str, Any]:
    return create_user(client, CUSTOMER_EMAIL, DEFAULT_PASSWORD, CUSTOMER_NAME, 'customer')


@pytest.fixture
def another_customer_user(client: TestClient) -> dict[str, Any]:
    return create_user(
        client, ANOTHER_CUSTOMER_EMAIL, DEFAULT_PASSWORD, ANOTHER_CUSTOMER_NAME, 'customer'
    )


@pytest.fixture
def admin_headers(admin_user: dict[str, Any]) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def customer_headers(customer_user: dict[str, Any]) -> dict[str, str]:
    return auth_headers(customer_user)


@pytest.fixture
def another_customer_headers(another_customer_user: dict[str, Any]) -> dict[str, str]:
    return auth_headers(another_customer_user)
