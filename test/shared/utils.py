import asyncio
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi.testclient import TestClient

from src.platform.config.di import container
from src.service.flight_booking.app.command.create_user_use_case import CreateUserUseCase
from test.util_constant import (
    BOOKING_BASE,
    CUN,
    DEFAULT_CAPACITY,
    DEFAULT_FLIGHT_NUMBER,
    DEFAULT_PRICE,
    FLIGHT_BASE,
    MEX,
    SEAT_BASE,
    USER_BASE,
    USER_LOGIN,
)


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def create_user(
    client: TestClient, email: str, password: str, name: str, role: str
) -> Dict[str, Any]:
    user_data = {
        'email': email,
        'password': password,
        'name': name,
        'role': role,
    }
    response = client.post(USER_BASE, json=user_data)
    assert_response_status(response, 201, f'Failed to create {role} user: {response.text}')
    return response.json()


def seed_admin(client: TestClient, email: str, password: str, name: str) -> Dict[str, Any]:
    """Create an administrator the way startup does, then log in through the API."""

    async def _run() -> None:
        await CreateUserUseCase(
            user_command_repo=container.user_command_repo(),
            password_hasher=container.password_hasher(),
        ).ensure_admin(email=email, password=password, name=name)

    asyncio.run(_run())
    return login_user(client, email, password)


def login_user(client: TestClient, email: str, password: str) -> Dict[str, Any]:
    response = client.post(USER_LOGIN, json={'email': email, 'password': password})
    assert_response_status(response, 200, f'Login failed: {response.text}')
    return response.json()


def auth_headers(token_response: Dict[str, Any]) -> Dict[str, str]:
    return {'Authorization': f'Bearer {token_response["access_token"]}'}


def flight_payload(
    *,
    flight_number: str = DEFAULT_FLIGHT_NUMBER,
    departure: Optional[datetime] = None,
    price: int = DEFAULT_PRICE,
    capacity: int = DEFAULT_CAPACITY,
    origin: Optional[Dict[str, str]] = None,
    destination: Optional[Dict[str, str]] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Flight create body; departs in ten days at 08:00 UTC unless told otherwise"""
    if departure is None:
        day = date.today() + timedelta(days=10)
        departure = datetime(day.year, day.month, day.day, 8, 0, tzinfo=timezone.utc)
    arrival = departure + timedelta(hours=2, minutes=30)
    payload = {
        'flight_number': flight_number,
        'origin': origin or MEX,
        'destination': destination or CUN,
        'departure_date': departure.date().isoformat(),
        'departure_time': departure.strftime('%H:%M'),
        'arrival_date': arrival.date().isoformat(),
        'arrival_time': arrival.strftime('%H:%M'),
        'duration': '2h 30m',
        'price': price,
        'capacity': capacity,
    }
    payload.update(overrides)
    return payload


def create_flight(
    client: TestClient, admin_headers: Dict[str, str], **kwargs: Any
) -> Dict[str, Any]:
    response = client.post(FLIGHT_BASE, json=flight_payload(**kwargs), headers=admin_headers)
    assert_response_status(response, 201)
    return response.json()


def passenger_payload(
    first_name: str = 'Ana', last_name: str = 'Lopez', document_number: str = 'G12345678'
) -> Dict[str, Any]:
    return {
        'first_name': first_name,
        'last_name': last_name,
        'email': f'{first_name.lower()}@example.com',
        'document_type': 'passport',
        'document_number': document_number,
    }


def get_seat_map(client: TestClient, flight_id: int) -> Dict[str, Any]:
    response = client.get(f'{SEAT_BASE}/flight/{flight_id}')
    assert_response_status(response, 200)
    return response.json()


def find_seat(seat_map: Dict[str, Any], seat_number: str) -> Dict[str, Any]:
    return next(seat for seat in seat_map['seats'] if seat['seat_number'] == seat_number)


def book_seat(
    client: TestClient,
    headers: Dict[str, str],
    *,
    flight_id: int,
    seat_id: int,
    passenger: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    response = client.post(
        BOOKING_BASE,
        json={
            'flight_id': flight_id,
            'seat_id': seat_id,
            'passenger': passenger or passenger_payload(),
        },
        headers=headers,
    )
    assert_response_status(response, 201)
    return response.json()
