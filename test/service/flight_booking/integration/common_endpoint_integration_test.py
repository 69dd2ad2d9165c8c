from typing import Dict

from fastapi.testclient import TestClient
import pytest

from test.shared.utils import book_seat, create_flight, get_seat_map


@pytest.mark.integration
class TestCommonEndpoints:
    def test_health(self, client: TestClient) -> None:
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_metrics_expose_booking_counters(
        self, client: TestClient, admin_headers: Dict[str, str], customer_headers: Dict[str, str]
    ) -> None:
        flight = create_flight(client, admin_headers)
        seat = get_seat_map(client, flight['id'])['seats'][0]
        book_seat(client, customer_headers, flight_id=flight['id'], seat_id=seat['id'])

        response = client.get('/metrics')

        assert response.status_code == 200
        assert 'flight_bookings_created_total' in response.text
