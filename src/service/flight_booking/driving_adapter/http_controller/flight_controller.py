from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.command.create_flight_use_case import CreateFlightUseCase
from src.service.flight_booking.app.command.delete_flight_use_case import DeleteFlightUseCase
from src.service.flight_booking.app.command.update_flight_use_case import UpdateFlightUseCase
from src.service.flight_booking.app.dto.booking_views import FlightFilter
from src.service.flight_booking.app.query.list_flights_use_case import ListFlightsUseCase
from src.service.flight_booking.app.query.search_flights_use_case import SearchFlightsUseCase
from src.service.flight_booking.domain.entity.flight_entity import combine_date_and_clock
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.domain.enum.flight_status import FlightStatus
from src.service.flight_booking.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
)
from src.service.flight_booking.driving_adapter.http_controller.schema.flight_schema import (
    AirportSchema,
    FlightCreateRequest,
    FlightPageResponse,
    FlightResponse,
    FlightRouteResponse,
    FlightStatusRequest,
    FlightUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


# === Public ===


@router.get('/search')
@Logger.io
async def search_flights(
    origin: str = Query(..., pattern=r'^[A-Za-z]{3}$'),
    destination: str = Query(..., pattern=r'^[A-Za-z]{3}$'),
    departure_date: Optional[date] = Query(None, alias='date'),
    use_case: SearchFlightsUseCase = Depends(SearchFlightsUseCase.depends),
) -> List[FlightResponse]:
    flights = await use_case.search(
        origin_code=origin, destination_code=destination, departure_date=departure_date
    )
    return [FlightResponse.from_entity(flight) for flight in flights]


@router.get('/routes')
@Logger.io
async def list_routes(
    use_case: SearchFlightsUseCase = Depends(SearchFlightsUseCase.depends),
) -> List[FlightRouteResponse]:
    routes = await use_case.list_routes()
    return [
        FlightRouteResponse(
            origin=AirportSchema.from_value_object(route.origin),
            destination=AirportSchema.from_value_object(route.destination),
            departure_dates=route.departure_dates,
        )
        for route in routes
    ]


# === Admin ===


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_flight(
    request: FlightCreateRequest,
    _admin: UserEntity = Depends(require_admin),
    use_case: CreateFlightUseCase = Depends(CreateFlightUseCase.depends),
) -> FlightResponse:
    with tracer.start_as_current_span('controller.create_flight') as span:
        span.set_attribute('flight.number', request.flight_number.upper())

        flight = await use_case.create_flight(
            flight_number=request.flight_number,
            airline=request.airline,
            origin=request.origin.to_value_object(),
            destination=request.destination.to_value_object(),
            departure_at=combine_date_and_clock(request.departure_date, request.departure_time),
            arrival_at=combine_date_and_clock(request.arrival_date, request.arrival_time),
            duration=request.duration,
            price=request.price,
            capacity=request.capacity,
            status=request.status,
            route_type=request.route_type,
            baggage=request.baggage.to_value_object() if request.baggage else None,
        )
        return FlightResponse.from_entity(flight)


@router.get('')
@Logger.io
async def list_flights(
    origin: Optional[str] = Query(None, pattern=r'^[A-Za-z]{3}$'),
    destination: Optional[str] = Query(None, pattern=r'^[A-Za-z]{3}$'),
    departure_date: Optional[date] = Query(None, alias='date'),
    flight_status: Optional[FlightStatus] = Query(None, alias='status'),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    _admin: UserEntity = Depends(require_admin),
    use_case: ListFlightsUseCase = Depends(ListFlightsUseCase.depends),
) -> FlightPageResponse:
    result = await use_case.list_flights(
        filters=FlightFilter(
            origin_code=origin,
            destination_code=destination,
            departure_date=departure_date,
            status=flight_status.value if flight_status else None,
        ),
        page=page,
        limit=limit,
    )
    return FlightPageResponse(
        items=[FlightResponse.from_entity(flight) for flight in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@router.get('/{flight_id}')
@Logger.io
async def get_flight(
    flight_id: int = Path(..., gt=0),
    _admin: UserEntity = Depends(require_admin),
    use_case: ListFlightsUseCase = Depends(ListFlightsUseCase.depends),
) -> FlightResponse:
    return FlightResponse.from_entity(await use_case.get_flight(flight_id=flight_id))


@router.put('/{flight_id}')
@Logger.io
async def update_flight(
    request: FlightUpdateRequest,
    flight_id: int = Path(..., gt=0),
    _admin: UserEntity = Depends(require_admin),
    use_case: UpdateFlightUseCase = Depends(UpdateFlightUseCase.depends),
) -> FlightResponse:
    fields = request.model_dump(exclude_unset=True, exclude_none=True)
    changes: dict[str, Any] = {
        key: value
        for key, value in fields.items()
        if key
        not in {
            'origin',
            'destination',
            'baggage',
            'departure_date',
            'departure_time',
            'arrival_date',
            'arrival_time',
        }
    }
    if request.origin:
        changes['origin'] = request.origin.to_value_object()
    if request.destination:
        changes['destination'] = request.destination.to_value_object()
    if request.baggage:
        changes['baggage'] = request.baggage.to_value_object()
    if request.departure_date and request.departure_time:
        changes['departure_at'] = combine_date_and_clock(
            request.departure_date, request.departure_time
        )
    if request.arrival_date and request.arrival_time:
        changes['arrival_at'] = combine_date_and_clock(request.arrival_date, request.arrival_time)

    flight = await use_case.update_flight(flight_id=flight_id, changes=changes)
    return FlightResponse.from_entity(flight)


@router.patch('/{flight_id}/status')
@Logger.io
async def change_flight_status(
    request: FlightStatusRequest,
    flight_id: int = Path(..., gt=0),
    _admin: UserEntity = Depends(require_admin),
    use_case: UpdateFlightUseCase = Depends(UpdateFlightUseCase.depends),
) -> FlightResponse:
    flight = await use_case.change_status(flight_id=flight_id, status=request.status)
    return FlightResponse.from_entity(flight)


@router.delete('/{flight_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_flight(
    flight_id: int = Path(..., gt=0),
    _admin: UserEntity = Depends(require_admin),
    use_case: DeleteFlightUseCase = Depends(DeleteFlightUseCase.depends),
) -> None:
    await use_case.delete_flight(flight_id=flight_id)
