from fastapi import APIRouter, Depends, Path

from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.command.hold_seat_use_case import HoldSeatUseCase
from src.service.flight_booking.app.command.release_seat_use_case import ReleaseSeatUseCase
from src.service.flight_booking.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from src.service.flight_booking.driving_adapter.http_controller.schema.seat_schema import (
    SeatMapResponse,
    SeatResponse,
)


router = APIRouter()


@router.get('/flight/{flight_id}')
@Logger.io
async def get_seat_map(
    flight_id: int = Path(..., gt=0),
    use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
) -> SeatMapResponse:
    seat_map = await use_case.get_seat_map(flight_id=flight_id)
    return SeatMapResponse.from_view(seat_map)


@router.post('/{seat_id}/hold')
@Logger.io
async def hold_seat(
    seat_id: int = Path(..., gt=0),
    _current_user: UserEntity = Depends(get_current_user),
    use_case: HoldSeatUseCase = Depends(HoldSeatUseCase.depends),
) -> SeatResponse:
    seat = await use_case.hold_seat(seat_id=seat_id)
    return SeatResponse.from_entity(seat)


@router.post('/{seat_id}/release')
@Logger.io
async def release_seat(
    seat_id: int = Path(..., gt=0),
    _current_user: UserEntity = Depends(get_current_user),
    use_case: ReleaseSeatUseCase = Depends(ReleaseSeatUseCase.depends),
) -> SeatResponse:
    seat = await use_case.release_seat(seat_id=seat_id)
    return SeatResponse.from_entity(seat)
