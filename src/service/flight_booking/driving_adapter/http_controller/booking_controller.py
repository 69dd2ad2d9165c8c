from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.flight_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.flight_booking.app.command.confirm_payment_use_case import (
    ConfirmPaymentUseCase,
)
from src.service.flight_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.flight_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.flight_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.domain.enum.booking_status import BookingStatus
from src.service.flight_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.flight_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingDetailResponse,
    BookingPageResponse,
    BookingResponse,
    CreateBookingResponse,
    PaymentRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> CreateBookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('flight_id', request.flight_id)
        span.set_attribute('user_id', current_user.id or 0)

        created = await use_case.create_booking(
            user_id=current_user.id or 0,
            flight_id=request.flight_id,
            selections=request.to_selections(),
        )

        span.set_attribute('booking.count', len(created.bookings))
        return CreateBookingResponse.from_view(created)


@router.post('/confirm-payment')
@Logger.io
async def confirm_payment(
    request: PaymentRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ConfirmPaymentUseCase = Depends(ConfirmPaymentUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.confirm_payment') as span:
        span.set_attribute('booking.id', str(request.booking_id))

        booking = await use_case.confirm_payment(
            booking_id=request.booking_id,
            user_id=current_user.id or 0,
            payment_method=request.payment_method,
        )
        return BookingResponse.from_entity(booking)


@router.get('/mine')
@Logger.io
async def list_my_bookings(
    booking_status: Optional[BookingStatus] = Query(None, alias='status'),
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingDetailResponse]:
    details = await use_case.list_my_bookings(user_id=current_user.id or 0, status=booking_status)
    return [BookingDetailResponse.from_view(detail) for detail in details]


@router.get('')
@Logger.io
async def list_all_bookings(
    flight_id: Optional[int] = Query(None, gt=0),
    booking_status: Optional[BookingStatus] = Query(None, alias='status'),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    _admin: UserEntity = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingPageResponse:
    result = await use_case.list_all_bookings(
        flight_id=flight_id, status=booking_status, page=page, limit=limit
    )
    return BookingPageResponse.from_page(result)


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.get_booking(booking_id=booking_id, requester=current_user)
    return BookingDetailResponse.from_view(detail)


@router.delete('/{booking_id}')
@Logger.io
async def cancel_booking(
    booking_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.cancel_booking') as span:
        span.set_attribute('booking.id', str(booking_id))

        booking = await use_case.cancel_booking(
            booking_id=booking_id, user_id=current_user.id or 0
        )
        return BookingResponse.from_entity(booking)
