from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from fira.platform.logging.loguru_io import Logger
from fira.service.shared_kernel.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)
from fira.service.venue_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from fira.service.venue_booking.app.command.complete_booking_payment_use_case import (
    CompleteBookingPaymentUseCase,
)
from fira.service.venue_booking.app.command.create_booking_use_case import CreateBookingUseCase
from fira.service.venue_booking.app.command.initiate_booking_payment_use_case import (
    InitiateBookingPaymentUseCase,
)
from fira.service.venue_booking.app.command.respond_to_booking_use_case import (
    RespondToBookingUseCase,
)
from fira.service.venue_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from fira.service.venue_booking.domain.entity.booking_entity import BookingStatus
from fira.service.venue_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCancelRequest,
    BookingCreateRequest,
    BookingListResponse,
    BookingPaymentResponse,
    BookingPaymentVerifyRequest,
    BookingRespondRequest,
    BookingResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        user_id=user_id,
        venue_id=request.venue_id,
        booking_date=request.booking_date,
        start_time=request.start_time,
        end_time=request.end_time,
        event_id=request.event_id,
        purpose=request.purpose,
        expected_guests=request.expected_guests,
        special_requests=request.special_requests,
    )
    return BookingResponse.model_validate(booking)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_bookings(
    booking_status: Optional[BookingStatus] = Query(default=None, alias='status'),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    result = await use_case.list_bookings(status=booking_status, page=page, limit=limit)
    return BookingListResponse(
        bookings=[BookingResponse.model_validate(b) for b in result.items],
        total=result.total,
        total_pages=result.total_pages,
        current_page=result.page,
    )


@router.get('/my', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_bookings(
    user_id: int = Depends(get_current_user_id),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_for_user(user_id=user_id)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get('/venue/{venue_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def list_venue_bookings(
    venue_id: int,
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_for_venue(venue_id=venue_id)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get('/{booking_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_booking(
    booking_id: UUID,
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingResponse:
    booking = await use_case.get_booking(booking_id=booking_id)
    return BookingResponse.model_validate(booking)


@router.put('/{booking_id}/status', status_code=status.HTTP_200_OK)
@Logger.io
async def respond_to_booking(
    booking_id: UUID,
    request: BookingRespondRequest,
    owner_id: int = Depends(get_current_user_id),
    use_case: RespondToBookingUseCase = Depends(RespondToBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        booking_id=booking_id, owner_id=owner_id, decision=request.decision, reason=request.reason
    )
    return BookingResponse.model_validate(booking)


@router.post('/{booking_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    request: BookingCancelRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id, user_id=user_id, reason=request.reason)
    return BookingResponse.model_validate(booking)


@router.post('/{booking_id}/payment', status_code=status.HTTP_201_CREATED)
@Logger.io
async def initiate_booking_payment(
    booking_id: UUID,
    user_id: int = Depends(get_current_user_id),
    use_case: InitiateBookingPaymentUseCase = Depends(InitiateBookingPaymentUseCase.depends),
) -> BookingPaymentResponse:
    result = await use_case.execute(booking_id=booking_id, user_id=user_id)
    return BookingPaymentResponse(
        booking_id=result.booking_id,
        venue_id=result.venue_id,
        booking_date=result.booking_date,
        payment_id=result.initiation.payment_id,
        order_id=result.initiation.gateway_order_id,
        key_id=result.initiation.key_id,
        currency=result.initiation.currency,
        total_amount=result.booking.total_amount,
        advance_amount=result.advance_amount,
        remaining_amount=result.remaining_amount,
    )


@router.post('/{booking_id}/payment/verify', status_code=status.HTTP_200_OK)
@Logger.io
async def complete_booking_payment(
    booking_id: UUID,
    request: BookingPaymentVerifyRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: CompleteBookingPaymentUseCase = Depends(CompleteBookingPaymentUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        booking_id=booking_id,
        user_id=user_id,
        order_id=request.razorpay_order_id,
        gateway_payment_id=request.razorpay_payment_id,
        signature=request.razorpay_signature,
    )
    return BookingResponse.model_validate(booking)
