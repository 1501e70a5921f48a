from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from fira.platform.exception.exceptions import ForbiddenError
from fira.platform.logging.loguru_io import Logger
from fira.service.payment.app.command.request_refund_use_case import RequestRefundUseCase
from fira.service.payment.app.command.verify_payment_use_case import VerifyPaymentUseCase
from fira.service.payment.app.query.get_payment_use_case import GetPaymentUseCase
from fira.service.payment.app.query.list_payments_use_case import ListPaymentsUseCase
from fira.service.payment.domain.entity.payment_entity import PaymentStatus, PaymentType
from fira.service.payment.domain.entity.refund_entity import RefundStatus
from fira.service.payment.driving_adapter.http_controller.schema.payment_schema import (
    PaymentListResponse,
    PaymentResponse,
    PaymentVerifyRequest,
    RefundCreateRequest,
    RefundListResponse,
    RefundResponse,
)
from fira.service.shared_kernel.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)


router = APIRouter()


@router.post('/verify', status_code=status.HTTP_200_OK)
@Logger.io
async def verify_payment(
    request: PaymentVerifyRequest,
    use_case: VerifyPaymentUseCase = Depends(VerifyPaymentUseCase.depends),
) -> PaymentResponse:
    payment = await use_case.execute(
        payment_id=request.payment_id,
        order_id=request.razorpay_order_id,
        gateway_payment_id=request.razorpay_payment_id,
        signature=request.razorpay_signature,
    )
    return PaymentResponse.from_entity(payment)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_payments(
    payment_status: Optional[PaymentStatus] = Query(default=None, alias='status'),
    payment_type: Optional[PaymentType] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    use_case: ListPaymentsUseCase = Depends(ListPaymentsUseCase.depends),
) -> PaymentListResponse:
    result = await use_case.list_payments(
        status=payment_status, payment_type=payment_type, page=page, limit=limit
    )
    return PaymentListResponse(
        payments=[PaymentResponse.from_entity(p) for p in result.items],
        total=result.total,
        total_pages=result.total_pages,
        current_page=result.page,
    )


@router.get('/my', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_payments(
    user_id: int = Depends(get_current_user_id),
    use_case: ListPaymentsUseCase = Depends(ListPaymentsUseCase.depends),
) -> List[PaymentResponse]:
    payments = await use_case.list_user_payments(user_id=user_id)
    return [PaymentResponse.from_entity(p) for p in payments]


# ============================ Refunds ============================


@router.get('/refunds', status_code=status.HTTP_200_OK)
@Logger.io
async def list_refunds(
    refund_status: Optional[RefundStatus] = Query(default=None, alias='status'),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    use_case: ListPaymentsUseCase = Depends(ListPaymentsUseCase.depends),
) -> RefundListResponse:
    result = await use_case.list_refunds(status=refund_status, page=page, limit=limit)
    return RefundListResponse(
        refunds=[RefundResponse.model_validate(r) for r in result.items],
        total=result.total,
        total_pages=result.total_pages,
        current_page=result.page,
    )


@router.get('/refunds/my', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_refunds(
    user_id: int = Depends(get_current_user_id),
    use_case: ListPaymentsUseCase = Depends(ListPaymentsUseCase.depends),
) -> List[RefundResponse]:
    refunds = await use_case.list_user_refunds(user_id=user_id)
    return [RefundResponse.model_validate(r) for r in refunds]


@router.get('/refunds/{refund_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_refund(
    refund_id: UUID,
    user_id: int = Depends(get_current_user_id),
    use_case: GetPaymentUseCase = Depends(GetPaymentUseCase.depends),
) -> RefundResponse:
    refund = await use_case.get_refund(refund_id=refund_id)
    if refund.user_id != user_id:
        raise ForbiddenError('Unauthorized: This refund belongs to another user')
    return RefundResponse.model_validate(refund)


@router.get('/{payment_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_payment(
    payment_id: UUID,
    user_id: int = Depends(get_current_user_id),
    use_case: GetPaymentUseCase = Depends(GetPaymentUseCase.depends),
) -> PaymentResponse:
    payment = await use_case.get_payment(payment_id=payment_id)
    if payment.user_id != user_id:
        raise ForbiddenError('Unauthorized: This payment belongs to another user')
    return PaymentResponse.from_entity(payment)


@router.post('/{payment_id}/refund', status_code=status.HTTP_201_CREATED)
@Logger.io
async def request_refund(
    payment_id: UUID,
    request: RefundCreateRequest,
    use_case: RequestRefundUseCase = Depends(RequestRefundUseCase.depends),
) -> RefundResponse:
    """Manual refund, e.g. for a duplicate payment. Omit amount for a full refund."""
    refund = await use_case.execute(
        payment_id=payment_id,
        reason=request.reason,
        reason_details=request.reason_details,
        amount=request.amount,
    )
    return RefundResponse.model_validate(refund)
