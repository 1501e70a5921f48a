from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from fira.service.payment.domain.entity.payment_entity import (
    Payment,
    PaymentStatus,
    PaymentType,
)
from fira.service.payment.domain.entity.refund_entity import (
    RefundReason,
    RefundStatus,
    RefundType,
)


class PaymentVerifyRequest(BaseModel):
    """Fields as posted back by the Razorpay checkout handler."""

    payment_id: UUID
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str

    model_config = {
        'json_schema_extra': {
            'example': {
                'payment_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'razorpay_order_id': 'order_N5cBxLq4N2ZxYz',
                'razorpay_payment_id': 'pay_N5cC0r7bT1f2Qw',
                'razorpay_signature': '9ef4dffbfd84f1318f6739a3ce19f9d8',
            }
        }
    }


class PaymentResponse(BaseModel):
    id: UUID
    user_id: int
    payment_type: PaymentType
    reference_kind: str
    reference_id: str
    amount: int
    platform_fee: int
    net_amount: int
    currency: str
    status: PaymentStatus
    gateway_order_id: Optional[str] = None
    gateway_transaction_id: Optional[str] = None
    failure_reason: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, payment: Payment) -> 'PaymentResponse':
        return cls(
            id=payment.id,
            user_id=payment.user_id,
            payment_type=payment.payment_type,
            reference_kind=payment.reference.kind.value,
            reference_id=payment.reference.reference_id,
            amount=payment.amount,
            platform_fee=payment.platform_fee,
            net_amount=payment.net_amount,
            currency=payment.currency,
            status=payment.status,
            gateway_order_id=payment.gateway_order_id,
            gateway_transaction_id=payment.gateway_transaction_id,
            failure_reason=payment.failure_reason,
            paid_at=payment.paid_at,
            created_at=payment.created_at,
        )


class PaymentListResponse(BaseModel):
    payments: List[PaymentResponse]
    total: int
    total_pages: int
    current_page: int


class RefundCreateRequest(BaseModel):
    reason: RefundReason = RefundReason.ADMIN_INITIATED
    reason_details: Optional[str] = None
    amount: Optional[int] = Field(default=None, gt=0)

    model_config = {
        'json_schema_extra': {
            'example': {'reason': 'duplicate_payment', 'reason_details': None, 'amount': 250}
        }
    }


class RefundResponse(BaseModel):
    model_config = {'from_attributes': True}

    id: UUID
    payment_id: UUID
    user_id: int
    reason: RefundReason
    reason_details: Optional[str] = None
    amount: int
    refund_type: RefundType
    status: RefundStatus
    gateway_refund_id: Optional[str] = None
    failure_reason: Optional[str] = None
    requested_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None


class RefundListResponse(BaseModel):
    refunds: List[RefundResponse]
    total: int
    total_pages: int
    current_page: int
