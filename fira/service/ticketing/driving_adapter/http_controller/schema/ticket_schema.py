from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from fira.service.payment.domain.entity.refund_entity import RefundStatus, RefundType
from fira.service.ticketing.domain.enum.ticket_enum import TicketStatus, TicketType


class TicketPurchaseRequest(BaseModel):
    event_id: int
    quantity: int = Field(default=1, ge=1)
    ticket_type: TicketType = TicketType.GENERAL
    payment_id: Optional[UUID] = None

    model_config = {
        'json_schema_extra': {
            'examples': [
                {'event_id': 1, 'quantity': 2, 'ticket_type': 'general'},
                {
                    'event_id': 1,
                    'quantity': 2,
                    'payment_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                },
            ]
        }
    }


class TicketResponse(BaseModel):
    model_config = {'from_attributes': True}

    id: UUID
    code: str
    user_id: int
    event_id: int
    ticket_type: TicketType
    quantity: int
    price: int
    qr_payload: str
    qr_image: Optional[str] = None
    status: TicketStatus
    is_used: bool
    used_at: Optional[datetime] = None
    payment_id: Optional[UUID] = None
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    purchased_at: Optional[datetime] = None


class CheckoutResponse(BaseModel):
    """Gateway checkout the client opens before retrying the purchase with payment_id."""

    payment_id: UUID
    order_id: str
    amount: int
    currency: str
    key_id: str


class TicketPurchaseResponse(BaseModel):
    payment_required: bool
    ticket: Optional[TicketResponse] = None
    payment: Optional[CheckoutResponse] = None


class TicketValidateRequest(BaseModel):
    qr_payload: Optional[str] = None


class TicketCancelRequest(BaseModel):
    reason: Optional[str] = None


class RefundEligibilityResponse(BaseModel):
    model_config = {'from_attributes': True}

    eligible: bool
    reason: str
    refund_amount: int
    original_amount: int
    refund_percentage: int
    refund_type: str
    policy: str
    event_starts_at: datetime


class TicketRefundResponse(BaseModel):
    model_config = {'from_attributes': True}

    id: UUID
    amount: int
    refund_type: RefundType
    status: RefundStatus


class TicketCancellationResponse(BaseModel):
    ticket: TicketResponse
    refund_eligibility: RefundEligibilityResponse
    refund: Optional[TicketRefundResponse] = None
    refund_error: Optional[str] = None
