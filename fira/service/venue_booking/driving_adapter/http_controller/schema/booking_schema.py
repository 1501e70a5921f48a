from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from fira.service.venue_booking.domain.entity.booking_entity import (
    BookingDecision,
    BookingPaymentStatus,
    BookingStatus,
)


class BookingCreateRequest(BaseModel):
    venue_id: int
    booking_date: date
    start_time: str = Field(pattern=r'^\d{2}:\d{2}$')
    end_time: str = Field(pattern=r'^\d{2}:\d{2}$')
    event_id: Optional[int] = None
    purpose: Optional[str] = None
    expected_guests: int = Field(default=0, ge=0)
    special_requests: Optional[str] = None

    model_config = {
        'json_schema_extra': {
            'example': {
                'venue_id': 7,
                'booking_date': '2026-12-31',
                'start_time': '18:00',
                'end_time': '23:00',
                'purpose': 'New year party',
                'expected_guests': 150,
            }
        }
    }


class BookingResponse(BaseModel):
    model_config = {'from_attributes': True}

    id: UUID
    user_id: int
    venue_id: int
    venue_owner_id: int
    event_id: Optional[int] = None
    booking_date: date
    start_time: str
    end_time: str
    purpose: Optional[str] = None
    expected_guests: int
    special_requests: Optional[str] = None
    status: BookingStatus
    rejection_reason: Optional[str] = None
    total_amount: int
    platform_fee: int
    payment_status: BookingPaymentStatus
    payment_id: Optional[UUID] = None
    responded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    total: int
    total_pages: int
    current_page: int


class BookingRespondRequest(BaseModel):
    decision: BookingDecision
    reason: Optional[str] = None

    model_config = {'json_schema_extra': {'example': {'decision': 'rejected', 'reason': 'Closed'}}}


class BookingCancelRequest(BaseModel):
    reason: Optional[str] = None


class BookingPaymentResponse(BaseModel):
    booking_id: UUID
    venue_id: int
    booking_date: date
    payment_id: UUID
    order_id: str
    key_id: str
    currency: str
    total_amount: int
    advance_amount: int
    remaining_amount: int


class BookingPaymentVerifyRequest(BaseModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str
