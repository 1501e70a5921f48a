from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from fira.platform.exception.exceptions import InvalidStateError


class RefundReason(StrEnum):
    EVENT_CANCELLED = 'event_cancelled'
    BOOKING_CANCELLED = 'booking_cancelled'
    DUPLICATE_PAYMENT = 'duplicate_payment'
    ADMIN_INITIATED = 'admin_initiated'
    USER_REQUEST = 'user_request'
    OTHER = 'other'


class RefundType(StrEnum):
    FULL = 'full'
    PARTIAL = 'partial'


class RefundStatus(StrEnum):
    PENDING = 'pending'
    PROCESSING = 'processing'
    COMPLETED = 'completed'
    FAILED = 'failed'


# Gateway refund state that means money has already moved
GATEWAY_REFUND_PROCESSED = 'processed'


@attrs.define
class Refund:
    id: UUID
    payment_id: UUID
    user_id: int
    reason: RefundReason
    amount: int
    refund_type: RefundType
    reason_details: Optional[str] = None
    status: RefundStatus = RefundStatus.PENDING
    gateway_refund_id: Optional[str] = None
    gateway_response: Optional[dict[str, Any]] = None
    failure_reason: Optional[str] = None
    requested_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        payment_id: UUID,
        user_id: int,
        reason: RefundReason,
        amount: int,
        payment_amount: int,
        reason_details: Optional[str] = None,
    ) -> 'Refund':
        return cls(
            id=uuid7(),
            payment_id=payment_id,
            user_id=user_id,
            reason=reason,
            amount=amount,
            refund_type=RefundType.FULL if amount == payment_amount else RefundType.PARTIAL,
            reason_details=reason_details,
            status=RefundStatus.PENDING,
            requested_at=datetime.now(timezone.utc),
        )

    def _ensure_pending(self) -> None:
        if self.status != RefundStatus.PENDING:
            raise InvalidStateError(f'Refund is already {self.status.value}')

    def mark_processed(
        self, *, gateway_refund_id: str, gateway_status: str, gateway_response: dict[str, Any]
    ) -> 'Refund':
        self._ensure_pending()
        return attrs.evolve(
            self,
            status=(
                RefundStatus.COMPLETED
                if gateway_status == GATEWAY_REFUND_PROCESSED
                else RefundStatus.PROCESSING
            ),
            gateway_refund_id=gateway_refund_id,
            gateway_response=gateway_response,
            processed_at=datetime.now(timezone.utc),
        )

    def mark_failed(self, *, reason: str) -> 'Refund':
        self._ensure_pending()
        return attrs.evolve(
            self,
            status=RefundStatus.FAILED,
            failure_reason=reason,
            processed_at=datetime.now(timezone.utc),
        )
