from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from fira.platform.exception.exceptions import DomainError, InvalidStateError
from fira.service.payment.domain.money import percentage_of
from fira.service.payment.domain.value_object.payment_reference import PaymentReference


class PaymentType(StrEnum):
    TICKET_PURCHASE = 'ticket_purchase'
    VENUE_BOOKING = 'venue_booking'


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    SUCCESS = 'success'
    FAILED = 'failed'
    REFUNDED = 'refunded'


@attrs.define
class Payment:
    id: UUID
    user_id: int
    payment_type: PaymentType
    reference: PaymentReference
    amount: int
    platform_fee: int
    net_amount: int
    currency: str = 'INR'
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[str] = None
    gateway_order_id: Optional[str] = None
    gateway_transaction_id: Optional[str] = None
    gateway_response: Optional[dict[str, Any]] = None
    failure_reason: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        user_id: int,
        payment_type: PaymentType,
        reference: PaymentReference,
        amount: int,
        currency: str,
        platform_fee_percentage: int,
        gateway_order_id: str,
        gateway_response: dict[str, Any],
    ) -> 'Payment':
        if amount <= 0:
            raise DomainError('Payment amount must be positive')

        platform_fee = percentage_of(amount, platform_fee_percentage)
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            user_id=user_id,
            payment_type=payment_type,
            reference=reference,
            amount=amount,
            platform_fee=platform_fee,
            net_amount=amount - platform_fee,
            currency=currency,
            status=PaymentStatus.PENDING,
            gateway_order_id=gateway_order_id,
            gateway_response=gateway_response,
            created_at=now,
            updated_at=now,
        )

    def mark_success(
        self, *, transaction_id: str, gateway_response: Optional[dict[str, Any]] = None
    ) -> 'Payment':
        if self.status != PaymentStatus.PENDING:
            raise InvalidStateError(f'Payment is already {self.status.value}')
        now = datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=PaymentStatus.SUCCESS,
            gateway_transaction_id=transaction_id,
            gateway_response=gateway_response or self.gateway_response,
            paid_at=now,
            updated_at=now,
        )

    def mark_failed(self, *, reason: str) -> 'Payment':
        if self.status != PaymentStatus.PENDING:
            raise InvalidStateError(f'Payment is already {self.status.value}')
        return attrs.evolve(
            self,
            status=PaymentStatus.FAILED,
            failure_reason=reason,
            updated_at=datetime.now(timezone.utc),
        )

    def ensure_refundable(self) -> None:
        if self.status != PaymentStatus.SUCCESS:
            raise InvalidStateError('Can only refund successful payments')
        if not self.gateway_transaction_id:
            raise InvalidStateError('Payment has no gateway transaction to refund')

    def mark_refunded(self) -> 'Payment':
        self.ensure_refundable()
        return attrs.evolve(
            self,
            status=PaymentStatus.REFUNDED,
            updated_at=datetime.now(timezone.utc),
        )
