from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from fira.platform.exception.exceptions import (
    AlreadyCancelledError,
    DomainError,
    InvalidStateError,
)
from fira.service.ticketing.domain.value_object.time_slot import TimeSlot


class BookingStatus(StrEnum):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


class BookingPaymentStatus(StrEnum):
    PENDING = 'pending'
    PAID = 'paid'
    REFUNDED = 'refunded'
    FAILED = 'failed'


class BookingDecision(StrEnum):
    """What a venue owner can answer to a booking request."""

    ACCEPT = 'accepted'
    REJECT = 'rejected'
    COMPLETE = 'completed'


CANCELLABLE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.ACCEPTED})


@attrs.define
class Booking:
    id: UUID
    user_id: int
    venue_id: int
    venue_owner_id: int
    booking_date: date
    start_time: str  # HH:MM
    end_time: str
    total_amount: int
    event_id: Optional[int] = None
    purpose: Optional[str] = None
    expected_guests: int = 0
    special_requests: Optional[str] = None
    status: BookingStatus = BookingStatus.PENDING
    rejection_reason: Optional[str] = None
    platform_fee: int = 0
    payment_status: BookingPaymentStatus = BookingPaymentStatus.PENDING
    payment_id: Optional[UUID] = None
    responded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        user_id: int,
        venue_id: int,
        venue_owner_id: int,
        booking_date: date,
        start_time: str,
        end_time: str,
        total_amount: int,
        event_id: Optional[int] = None,
        purpose: Optional[str] = None,
        expected_guests: int = 0,
        special_requests: Optional[str] = None,
    ) -> 'Booking':
        if total_amount <= 0:
            raise DomainError('Total amount must be positive')
        if expected_guests < 0:
            raise DomainError('Expected guests cannot be negative')
        TimeSlot(start_time=start_time, end_time=end_time).validate()

        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            user_id=user_id,
            venue_id=venue_id,
            venue_owner_id=venue_owner_id,
            booking_date=booking_date,
            start_time=start_time,
            end_time=end_time,
            total_amount=total_amount,
            event_id=event_id,
            purpose=purpose,
            expected_guests=expected_guests,
            special_requests=special_requests,
            created_at=now,
            updated_at=now,
        )

    @property
    def time_slot(self) -> TimeSlot:
        return TimeSlot(start_time=self.start_time, end_time=self.end_time)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == BookingPaymentStatus.PAID

    def respond(self, *, decision: BookingDecision, reason: Optional[str] = None) -> 'Booking':
        """
        pending  -> accepted | rejected
        accepted -> completed
        """
        if decision == BookingDecision.COMPLETE:
            if self.status != BookingStatus.ACCEPTED:
                raise InvalidStateError('Only accepted bookings can be completed')
        elif self.status != BookingStatus.PENDING:
            raise InvalidStateError(f'Booking is already {self.status.value}')

        now = datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=BookingStatus(decision.value),
            rejection_reason=reason if decision == BookingDecision.REJECT else None,
            responded_at=now,
            updated_at=now,
        )

    def cancel(self) -> 'Booking':
        if self.status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError('Booking is already cancelled')
        if self.status not in CANCELLABLE_STATUSES:
            raise InvalidStateError(f'Cannot cancel a {self.status.value} booking')
        return attrs.evolve(
            self, status=BookingStatus.CANCELLED, updated_at=datetime.now(timezone.utc)
        )

    def ensure_payable(self) -> None:
        if self.status != BookingStatus.ACCEPTED:
            raise InvalidStateError('Booking must be accepted before payment')
        if self.is_paid:
            raise InvalidStateError('Advance already paid')

    def mark_paid(self, *, payment_id: UUID, platform_fee: int) -> 'Booking':
        self.ensure_payable()
        return attrs.evolve(
            self,
            payment_status=BookingPaymentStatus.PAID,
            payment_id=payment_id,
            platform_fee=platform_fee,
            updated_at=datetime.now(timezone.utc),
        )

    def mark_refunded(self) -> 'Booking':
        return attrs.evolve(
            self,
            payment_status=BookingPaymentStatus.REFUNDED,
            updated_at=datetime.now(timezone.utc),
        )
