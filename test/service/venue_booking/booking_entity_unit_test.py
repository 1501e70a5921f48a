"""
Unit tests for the Booking entity

pending -> accepted | rejected, accepted -> completed, pending/accepted -> cancelled
"""

from typing import Callable

import pytest
from uuid_utils.compat import uuid7

from fira.platform.exception.exceptions import (
    AlreadyCancelledError,
    DomainError,
    InvalidStateError,
)
from fira.service.venue_booking.domain.entity.booking_entity import (
    Booking,
    BookingDecision,
    BookingPaymentStatus,
    BookingStatus,
)


@pytest.mark.unit
class TestBookingCreate:
    def test_starts_pending_and_unpaid(self, make_booking: Callable[..., Booking]):
        booking = make_booking()

        assert booking.status == BookingStatus.PENDING
        assert booking.payment_status == BookingPaymentStatus.PENDING
        assert not booking.is_paid

    @pytest.mark.parametrize(
        'overrides,message',
        [
            ({'total_amount': 0}, 'Total amount must be positive'),
            ({'expected_guests': -1}, 'Expected guests cannot be negative'),
            ({'start_time': '22:00', 'end_time': '18:00'}, 'End time must be after start time'),
        ],
    )
    def test_rejects_invalid_request(
        self, make_booking: Callable[..., Booking], overrides: dict, message: str
    ):
        with pytest.raises(DomainError, match=message):
            make_booking(**overrides)


@pytest.mark.unit
class TestBookingRespond:
    def test_accept(self, make_booking: Callable[..., Booking]):
        booking = make_booking().respond(decision=BookingDecision.ACCEPT)

        assert booking.status == BookingStatus.ACCEPTED
        assert booking.responded_at is not None
        assert booking.rejection_reason is None

    def test_reject_keeps_reason(self, make_booking: Callable[..., Booking]):
        booking = make_booking().respond(decision=BookingDecision.REJECT, reason='Renovation')

        assert booking.status == BookingStatus.REJECTED
        assert booking.rejection_reason == 'Renovation'

    def test_cannot_answer_twice(self, make_booking: Callable[..., Booking]):
        booking = make_booking().respond(decision=BookingDecision.ACCEPT)

        with pytest.raises(InvalidStateError, match='Booking is already accepted'):
            booking.respond(decision=BookingDecision.REJECT)

    def test_complete_requires_accepted(self, make_booking: Callable[..., Booking]):
        with pytest.raises(InvalidStateError, match='Only accepted bookings can be completed'):
            make_booking().respond(decision=BookingDecision.COMPLETE)

    def test_complete_accepted_booking(self, make_booking: Callable[..., Booking]):
        booking = (
            make_booking()
            .respond(decision=BookingDecision.ACCEPT)
            .respond(decision=BookingDecision.COMPLETE)
        )

        assert booking.status == BookingStatus.COMPLETED


@pytest.mark.unit
class TestBookingCancel:
    def test_cancel_pending(self, make_booking: Callable[..., Booking]):
        assert make_booking().cancel().status == BookingStatus.CANCELLED

    def test_cancel_twice(self, make_booking: Callable[..., Booking]):
        with pytest.raises(AlreadyCancelledError, match='Booking is already cancelled'):
            make_booking().cancel().cancel()

    def test_rejected_booking_cannot_be_cancelled(self, make_booking: Callable[..., Booking]):
        booking = make_booking().respond(decision=BookingDecision.REJECT)

        with pytest.raises(InvalidStateError, match='Cannot cancel a rejected booking'):
            booking.cancel()


@pytest.mark.unit
class TestBookingPayment:
    def test_pending_booking_is_not_payable(self, make_booking: Callable[..., Booking]):
        with pytest.raises(InvalidStateError, match='must be accepted before payment'):
            make_booking().ensure_payable()

    def test_mark_paid_records_payment(self, make_booking: Callable[..., Booking]):
        payment_id = uuid7()
        booking = make_booking().respond(decision=BookingDecision.ACCEPT)

        paid = booking.mark_paid(payment_id=payment_id, platform_fee=100)

        assert paid.is_paid
        assert paid.payment_id == payment_id
        assert paid.platform_fee == 100

    def test_advance_cannot_be_paid_twice(self, make_booking: Callable[..., Booking]):
        paid = (
            make_booking()
            .respond(decision=BookingDecision.ACCEPT)
            .mark_paid(payment_id=uuid7(), platform_fee=100)
        )

        with pytest.raises(InvalidStateError, match='Advance already paid'):
            paid.ensure_payable()
