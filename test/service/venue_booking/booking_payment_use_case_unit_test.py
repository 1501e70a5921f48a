"""
Unit tests for the booking advance payment

The requester pays a share of the total once the owner has accepted, then
confirms the checkout signature to mark the booking paid.
"""

from typing import Callable
from unittest.mock import AsyncMock

import pytest

from fira.platform.exception.exceptions import (
    InvalidStateError,
    NotFoundError,
    SignatureMismatchError,
)
from fira.service.payment.app.dto.gateway_dto import PaymentInitiation
from fira.service.payment.domain.entity.payment_entity import Payment, PaymentStatus, PaymentType
from fira.service.payment.domain.value_object.payment_reference import BookingReference
from fira.service.venue_booking.app.command.complete_booking_payment_use_case import (
    CompleteBookingPaymentUseCase,
)
from fira.service.venue_booking.app.command.initiate_booking_payment_use_case import (
    InitiateBookingPaymentUseCase,
)
from fira.service.venue_booking.domain.entity.booking_entity import (
    Booking,
    BookingDecision,
    BookingPaymentStatus,
)


@pytest.fixture
def accepted_booking(make_booking: Callable[..., Booking]) -> Booking:
    return make_booking().respond(decision=BookingDecision.ACCEPT)


@pytest.fixture
def booking_command_repo(accepted_booking: Booking) -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = accepted_booking
    repo.update.side_effect = lambda *, booking: booking
    return repo


@pytest.mark.unit
class TestInitiateBookingPayment:
    @pytest.fixture
    def initiate_payment(self, make_payment: Callable[..., Payment]) -> AsyncMock:
        use_case = AsyncMock()
        use_case.execute.return_value = PaymentInitiation(
            payment=make_payment(
                status=PaymentStatus.PENDING, amount=2000, payment_type=PaymentType.VENUE_BOOKING
            ),
            key_id='rzp_test_key',
        )
        return use_case

    @pytest.fixture
    def use_case(
        self, booking_command_repo: AsyncMock, initiate_payment: AsyncMock
    ) -> InitiateBookingPaymentUseCase:
        return InitiateBookingPaymentUseCase(
            booking_command_repo=booking_command_repo,
            initiate_payment=initiate_payment,
            advance_percentage=10,
        )

    @pytest.mark.asyncio
    async def test_charges_advance_share(
        self,
        use_case: InitiateBookingPaymentUseCase,
        initiate_payment: AsyncMock,
        accepted_booking: Booking,
    ):
        # Act
        result = await use_case.execute(booking_id=accepted_booking.id, user_id=20)

        # Assert
        assert result.advance_amount == 2000
        assert result.remaining_amount == 18000
        call = initiate_payment.execute.call_args.kwargs
        assert call['amount'] == 2000
        assert call['payment_type'] == PaymentType.VENUE_BOOKING
        assert call['reference'] == BookingReference(booking_id=accepted_booking.id)

    @pytest.mark.asyncio
    async def test_pending_booking_cannot_be_paid(
        self,
        use_case: InitiateBookingPaymentUseCase,
        booking_command_repo: AsyncMock,
        initiate_payment: AsyncMock,
        make_booking: Callable[..., Booking],
    ):
        booking_command_repo.get_by_id.return_value = make_booking()

        with pytest.raises(InvalidStateError, match='must be accepted before payment'):
            await use_case.execute(booking_id=make_booking().id, user_id=20)
        initiate_payment.execute.assert_not_called()


@pytest.mark.unit
class TestCompleteBookingPayment:
    @pytest.fixture
    def pending_payment(self, make_payment: Callable[..., Payment]) -> Payment:
        return make_payment(
            status=PaymentStatus.PENDING,
            payment_type=PaymentType.VENUE_BOOKING,
            amount=2000,
            platform_fee=100,
            net_amount=1900,
            gateway_transaction_id=None,
        )

    @pytest.fixture
    def payment_command_repo(self, pending_payment: Payment) -> AsyncMock:
        repo = AsyncMock()
        repo.get_pending_by_reference.return_value = pending_payment
        return repo

    @pytest.fixture
    def verify_payment(self, pending_payment: Payment) -> AsyncMock:
        use_case = AsyncMock()
        use_case.execute.return_value = pending_payment.mark_success(transaction_id='pay_adv_1')
        return use_case

    @pytest.fixture
    def use_case(
        self,
        booking_command_repo: AsyncMock,
        payment_command_repo: AsyncMock,
        verify_payment: AsyncMock,
    ) -> CompleteBookingPaymentUseCase:
        return CompleteBookingPaymentUseCase(
            booking_command_repo=booking_command_repo,
            payment_command_repo=payment_command_repo,
            verify_payment=verify_payment,
        )

    @pytest.mark.asyncio
    async def test_verified_signature_marks_booking_paid(
        self,
        use_case: CompleteBookingPaymentUseCase,
        verify_payment: AsyncMock,
        accepted_booking: Booking,
        pending_payment: Payment,
    ):
        # Act
        booking = await use_case.execute(
            booking_id=accepted_booking.id,
            user_id=20,
            order_id='order_test_1',
            gateway_payment_id='pay_adv_1',
            signature='sig',
        )

        # Assert
        assert booking.payment_status == BookingPaymentStatus.PAID
        assert booking.payment_id == pending_payment.id
        assert booking.platform_fee == 100
        assert verify_payment.execute.call_args.kwargs['payment_id'] == pending_payment.id

    @pytest.mark.asyncio
    async def test_signature_mismatch_leaves_booking_unpaid(
        self,
        use_case: CompleteBookingPaymentUseCase,
        booking_command_repo: AsyncMock,
        verify_payment: AsyncMock,
        accepted_booking: Booking,
    ):
        verify_payment.execute.side_effect = SignatureMismatchError()

        with pytest.raises(SignatureMismatchError):
            await use_case.execute(
                booking_id=accepted_booking.id,
                user_id=20,
                order_id='order_test_1',
                gateway_payment_id='pay_adv_1',
                signature='forged',
            )
        booking_command_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_checkout_opened(
        self,
        use_case: CompleteBookingPaymentUseCase,
        payment_command_repo: AsyncMock,
        accepted_booking: Booking,
    ):
        payment_command_repo.get_pending_by_reference.return_value = None

        with pytest.raises(NotFoundError, match='No pending payment for this booking'):
            await use_case.execute(
                booking_id=accepted_booking.id,
                user_id=20,
                order_id='order_test_1',
                gateway_payment_id='pay_adv_1',
                signature='sig',
            )
