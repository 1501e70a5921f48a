"""Unit tests for InitiatePaymentUseCase"""

from unittest.mock import AsyncMock, Mock

import pytest

from fira.platform.exception.exceptions import DomainError, PaymentGatewayError
from fira.service.payment.app.command.initiate_payment_use_case import InitiatePaymentUseCase
from fira.service.payment.app.dto.gateway_dto import GatewayOrder
from fira.service.payment.domain.entity.payment_entity import PaymentStatus, PaymentType
from fira.service.payment.domain.value_object.payment_reference import EventReference


@pytest.fixture
def payment_command_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = lambda *, payment: payment
    return repo


@pytest.fixture
def payment_gateway() -> AsyncMock:
    gateway = AsyncMock()
    gateway.key_id = 'rzp_test_key'
    gateway.create_order.return_value = GatewayOrder(
        order_id='order_new', amount_minor=100000, currency='INR', raw={'id': 'order_new'}
    )
    return gateway


@pytest.fixture
def use_case(payment_command_repo: AsyncMock, payment_gateway: AsyncMock) -> InitiatePaymentUseCase:
    settings = Mock(PAYMENT_CURRENCY='INR', PLATFORM_FEE_PERCENTAGE=5)
    return InitiatePaymentUseCase(
        payment_command_repo=payment_command_repo,
        payment_gateway=payment_gateway,
        settings=settings,
    )


@pytest.mark.unit
class TestInitiatePayment:
    @pytest.mark.asyncio
    async def test_opens_order_and_records_pending_payment(
        self, use_case: InitiatePaymentUseCase, payment_gateway: AsyncMock
    ):
        # Act
        initiation = await use_case.execute(
            user_id=20,
            payment_type=PaymentType.TICKET_PURCHASE,
            reference=EventReference(event_id=3),
            amount=1000,
            notes={'ticket_type': 'vip'},
        )

        # Assert
        assert initiation.key_id == 'rzp_test_key'
        assert initiation.gateway_order_id == 'order_new'
        assert initiation.amount == 1000
        assert initiation.payment.status == PaymentStatus.PENDING
        assert initiation.payment.platform_fee == 50
        assert initiation.payment.net_amount == 950

        order_call = payment_gateway.create_order.call_args.kwargs
        assert order_call['receipt'] == 'event_3'
        assert order_call['notes']['reference_kind'] == 'event'
        assert order_call['notes']['ticket_type'] == 'vip'

    @pytest.mark.asyncio
    async def test_gateway_refusal_persists_nothing(
        self,
        use_case: InitiatePaymentUseCase,
        payment_gateway: AsyncMock,
        payment_command_repo: AsyncMock,
    ):
        payment_gateway.create_order.side_effect = PaymentGatewayError('Payment gateway error: x')

        with pytest.raises(PaymentGatewayError):
            await use_case.execute(
                user_id=20,
                payment_type=PaymentType.TICKET_PURCHASE,
                reference=EventReference(event_id=3),
                amount=1000,
            )
        payment_command_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_zero_amount_is_rejected(
        self, use_case: InitiatePaymentUseCase, payment_gateway: AsyncMock
    ):
        with pytest.raises(DomainError, match='must be positive'):
            await use_case.execute(
                user_id=20,
                payment_type=PaymentType.TICKET_PURCHASE,
                reference=EventReference(event_id=3),
                amount=0,
            )
        payment_gateway.create_order.assert_not_called()
