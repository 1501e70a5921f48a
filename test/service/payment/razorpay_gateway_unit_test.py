"""
Unit tests for the Razorpay adapter

The SDK client is a Mock for orders and refunds; nothing leaves the process.
Signature checks run through a real SDK client, which needs no network.
"""

import hashlib
import hmac
from unittest.mock import Mock

from pydantic import SecretStr
import pytest
import razorpay

from fira.platform.exception.exceptions import ConfigurationMissingError, PaymentGatewayError
from fira.service.payment.driven_adapter.gateway.razorpay_gateway_impl import RazorpayGatewayImpl


KEY_ID = 'rzp_test_key'
KEY_SECRET = 'rzp_test_secret'


def _gateway(
    client: razorpay.Client | Mock | None = None, *, key_id: str | None = KEY_ID
) -> RazorpayGatewayImpl:
    return RazorpayGatewayImpl(
        key_id=key_id,
        key_secret=SecretStr(KEY_SECRET) if key_id else None,
        timeout=5.0,
        client=client,
    )


@pytest.fixture
def sdk_client() -> Mock:
    return Mock()


@pytest.mark.unit
class TestRazorpayGateway:
    @pytest.mark.asyncio
    async def test_create_order_sends_amount_in_paise(self, sdk_client: Mock):
        # Arrange
        sdk_client.order.create.return_value = {
            'id': 'order_abc',
            'amount': 50000,
            'currency': 'INR',
        }
        gateway = _gateway(sdk_client)

        # Act
        order = await gateway.create_order(
            amount=500, currency='INR', receipt='event_1', notes={'user_id': '20'}
        )

        # Assert
        assert order.order_id == 'order_abc'
        assert order.amount_minor == 50000
        (body,) = sdk_client.order.create.call_args.args
        assert body['amount'] == 50000
        assert body['receipt'] == 'event_1'
        assert body['notes'] == {'user_id': '20'}
        assert sdk_client.order.create.call_args.kwargs['timeout'] == 5.0

    @pytest.mark.asyncio
    async def test_refund_goes_through_payment_refund(self, sdk_client: Mock):
        # Arrange
        sdk_client.payment.refund.return_value = {'id': 'rfnd_1', 'status': 'processed'}
        gateway = _gateway(sdk_client)

        # Act
        refund = await gateway.refund_payment(
            transaction_id='pay_xyz', amount=250, notes={'reason': 'user_request'}
        )

        # Assert
        assert refund.refund_id == 'rfnd_1'
        assert refund.status == 'processed'
        transaction_id, body = sdk_client.payment.refund.call_args.args
        assert transaction_id == 'pay_xyz'
        assert body['amount'] == 25000
        assert body['speed'] == 'normal'

    @pytest.mark.asyncio
    async def test_refund_without_status_is_pending(self, sdk_client: Mock):
        sdk_client.payment.refund.return_value = {'id': 'rfnd_2'}

        refund = await _gateway(sdk_client).refund_payment(
            transaction_id='pay_1', amount=100, notes={}
        )

        assert refund.status == 'pending'

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'error',
        [
            razorpay.errors.BadRequestError('Invalid amount'),
            razorpay.errors.GatewayError('Invalid amount'),
            razorpay.errors.ServerError('Invalid amount'),
        ],
    )
    async def test_gateway_rejection_keeps_description(self, sdk_client: Mock, error: Exception):
        sdk_client.order.create.side_effect = error

        with pytest.raises(PaymentGatewayError, match='Payment gateway error: Invalid amount'):
            await _gateway(sdk_client).create_order(
                amount=500, currency='INR', receipt='r', notes={}
            )

    @pytest.mark.asyncio
    async def test_network_failure_raises_gateway_error(self, sdk_client: Mock):
        sdk_client.payment.refund.side_effect = ConnectionError('connection refused')

        with pytest.raises(PaymentGatewayError, match='unreachable'):
            await _gateway(sdk_client).refund_payment(
                transaction_id='pay_1', amount=100, notes={}
            )

    @pytest.mark.asyncio
    async def test_unconfigured_gateway_refuses_orders(self, sdk_client: Mock):
        gateway = _gateway(sdk_client, key_id=None)

        with pytest.raises(ConfigurationMissingError):
            await gateway.create_order(amount=500, currency='INR', receipt='r', notes={})
        sdk_client.order.create.assert_not_called()

    def test_unconfigured_gateway_has_no_key_id(self):
        with pytest.raises(ConfigurationMissingError):
            _ = _gateway(key_id=None).key_id

    def test_verify_signature_uses_key_secret(self):
        # Arrange
        gateway = _gateway(razorpay.Client(auth=(KEY_ID, KEY_SECRET)))
        signature = hmac.new(
            KEY_SECRET.encode(), b'order_1|pay_1', hashlib.sha256
        ).hexdigest()

        # Act / Assert
        assert gateway.verify_signature(
            order_id='order_1', gateway_payment_id='pay_1', signature=signature
        )
        assert not gateway.verify_signature(
            order_id='order_1', gateway_payment_id='pay_2', signature=signature
        )
        assert not gateway.verify_signature(
            order_id='order_1', gateway_payment_id='pay_1', signature='0' * 64
        )

    @pytest.mark.asyncio
    async def test_aclose_closes_sdk_session(self, sdk_client: Mock):
        gateway = _gateway(sdk_client)

        await gateway.aclose()

        sdk_client.session.close.assert_called_once()
