"""
Razorpay adapter over the official SDK

The SDK is blocking (requests), so orders and refunds run in a worker thread.

https://razorpay.com/docs/payments/server-integration/python/
https://razorpay.com/docs/api/refunds/create-normal/
"""

from functools import partial
import time
from typing import Any, Callable

import anyio
from pydantic import SecretStr
import razorpay

from fira.platform.exception.exceptions import ConfigurationMissingError, PaymentGatewayError
from fira.platform.logging.loguru_io import Logger
from fira.platform.metrics.marketplace_metrics import metrics
from fira.service.payment.app.dto.gateway_dto import GatewayOrder, GatewayRefund
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.money import to_minor_unit


# Raised by the SDK when the gateway answers with an error body
_REJECTIONS = (
    razorpay.errors.BadRequestError,
    razorpay.errors.GatewayError,
    razorpay.errors.ServerError,
)


class RazorpayGatewayImpl(IPaymentGateway):
    def __init__(
        self,
        *,
        key_id: str | None,
        key_secret: SecretStr | None,
        timeout: float,
        client: razorpay.Client | None = None,
    ) -> None:
        self._key_id = key_id
        self._key_secret = key_secret
        self._timeout = timeout
        self._client = client

    @property
    def key_id(self) -> str:
        self._ensure_configured()
        return self._key_id or ''

    def _ensure_configured(self) -> tuple[str, str]:
        if not self._key_id or not self._key_secret:
            raise ConfigurationMissingError(
                'Payment gateway credentials are not configured '
                '(RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET)'
            )
        return self._key_id, self._key_secret.get_secret_value()

    def _get_client(self) -> razorpay.Client:
        credentials = self._ensure_configured()
        if self._client is None:
            self._client = razorpay.Client(auth=credentials)
        return self._client

    async def _call(self, operation: str, request: Callable[[], dict[str, Any]]) -> dict[str, Any]:
        started = time.perf_counter()
        try:
            return await anyio.to_thread.run_sync(request)
        except _REJECTIONS as e:
            Logger.base.warning(f'⚠️ [GATEWAY] {operation} rejected: {e}')
            raise PaymentGatewayError(f'Payment gateway error: {e}') from e
        except OSError as e:
            # requests.RequestException is an OSError
            raise PaymentGatewayError(f'Payment gateway unreachable: {e}') from e
        finally:
            metrics.observe_gateway_call(
                operation=operation, duration=time.perf_counter() - started
            )

    @Logger.io
    async def create_order(
        self, *, amount: int, currency: str, receipt: str, notes: dict[str, Any]
    ) -> GatewayOrder:
        client = self._get_client()
        payload = await self._call(
            'create_order',
            partial(
                client.order.create,
                {
                    'amount': to_minor_unit(amount),
                    'currency': currency,
                    'receipt': receipt,
                    'notes': notes,
                },
                timeout=self._timeout,
            ),
        )
        return GatewayOrder(
            order_id=payload['id'],
            amount_minor=payload.get('amount', to_minor_unit(amount)),
            currency=payload.get('currency', currency),
            raw=payload,
        )

    @Logger.io
    async def refund_payment(
        self, *, transaction_id: str, amount: int, notes: dict[str, Any]
    ) -> GatewayRefund:
        client = self._get_client()
        payload = await self._call(
            'refund_payment',
            partial(
                client.payment.refund,
                transaction_id,
                {'amount': to_minor_unit(amount), 'speed': 'normal', 'notes': notes},
                timeout=self._timeout,
            ),
        )
        return GatewayRefund(
            refund_id=payload['id'],
            status=payload.get('status', 'pending'),
            raw=payload,
        )

    def verify_signature(self, *, order_id: str, gateway_payment_id: str, signature: str) -> bool:
        client = self._get_client()
        try:
            client.utility.verify_payment_signature(
                {
                    'razorpay_order_id': order_id,
                    'razorpay_payment_id': gateway_payment_id,
                    'razorpay_signature': signature,
                }
            )
        except razorpay.errors.SignatureVerificationError:
            return False
        return True

    async def aclose(self) -> None:
        if self._client is not None:
            self._client.session.close()
            self._client = None
