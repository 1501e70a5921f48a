from typing import Any
from uuid import UUID

import attrs

from fira.service.payment.domain.entity.payment_entity import Payment


@attrs.frozen
class GatewayOrder:
    order_id: str
    amount_minor: int
    currency: str
    raw: dict[str, Any]


@attrs.frozen
class GatewayRefund:
    refund_id: str
    status: str
    raw: dict[str, Any]


@attrs.frozen
class PaymentInitiation:
    """What the client needs to open the gateway checkout."""

    payment: Payment
    key_id: str

    @property
    def payment_id(self) -> UUID:
        return self.payment.id

    @property
    def gateway_order_id(self) -> str:
        return self.payment.gateway_order_id or ''

    @property
    def amount(self) -> int:
        return self.payment.amount

    @property
    def currency(self) -> str:
        return self.payment.currency

