from abc import ABC, abstractmethod
from typing import Any

from fira.service.payment.app.dto.gateway_dto import GatewayOrder, GatewayRefund


class IPaymentGateway(ABC):
    """
    Third-party payment gateway (orders, refunds, callback signatures).

    Every method raises ConfigurationMissingError when credentials are not
    configured, and PaymentGatewayError when the gateway rejects the call.
    """

    @property
    @abstractmethod
    def key_id(self) -> str:
        """Public key id the client checkout is opened with."""
        pass

    @abstractmethod
    async def create_order(
        self, *, amount: int, currency: str, receipt: str, notes: dict[str, Any]
    ) -> GatewayOrder:
        """Create an order for `amount` in the major unit; converted to the minor unit here."""
        pass

    @abstractmethod
    async def refund_payment(
        self, *, transaction_id: str, amount: int, notes: dict[str, Any]
    ) -> GatewayRefund:
        pass

    @abstractmethod
    def verify_signature(self, *, order_id: str, gateway_payment_id: str, signature: str) -> bool:
        pass

    @abstractmethod
    async def aclose(self) -> None:
        pass
