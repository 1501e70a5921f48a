from abc import ABC, abstractmethod
from uuid import UUID

from fira.service.payment.domain.entity.payment_entity import Payment
from fira.service.payment.domain.entity.refund_entity import Refund
from fira.service.payment.domain.value_object.payment_reference import PaymentReference


class IPaymentCommandRepo(ABC):
    """Payment and refund writes. Each call is its own transaction."""

    @abstractmethod
    async def get_by_id(self, *, payment_id: UUID) -> Payment | None:
        pass

    @abstractmethod
    async def get_pending_by_reference(self, *, reference: PaymentReference) -> Payment | None:
        """Most recent pending payment for a reference (booking advance checkout)."""
        pass

    @abstractmethod
    async def create(self, *, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def update(self, *, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def create_refund(self, *, refund: Refund) -> Refund:
        pass

    @abstractmethod
    async def update_refund(self, *, refund: Refund) -> Refund:
        pass
