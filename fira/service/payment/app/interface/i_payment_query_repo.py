from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from fira.service.payment.domain.entity.payment_entity import Payment, PaymentStatus, PaymentType
from fira.service.payment.domain.entity.refund_entity import Refund, RefundStatus


class IPaymentQueryRepo(ABC):
    @abstractmethod
    async def get_payment(self, *, payment_id: UUID) -> Payment | None:
        pass

    @abstractmethod
    async def list_payments(
        self,
        *,
        status: PaymentStatus | None,
        payment_type: PaymentType | None,
        offset: int,
        limit: int,
    ) -> tuple[List[Payment], int]:
        """Newest first; returns (page, total matching)."""
        pass

    @abstractmethod
    async def list_user_payments(self, *, user_id: int) -> List[Payment]:
        pass

    @abstractmethod
    async def get_refund(self, *, refund_id: UUID) -> Refund | None:
        pass

    @abstractmethod
    async def list_refunds(
        self, *, status: RefundStatus | None, offset: int, limit: int
    ) -> tuple[List[Refund], int]:
        pass

    @abstractmethod
    async def list_user_refunds(self, *, user_id: int) -> List[Refund]:
        pass
