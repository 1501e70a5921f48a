from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.logging.loguru_io import Logger
from fira.service.payment.app.interface.i_payment_query_repo import IPaymentQueryRepo
from fira.service.payment.domain.entity.payment_entity import Payment, PaymentStatus, PaymentType
from fira.service.payment.domain.entity.refund_entity import Refund, RefundStatus
from fira.service.shared_kernel.app.dto.page import Page, page_offset


class ListPaymentsUseCase:
    def __init__(self, payment_query_repo: IPaymentQueryRepo) -> None:
        self.payment_query_repo = payment_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        payment_query_repo: IPaymentQueryRepo = Depends(Provide[Container.payment_query_repo]),
    ) -> Self:
        return cls(payment_query_repo=payment_query_repo)

    @Logger.io
    async def list_payments(
        self,
        *,
        status: PaymentStatus | None = None,
        payment_type: PaymentType | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[Payment]:
        payments, total = await self.payment_query_repo.list_payments(
            status=status,
            payment_type=payment_type,
            offset=page_offset(page=page, limit=limit),
            limit=limit,
        )
        return Page(items=payments, total=total, page=page, limit=limit)

    @Logger.io
    async def list_user_payments(self, *, user_id: int) -> List[Payment]:
        return await self.payment_query_repo.list_user_payments(user_id=user_id)

    @Logger.io
    async def list_refunds(
        self, *, status: RefundStatus | None = None, page: int = 1, limit: int = 20
    ) -> Page[Refund]:
        refunds, total = await self.payment_query_repo.list_refunds(
            status=status, offset=page_offset(page=page, limit=limit), limit=limit
        )
        return Page(items=refunds, total=total, page=page, limit=limit)

    @Logger.io
    async def list_user_refunds(self, *, user_id: int) -> List[Refund]:
        return await self.payment_query_repo.list_user_refunds(user_id=user_id)
