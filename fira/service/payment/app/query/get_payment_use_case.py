from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.payment.app.interface.i_payment_query_repo import IPaymentQueryRepo
from fira.service.payment.domain.entity.payment_entity import Payment
from fira.service.payment.domain.entity.refund_entity import Refund


class GetPaymentUseCase:
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
    async def get_payment(self, *, payment_id: UUID) -> Payment:
        payment = await self.payment_query_repo.get_payment(payment_id=payment_id)
        if not payment:
            raise NotFoundError('Payment not found')
        return payment

    @Logger.io
    async def get_refund(self, *, refund_id: UUID) -> Refund:
        refund = await self.payment_query_repo.get_refund(refund_id=refund_id)
        if not refund:
            raise NotFoundError('Refund not found')
        return refund
