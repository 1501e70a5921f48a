from typing import AsyncContextManager, Callable, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.logging.loguru_io import Logger
from fira.service.payment.app.interface.i_payment_query_repo import IPaymentQueryRepo
from fira.service.payment.domain.entity.payment_entity import Payment, PaymentStatus, PaymentType
from fira.service.payment.domain.entity.refund_entity import Refund, RefundStatus
from fira.service.payment.driven_adapter.model.payment_model import PaymentModel, RefundModel
from fira.service.payment.driven_adapter.repo.payment_mapper import (
    payment_model_to_entity,
    refund_model_to_entity,
)


class PaymentQueryRepoImpl(IPaymentQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_payment(self, *, payment_id: UUID) -> Payment | None:
        async with self.session_factory() as session:
            model = await session.get(PaymentModel, payment_id)
            return payment_model_to_entity(model) if model else None

    @Logger.io
    async def list_payments(
        self,
        *,
        status: PaymentStatus | None,
        payment_type: PaymentType | None,
        offset: int,
        limit: int,
    ) -> tuple[List[Payment], int]:
        conditions = []
        if status:
            conditions.append(PaymentModel.status == status.value)
        if payment_type:
            conditions.append(PaymentModel.payment_type == payment_type.value)

        async with self.session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(PaymentModel).where(*conditions)
            )
            result = await session.execute(
                select(PaymentModel)
                .where(*conditions)
                .order_by(PaymentModel.created_at.desc())
                .offset(offset)
                .limit(limit)
            )
            return [payment_model_to_entity(m) for m in result.scalars().all()], total or 0

    @Logger.io
    async def list_user_payments(self, *, user_id: int) -> List[Payment]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(PaymentModel)
                .where(PaymentModel.user_id == user_id)
                .order_by(PaymentModel.created_at.desc())
            )
            return [payment_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def get_refund(self, *, refund_id: UUID) -> Refund | None:
        async with self.session_factory() as session:
            model = await session.get(RefundModel, refund_id)
            return refund_model_to_entity(model) if model else None

    @Logger.io
    async def list_refunds(
        self, *, status: RefundStatus | None, offset: int, limit: int
    ) -> tuple[List[Refund], int]:
        conditions = [RefundModel.status == status.value] if status else []

        async with self.session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(RefundModel).where(*conditions)
            )
            result = await session.execute(
                select(RefundModel)
                .where(*conditions)
                .order_by(RefundModel.requested_at.desc())
                .offset(offset)
                .limit(limit)
            )
            return [refund_model_to_entity(m) for m in result.scalars().all()], total or 0

    @Logger.io
    async def list_user_refunds(self, *, user_id: int) -> List[Refund]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(RefundModel)
                .where(RefundModel.user_id == user_id)
                .order_by(RefundModel.requested_at.desc())
            )
            return [refund_model_to_entity(m) for m in result.scalars().all()]
