from typing import AsyncContextManager, Callable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.domain.entity.payment_entity import Payment, PaymentStatus
from fira.service.payment.domain.entity.refund_entity import Refund
from fira.service.payment.domain.value_object.payment_reference import PaymentReference
from fira.service.payment.driven_adapter.model.payment_model import PaymentModel, RefundModel
from fira.service.payment.driven_adapter.repo.payment_mapper import (
    payment_entity_to_model,
    payment_model_to_entity,
    refund_entity_to_model,
    refund_model_to_entity,
)


class PaymentCommandRepoImpl(IPaymentCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, payment_id: UUID) -> Payment | None:
        async with self.session_factory() as session:
            model = await session.get(PaymentModel, payment_id)
            return payment_model_to_entity(model) if model else None

    @Logger.io
    async def get_pending_by_reference(self, *, reference: PaymentReference) -> Payment | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(PaymentModel)
                .where(
                    PaymentModel.reference_kind == reference.kind.value,
                    PaymentModel.reference_id == reference.reference_id,
                    PaymentModel.status == PaymentStatus.PENDING.value,
                )
                .order_by(PaymentModel.created_at.desc())
                .limit(1)
            )
            model = result.scalar_one_or_none()
            return payment_model_to_entity(model) if model else None

    @Logger.io
    async def create(self, *, payment: Payment) -> Payment:
        async with self.session_factory() as session:
            model = payment_entity_to_model(payment)
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return payment_model_to_entity(model)

    @Logger.io
    async def update(self, *, payment: Payment) -> Payment:
        async with self.session_factory() as session:
            model = await session.get(PaymentModel, payment.id)
            if not model:
                raise NotFoundError('Payment not found')
            payment_entity_to_model(payment, model)
            await session.commit()
            await session.refresh(model)
            return payment_model_to_entity(model)

    @Logger.io
    async def create_refund(self, *, refund: Refund) -> Refund:
        async with self.session_factory() as session:
            model = refund_entity_to_model(refund)
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return refund_model_to_entity(model)

    @Logger.io
    async def update_refund(self, *, refund: Refund) -> Refund:
        async with self.session_factory() as session:
            model = await session.get(RefundModel, refund.id)
            if not model:
                raise NotFoundError('Refund not found')
            refund_entity_to_model(refund, model)
            await session.commit()
            await session.refresh(model)
            return refund_model_to_entity(model)
