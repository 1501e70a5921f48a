from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import (
    CustomBaseError,
    DomainError,
    NotFoundError,
    PaymentGatewayError,
)
from fira.platform.logging.loguru_io import Logger
from fira.platform.metrics.marketplace_metrics import metrics
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.entity.refund_entity import Refund, RefundReason


class RequestRefundUseCase:
    """
    Refund a successful payment through the gateway.

    The Refund row is written as pending before the gateway is called, so a
    failed attempt is always on record. On failure the Payment stays `success`
    and the refund can be requested again; nothing retries it automatically.
    """

    def __init__(
        self, *, payment_command_repo: IPaymentCommandRepo, payment_gateway: IPaymentGateway
    ) -> None:
        self.payment_command_repo = payment_command_repo
        self.payment_gateway = payment_gateway

    @classmethod
    @inject
    def depends(
        cls,
        payment_command_repo: IPaymentCommandRepo = Depends(
            Provide[Container.payment_command_repo]
        ),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
    ) -> Self:
        return cls(payment_command_repo=payment_command_repo, payment_gateway=payment_gateway)

    @Logger.io
    async def execute(
        self,
        *,
        payment_id: UUID,
        reason: RefundReason,
        reason_details: str | None = None,
        amount: int | None = None,
    ) -> Refund:
        payment = await self.payment_command_repo.get_by_id(payment_id=payment_id)
        if not payment:
            raise NotFoundError('Payment not found')
        payment.ensure_refundable()

        refund_amount = payment.amount if amount is None else amount
        if refund_amount <= 0 or refund_amount > payment.amount:
            raise DomainError(f'Refund amount must be between 1 and {payment.amount}')

        refund = await self.payment_command_repo.create_refund(
            refund=Refund.create(
                payment_id=payment.id,
                user_id=payment.user_id,
                reason=reason,
                amount=refund_amount,
                payment_amount=payment.amount,
                reason_details=reason_details,
            )
        )

        try:
            gateway_refund = await self.payment_gateway.refund_payment(
                transaction_id=payment.gateway_transaction_id or '',
                amount=refund_amount,
                notes={
                    'reason': reason.value,
                    'refund_id': str(refund.id),
                    'payment_id': str(payment.id),
                },
            )
        except Exception as e:
            await self.payment_command_repo.update_refund(
                refund=refund.mark_failed(reason=str(e) or type(e).__name__)
            )
            metrics.record_refund(reason=reason.value, result='failed')
            Logger.base.warning(f'⚠️ [REFUND] Refund {refund.id} for payment {payment.id} failed')
            if isinstance(e, CustomBaseError):
                raise
            raise PaymentGatewayError(f'Refund failed: {e}') from e

        refund = await self.payment_command_repo.update_refund(
            refund=refund.mark_processed(
                gateway_refund_id=gateway_refund.refund_id,
                gateway_status=gateway_refund.status,
                gateway_response=gateway_refund.raw,
            )
        )
        await self.payment_command_repo.update(payment=payment.mark_refunded())
        metrics.record_refund(reason=reason.value, result='initiated')

        Logger.base.info(
            f'💸 [REFUND] {refund.refund_type.value} refund {refund.id} of {refund_amount} '
            f'for payment {payment.id} is {refund.status.value}'
        )
        return refund
