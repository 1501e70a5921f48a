from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import (
    InvalidStateError,
    NotFoundError,
    SignatureMismatchError,
)
from fira.platform.logging.loguru_io import Logger
from fira.platform.metrics.marketplace_metrics import metrics
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.entity.payment_entity import Payment, PaymentStatus


class VerifyPaymentUseCase:
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
        order_id: str,
        gateway_payment_id: str,
        signature: str,
    ) -> Payment:
        """
        Gateway checkout callback.

        The HMAC signature is the only authenticity check. A signature for a
        different order than the one this payment opened counts as a mismatch.

        Raises:
            NotFoundError: unknown payment
            InvalidStateError: payment already verified, failed or refunded
            SignatureMismatchError: payment is marked failed before raising
        """
        payment = await self.payment_command_repo.get_by_id(payment_id=payment_id)
        if not payment:
            raise NotFoundError('Payment not found')
        if payment.status != PaymentStatus.PENDING:
            raise InvalidStateError(f'Payment is already {payment.status.value}')

        is_valid = order_id == payment.gateway_order_id and self.payment_gateway.verify_signature(
            order_id=order_id, gateway_payment_id=gateway_payment_id, signature=signature
        )

        if not is_valid:
            await self.payment_command_repo.update(
                payment=payment.mark_failed(reason='Signature verification failed')
            )
            metrics.record_payment_verification(result='signature_mismatch')
            Logger.base.warning(f'⚠️ [PAYMENT] Signature mismatch for payment {payment_id}')
            raise SignatureMismatchError()

        payment = await self.payment_command_repo.update(
            payment=payment.mark_success(
                transaction_id=gateway_payment_id,
                gateway_response={
                    **(payment.gateway_response or {}),
                    'razorpay_payment_id': gateway_payment_id,
                },
            )
        )
        metrics.record_payment_verification(result='success')
        Logger.base.info(f'✅ [PAYMENT] Payment {payment_id} verified ({gateway_payment_id})')
        return payment
