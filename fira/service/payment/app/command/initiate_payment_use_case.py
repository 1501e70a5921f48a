from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.core_setting import Settings
from fira.platform.config.di import Container
from fira.platform.exception.exceptions import DomainError
from fira.platform.logging.loguru_io import Logger
from fira.service.payment.app.dto.gateway_dto import PaymentInitiation
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.entity.payment_entity import Payment, PaymentType
from fira.service.payment.domain.value_object.payment_reference import PaymentReference


class InitiatePaymentUseCase:
    """
    Open a gateway order and record a pending Payment for it.

    The gateway order is created first; if the gateway refuses (or is not
    configured) nothing is persisted.
    """

    def __init__(
        self,
        *,
        payment_command_repo: IPaymentCommandRepo,
        payment_gateway: IPaymentGateway,
        settings: Settings,
    ) -> None:
        self.payment_command_repo = payment_command_repo
        self.payment_gateway = payment_gateway
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        payment_command_repo: IPaymentCommandRepo = Depends(
            Provide[Container.payment_command_repo]
        ),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            payment_command_repo=payment_command_repo,
            payment_gateway=payment_gateway,
            settings=settings,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_id: int,
        payment_type: PaymentType,
        reference: PaymentReference,
        amount: int,
        notes: dict[str, Any] | None = None,
    ) -> PaymentInitiation:
        if amount <= 0:
            raise DomainError('Payment amount must be positive')

        currency = self.settings.PAYMENT_CURRENCY
        order = await self.payment_gateway.create_order(
            amount=amount,
            currency=currency,
            receipt=f'{reference.kind.value}_{reference.reference_id}'[:40],
            notes={
                'user_id': str(user_id),
                'payment_type': payment_type.value,
                'reference_kind': reference.kind.value,
                'reference_id': reference.reference_id,
                **(notes or {}),
            },
        )

        payment = Payment.create(
            user_id=user_id,
            payment_type=payment_type,
            reference=reference,
            amount=amount,
            currency=currency,
            platform_fee_percentage=self.settings.PLATFORM_FEE_PERCENTAGE,
            gateway_order_id=order.order_id,
            gateway_response=order.raw,
        )
        payment = await self.payment_command_repo.create(payment=payment)

        Logger.base.info(
            f'💳 [PAYMENT] Order {order.order_id} opened for {payment_type.value} '
            f'{reference.kind.value}={reference.reference_id} amount={amount}'
        )
        return PaymentInitiation(payment=payment, key_id=self.payment_gateway.key_id)
