from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import ForbiddenError, NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.payment.app.command.verify_payment_use_case import VerifyPaymentUseCase
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.value_object.payment_reference import BookingReference
from fira.service.venue_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from fira.service.venue_booking.domain.entity.booking_entity import Booking


class CompleteBookingPaymentUseCase:
    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        payment_command_repo: IPaymentCommandRepo,
        verify_payment: VerifyPaymentUseCase,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.payment_command_repo = payment_command_repo
        self.verify_payment = verify_payment

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        payment_command_repo: IPaymentCommandRepo = Depends(
            Provide[Container.payment_command_repo]
        ),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            payment_command_repo=payment_command_repo,
            verify_payment=VerifyPaymentUseCase(
                payment_command_repo=payment_command_repo, payment_gateway=payment_gateway
            ),
        )

    @Logger.io
    async def execute(
        self,
        *,
        booking_id: UUID,
        user_id: int,
        order_id: str,
        gateway_payment_id: str,
        signature: str,
    ) -> Booking:
        """
        Verify the checkout signature against the booking's pending payment.

        Raises:
            SignatureMismatchError: the pending payment is marked failed and
                the booking stays unpaid
        """
        booking = await self.booking_command_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if booking.user_id != user_id:
            raise ForbiddenError('Unauthorized: This booking belongs to another user')
        booking.ensure_payable()

        pending = await self.payment_command_repo.get_pending_by_reference(
            reference=BookingReference(booking_id=booking_id)
        )
        if not pending:
            raise NotFoundError('No pending payment for this booking')

        payment = await self.verify_payment.execute(
            payment_id=pending.id,
            order_id=order_id,
            gateway_payment_id=gateway_payment_id,
            signature=signature,
        )
        booking = await self.booking_command_repo.update(
            booking=booking.mark_paid(payment_id=payment.id, platform_fee=payment.platform_fee)
        )
        Logger.base.info(f'✅ [BOOKING] Advance paid for booking {booking_id}')
        return booking
