from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.core_setting import Settings
from fira.platform.config.di import Container
from fira.platform.exception.exceptions import DomainError, ForbiddenError, NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.payment.app.command.initiate_payment_use_case import InitiatePaymentUseCase
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.entity.payment_entity import PaymentType
from fira.service.payment.domain.money import percentage_of
from fira.service.payment.domain.value_object.payment_reference import BookingReference
from fira.service.venue_booking.app.dto.booking_dto import BookingPaymentInitiation
from fira.service.venue_booking.app.interface.i_booking_command_repo import IBookingCommandRepo


class InitiateBookingPaymentUseCase:
    """Open a gateway order for the booking advance (a share of the total)."""

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        initiate_payment: InitiatePaymentUseCase,
        advance_percentage: int,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.initiate_payment = initiate_payment
        self.advance_percentage = advance_percentage

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
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            initiate_payment=InitiatePaymentUseCase(
                payment_command_repo=payment_command_repo,
                payment_gateway=payment_gateway,
                settings=settings,
            ),
            advance_percentage=settings.BOOKING_ADVANCE_PERCENTAGE,
        )

    @Logger.io
    async def execute(self, *, booking_id: UUID, user_id: int) -> BookingPaymentInitiation:
        booking = await self.booking_command_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if booking.user_id != user_id:
            raise ForbiddenError('Unauthorized: This booking belongs to another user')
        booking.ensure_payable()

        advance = percentage_of(booking.total_amount, self.advance_percentage)
        if advance <= 0:
            raise DomainError('Advance amount is too small to charge')

        initiation = await self.initiate_payment.execute(
            user_id=user_id,
            payment_type=PaymentType.VENUE_BOOKING,
            reference=BookingReference(booking_id=booking.id),
            amount=advance,
            notes={'venue_id': str(booking.venue_id)},
        )
        Logger.base.info(f'💳 [BOOKING] Advance {advance} opened for booking {booking_id}')
        return BookingPaymentInitiation(
            booking=booking, initiation=initiation, advance_amount=advance
        )
