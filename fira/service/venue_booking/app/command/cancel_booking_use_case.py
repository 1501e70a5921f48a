from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import ForbiddenError, NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.notification.app.command.create_notification_use_case import (
    CreateNotificationUseCase,
)
from fira.service.notification.app.interface.i_notification_command_repo import (
    INotificationCommandRepo,
)
from fira.service.notification.domain.entity.notification_entity import NotificationType
from fira.service.payment.app.command.request_refund_use_case import RequestRefundUseCase
from fira.service.payment.app.interface.i_payment_command_repo import IPaymentCommandRepo
from fira.service.payment.app.interface.i_payment_gateway import IPaymentGateway
from fira.service.payment.domain.entity.refund_entity import RefundReason
from fira.service.venue_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from fira.service.venue_booking.domain.entity.booking_entity import Booking


class CancelBookingUseCase:
    """
    Requester cancels a pending or accepted booking.

    A paid advance is refunded in full before the booking is written; if the
    gateway refuses, the error propagates and the booking is left as it was.
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        request_refund: RequestRefundUseCase,
        create_notification: CreateNotificationUseCase,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.request_refund = request_refund
        self.create_notification = create_notification

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
        notification_command_repo: INotificationCommandRepo = Depends(
            Provide[Container.notification_command_repo]
        ),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            request_refund=RequestRefundUseCase(
                payment_command_repo=payment_command_repo, payment_gateway=payment_gateway
            ),
            create_notification=CreateNotificationUseCase(
                notification_command_repo=notification_command_repo
            ),
        )

    @Logger.io
    async def execute(
        self, *, booking_id: UUID, user_id: int, reason: str | None = None
    ) -> Booking:
        booking = await self.booking_command_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if booking.user_id != user_id:
            raise ForbiddenError('Unauthorized: This booking belongs to another user')

        cancelled = booking.cancel()
        if booking.is_paid and booking.payment_id:
            await self.request_refund.execute(
                payment_id=booking.payment_id,
                reason=RefundReason.BOOKING_CANCELLED,
                reason_details=reason,
            )
            cancelled = cancelled.mark_refunded()

        cancelled = await self.booking_command_repo.update(booking=cancelled)
        Logger.base.info(
            f'🚫 [BOOKING] Booking {booking_id} cancelled, payment {cancelled.payment_status}'
        )

        try:
            await self.create_notification.execute(
                user_id=booking.venue_owner_id,
                type=NotificationType.BOOKING,
                title='Booking Cancelled',
                message=(
                    f'The booking for {booking.booking_date.isoformat()} '
                    'has been cancelled by the requester.'
                ),
                data={'booking_id': str(booking.id), 'reason': reason},
            )
        except Exception as e:
            Logger.base.error(f'❌ [BOOKING] Notification failed for booking {booking_id}: {e}')
        return cancelled
