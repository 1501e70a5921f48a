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
from fira.service.notification.domain.entity.notification_entity import (
    NotificationPriority,
    NotificationType,
)
from fira.service.venue_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from fira.service.venue_booking.domain.entity.booking_entity import Booking, BookingDecision


_DECISION_MESSAGES = {
    BookingDecision.ACCEPT: ('Booking Accepted', 'Your booking for {date} has been accepted.'),
    BookingDecision.REJECT: ('Booking Rejected', 'Your booking for {date} has been rejected.'),
    BookingDecision.COMPLETE: ('Booking Completed', 'Your booking for {date} is complete.'),
}


class RespondToBookingUseCase:
    """Venue owner accepts, rejects or completes a booking; the requester is notified."""

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        create_notification: CreateNotificationUseCase,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.create_notification = create_notification

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        notification_command_repo: INotificationCommandRepo = Depends(
            Provide[Container.notification_command_repo]
        ),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            create_notification=CreateNotificationUseCase(
                notification_command_repo=notification_command_repo
            ),
        )

    @Logger.io
    async def execute(
        self,
        *,
        booking_id: UUID,
        owner_id: int,
        decision: BookingDecision,
        reason: str | None = None,
    ) -> Booking:
        booking = await self.booking_command_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if booking.venue_owner_id != owner_id:
            raise ForbiddenError('Only the venue owner can respond to this booking')

        booking = await self.booking_command_repo.update(
            booking=booking.respond(decision=decision, reason=reason)
        )
        Logger.base.info(f'📅 [BOOKING] Booking {booking_id} -> {booking.status}')

        title, template = _DECISION_MESSAGES[decision]
        message = template.format(date=booking.booking_date.isoformat())
        if decision == BookingDecision.REJECT and reason:
            message += f' Reason: {reason}'
        try:
            await self.create_notification.execute(
                user_id=booking.user_id,
                type=NotificationType.BOOKING,
                title=title,
                message=message,
                data={'booking_id': str(booking.id), 'status': booking.status.value},
                priority=NotificationPriority.HIGH,
            )
        except Exception as e:
            Logger.base.error(f'❌ [BOOKING] Notification failed for booking {booking_id}: {e}')
        return booking
