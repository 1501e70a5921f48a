from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import ConflictError, NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.notification.app.command.create_notification_use_case import (
    CreateNotificationUseCase,
)
from fira.service.notification.app.interface.i_notification_command_repo import (
    INotificationCommandRepo,
)
from fira.service.notification.domain.entity.notification_entity import NotificationType
from fira.service.ticketing.domain.value_object.time_slot import TimeSlot
from fira.service.venue_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from fira.service.venue_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from fira.service.venue_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from fira.service.venue_booking.domain.entity.booking_entity import Booking


class CreateBookingUseCase:
    """
    Request a venue for a date and time slot.

    The venue owner and the amount are taken from the stored venue, so the
    requester only names the venue.
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        booking_query_repo: IBookingQueryRepo,
        venue_query_repo: IVenueQueryRepo,
        create_notification: CreateNotificationUseCase,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.booking_query_repo = booking_query_repo
        self.venue_query_repo = venue_query_repo
        self.create_notification = create_notification

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
        notification_command_repo: INotificationCommandRepo = Depends(
            Provide[Container.notification_command_repo]
        ),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            booking_query_repo=booking_query_repo,
            venue_query_repo=venue_query_repo,
            create_notification=CreateNotificationUseCase(
                notification_command_repo=notification_command_repo
            ),
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_id: int,
        venue_id: int,
        booking_date: date,
        start_time: str,
        end_time: str,
        event_id: int | None = None,
        purpose: str | None = None,
        expected_guests: int = 0,
        special_requests: str | None = None,
    ) -> Booking:
        """
        Raises:
            NotFoundError: unknown venue
            InvalidStateError: venue is not approved or has been deactivated
            DomainError: invalid guest count or time range
            ConflictError: overlaps a booking the venue already accepted
        """
        venue = await self.venue_query_repo.get_by_id(venue_id=venue_id)
        if not venue:
            raise NotFoundError('Venue not found')
        venue.ensure_bookable(expected_guests=expected_guests)

        booking = Booking.create(
            user_id=user_id,
            venue_id=venue_id,
            venue_owner_id=venue.owner_id,
            booking_date=booking_date,
            start_time=start_time,
            end_time=end_time,
            total_amount=venue.quote(TimeSlot(start_time=start_time, end_time=end_time)),
            event_id=event_id,
            purpose=purpose,
            expected_guests=expected_guests,
            special_requests=special_requests,
        )

        accepted = await self.booking_query_repo.list_accepted_at_venue_on(
            venue_id=venue_id, booking_date=booking_date
        )
        for existing in accepted:
            if booking.time_slot.overlaps(existing.time_slot):
                raise ConflictError(
                    f'Time slot conflict: This venue is already booked from '
                    f'{existing.start_time} to {existing.end_time}'
                )

        booking = await self.booking_command_repo.create(booking=booking)
        Logger.base.info(
            f'📅 [BOOKING] Booking {booking.id} requested for venue {venue_id}, '
            f'total {booking.total_amount}'
        )

        try:
            await self.create_notification.execute(
                user_id=venue.owner_id,
                type=NotificationType.BOOKING,
                title='New Booking Request',
                message=f'You have a new booking request for {booking_date.isoformat()}.',
                data={'booking_id': str(booking.id), 'venue_id': venue_id},
            )
        except Exception as e:
            Logger.base.error(f'❌ [BOOKING] Notification failed for booking {booking.id}: {e}')
        return booking
