from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import ConflictError
from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from fira.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from fira.service.ticketing.domain.entity.event_entity import Event


class CreateEventUseCase:
    def __init__(
        self, *, event_command_repo: IEventCommandRepo, event_query_repo: IEventQueryRepo
    ) -> None:
        self.event_command_repo = event_command_repo
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_command_repo=event_command_repo, event_query_repo=event_query_repo)

    @Logger.io
    async def execute(
        self,
        *,
        name: str,
        description: str,
        organizer_id: int,
        venue_id: int,
        event_date: date,
        start_time: str,
        end_time: str,
        ticket_price: int,
        max_attendees: int,
        category: str | None = None,
    ) -> Event:
        """
        Create an upcoming event.

        Raises:
            DomainError: invalid price, capacity or time range
            ConflictError: the venue already hosts a non-cancelled event that
                overlaps this time slot on the same date
        """
        event = Event.create(
            name=name,
            description=description,
            organizer_id=organizer_id,
            venue_id=venue_id,
            event_date=event_date,
            start_time=start_time,
            end_time=end_time,
            ticket_price=ticket_price,
            max_attendees=max_attendees,
            category=category,
        )

        same_day_events = await self.event_query_repo.list_active_at_venue_on(
            venue_id=venue_id, event_date=event_date
        )
        for existing in same_day_events:
            if event.time_slot.overlaps(existing.time_slot):
                raise ConflictError(
                    f'Time slot conflict: This venue is already booked from '
                    f'{existing.start_time} to {existing.end_time} for "{existing.name}"'
                )

        event = await self.event_command_repo.create(event=event)
        Logger.base.info(
            f'🎉 [CREATE_EVENT] Event {event.id} "{event.name}" at venue {venue_id} on {event_date}'
        )
        return event
