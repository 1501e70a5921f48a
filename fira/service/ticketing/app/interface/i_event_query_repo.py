from abc import ABC, abstractmethod
from datetime import date
from typing import List

from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.enum.ticket_enum import EventStatus


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Event | None:
        pass

    @abstractmethod
    async def list_events(
        self,
        *,
        organizer_id: int | None,
        status: EventStatus | None,
        offset: int,
        limit: int,
    ) -> tuple[List[Event], int]:
        """Ordered by event date; returns (page, total matching)."""
        pass

    @abstractmethod
    async def list_active_at_venue_on(self, *, venue_id: int, event_date: date) -> List[Event]:
        """Events at the venue on that date that are not cancelled."""
        pass
