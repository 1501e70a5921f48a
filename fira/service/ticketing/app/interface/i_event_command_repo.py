from abc import ABC, abstractmethod

from fira.service.ticketing.domain.entity.event_entity import Event


class IEventCommandRepo(ABC):
    """
    Event writes.

    `current_attendees` is only ever changed through reserve_seats /
    release_seats / cancel, each a single atomic UPDATE.
    """

    @abstractmethod
    async def create(self, *, event: Event) -> Event:
        pass

    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Event | None:
        pass

    @abstractmethod
    async def reserve_seats(self, *, event_id: int, quantity: int) -> Event | None:
        """
        Conditional increment: succeeds only when the event is not cancelled and
        `current_attendees + quantity <= max_attendees`.

        Returns:
            Updated event, or None when the condition did not hold
        """
        pass

    @abstractmethod
    async def release_seats(self, *, event_id: int, quantity: int) -> Event | None:
        """Decrement `current_attendees`, floored at 0."""
        pass

    @abstractmethod
    async def save_cancellation(self, *, event: Event) -> Event:
        """Persist status, reason and timestamp; zeroes current_attendees."""
        pass
