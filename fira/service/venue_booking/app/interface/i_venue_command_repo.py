from abc import ABC, abstractmethod

from fira.service.venue_booking.domain.entity.venue_entity import Venue


class IVenueCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, venue: Venue) -> Venue:
        pass

    @abstractmethod
    async def get_by_id(self, *, venue_id: int) -> Venue | None:
        pass

    @abstractmethod
    async def update(self, *, venue: Venue) -> Venue:
        pass
