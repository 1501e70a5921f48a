from abc import ABC, abstractmethod
from typing import List

from fira.service.venue_booking.domain.entity.venue_entity import Venue, VenueStatus


class IVenueQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, venue_id: int) -> Venue | None:
        pass

    @abstractmethod
    async def list_venues(
        self,
        *,
        status: VenueStatus | None,
        city: str | None,
        owner_id: int | None,
        offset: int,
        limit: int,
    ) -> tuple[List[Venue], int]:
        pass
