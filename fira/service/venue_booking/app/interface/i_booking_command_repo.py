from abc import ABC, abstractmethod
from uuid import UUID

from fira.service.venue_booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        pass
