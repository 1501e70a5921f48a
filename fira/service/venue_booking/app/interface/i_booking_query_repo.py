from abc import ABC, abstractmethod
from datetime import date
from typing import List
from uuid import UUID

from fira.service.venue_booking.domain.entity.booking_entity import Booking, BookingStatus


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        pass

    @abstractmethod
    async def list_bookings(
        self, *, status: BookingStatus | None, offset: int, limit: int
    ) -> tuple[List[Booking], int]:
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> List[Booking]:
        pass

    @abstractmethod
    async def list_by_venue(self, *, venue_id: int) -> List[Booking]:
        pass

    @abstractmethod
    async def list_accepted_at_venue_on(
        self, *, venue_id: int, booking_date: date
    ) -> List[Booking]:
        pass
