from typing import List, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.shared_kernel.app.dto.page import Page, page_offset
from fira.service.venue_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from fira.service.venue_booking.domain.entity.booking_entity import Booking, BookingStatus


class ListBookingsUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def get_booking(self, *, booking_id: UUID) -> Booking:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        return booking

    @Logger.io
    async def list_bookings(
        self, *, status: BookingStatus | None = None, page: int = 1, limit: int = 20
    ) -> Page[Booking]:
        bookings, total = await self.booking_query_repo.list_bookings(
            status=status, offset=page_offset(page=page, limit=limit), limit=limit
        )
        return Page(items=bookings, total=total, page=page, limit=limit)

    @Logger.io
    async def list_for_user(self, *, user_id: int) -> List[Booking]:
        return await self.booking_query_repo.list_by_user(user_id=user_id)

    @Logger.io
    async def list_for_venue(self, *, venue_id: int) -> List[Booking]:
        return await self.booking_query_repo.list_by_venue(venue_id=venue_id)
