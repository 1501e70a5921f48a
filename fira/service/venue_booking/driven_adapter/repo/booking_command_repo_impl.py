from typing import AsyncContextManager, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.venue_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from fira.service.venue_booking.domain.entity.booking_entity import Booking
from fira.service.venue_booking.driven_adapter.model.booking_model import BookingModel
from fira.service.venue_booking.driven_adapter.repo.booking_mapper import (
    booking_entity_to_model,
    booking_model_to_entity,
)


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self.session_factory() as session:
            model = booking_entity_to_model(booking)
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return booking_model_to_entity(model)

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        async with self.session_factory() as session:
            model = await session.get(BookingModel, booking_id)
            return booking_model_to_entity(model) if model else None

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        async with self.session_factory() as session:
            model = await session.get(BookingModel, booking.id)
            if not model:
                raise NotFoundError('Booking not found')
            booking_entity_to_model(booking, model)
            await session.commit()
            await session.refresh(model)
            return booking_model_to_entity(model)
