from typing import AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.venue_booking.app.interface.i_venue_command_repo import IVenueCommandRepo
from fira.service.venue_booking.domain.entity.venue_entity import Venue
from fira.service.venue_booking.driven_adapter.model.venue_model import VenueModel
from fira.service.venue_booking.driven_adapter.repo.venue_mapper import (
    venue_entity_to_model,
    venue_model_to_entity,
)


class VenueCommandRepoImpl(IVenueCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, venue: Venue) -> Venue:
        async with self.session_factory() as session:
            model = venue_entity_to_model(venue)
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return venue_model_to_entity(model)

    @Logger.io
    async def get_by_id(self, *, venue_id: int) -> Venue | None:
        async with self.session_factory() as session:
            model = await session.get(VenueModel, venue_id)
            return venue_model_to_entity(model) if model else None

    @Logger.io
    async def update(self, *, venue: Venue) -> Venue:
        async with self.session_factory() as session:
            model = await session.get(VenueModel, venue.id)
            if not model:
                raise NotFoundError('Venue not found')
            venue_entity_to_model(venue, model)
            await session.commit()
            await session.refresh(model)
            return venue_model_to_entity(model)
