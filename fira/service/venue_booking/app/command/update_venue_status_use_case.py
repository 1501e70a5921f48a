from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.venue_booking.app.interface.i_venue_command_repo import IVenueCommandRepo
from fira.service.venue_booking.domain.entity.venue_entity import Venue, VenueStatus


class UpdateVenueStatusUseCase:
    """Admin moderation: approve, reject or suspend a venue."""

    def __init__(self, *, venue_command_repo: IVenueCommandRepo) -> None:
        self.venue_command_repo = venue_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        venue_command_repo: IVenueCommandRepo = Depends(Provide[Container.venue_command_repo]),
    ) -> Self:
        return cls(venue_command_repo=venue_command_repo)

    @Logger.io
    async def execute(self, *, venue_id: int, status: VenueStatus) -> Venue:
        venue = await self.venue_command_repo.get_by_id(venue_id=venue_id)
        if not venue:
            raise NotFoundError('Venue not found')

        venue = await self.venue_command_repo.update(venue=venue.change_status(status))
        Logger.base.info(f'🏛️ [VENUE] Venue {venue_id} -> {venue.status}')
        return venue
