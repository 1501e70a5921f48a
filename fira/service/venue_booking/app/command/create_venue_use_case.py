from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.logging.loguru_io import Logger
from fira.service.venue_booking.app.interface.i_venue_command_repo import IVenueCommandRepo
from fira.service.venue_booking.domain.entity.venue_entity import Venue


class CreateVenueUseCase:
    """List a venue. It stays pending until an admin approves it."""

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
    async def execute(
        self,
        *,
        owner_id: int,
        name: str,
        description: str,
        city: str,
        address: str,
        capacity: int,
        base_price: int,
        price_per_hour: int | None = None,
    ) -> Venue:
        venue = Venue.create(
            owner_id=owner_id,
            name=name,
            description=description,
            city=city,
            address=address,
            capacity=capacity,
            base_price=base_price,
            price_per_hour=price_per_hour,
        )
        venue = await self.venue_command_repo.create(venue=venue)
        Logger.base.info(f'🏛️ [VENUE] Venue {venue.id} "{venue.name}" listed by user {owner_id}')
        return venue
