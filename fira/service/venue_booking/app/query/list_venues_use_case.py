from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.shared_kernel.app.dto.page import Page, page_offset
from fira.service.venue_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from fira.service.venue_booking.domain.entity.venue_entity import Venue, VenueStatus


class ListVenuesUseCase:
    def __init__(self, *, venue_query_repo: IVenueQueryRepo) -> None:
        self.venue_query_repo = venue_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
    ) -> Self:
        return cls(venue_query_repo=venue_query_repo)

    @Logger.io
    async def get_venue(self, *, venue_id: int) -> Venue:
        venue = await self.venue_query_repo.get_by_id(venue_id=venue_id)
        if not venue:
            raise NotFoundError('Venue not found')
        return venue

    @Logger.io
    async def list_venues(
        self,
        *,
        status: VenueStatus | None = VenueStatus.APPROVED,
        city: str | None = None,
        owner_id: int | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[Venue]:
        venues, total = await self.venue_query_repo.list_venues(
            status=status,
            city=city,
            owner_id=owner_id,
            offset=page_offset(page=page, limit=limit),
            limit=limit,
        )
        return Page(items=venues, total=total, page=page, limit=limit)
