from typing import AsyncContextManager, Callable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.logging.loguru_io import Logger
from fira.service.venue_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from fira.service.venue_booking.domain.entity.venue_entity import Venue, VenueStatus
from fira.service.venue_booking.driven_adapter.model.venue_model import VenueModel
from fira.service.venue_booking.driven_adapter.repo.venue_mapper import venue_model_to_entity


class VenueQueryRepoImpl(IVenueQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, venue_id: int) -> Venue | None:
        async with self.session_factory() as session:
            model = await session.get(VenueModel, venue_id)
            return venue_model_to_entity(model) if model else None

    @Logger.io
    async def list_venues(
        self,
        *,
        status: VenueStatus | None,
        city: str | None,
        owner_id: int | None,
        offset: int,
        limit: int,
    ) -> tuple[List[Venue], int]:
        conditions = [VenueModel.is_active.is_(True)]
        if status:
            conditions.append(VenueModel.status == status.value)
        if city:
            conditions.append(VenueModel.city.ilike(city))
        if owner_id is not None:
            conditions.append(VenueModel.owner_id == owner_id)

        async with self.session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(VenueModel).where(*conditions)
            )
            result = await session.execute(
                select(VenueModel)
                .where(*conditions)
                .order_by(VenueModel.created_at.desc())
                .offset(offset)
                .limit(limit)
            )
            return [venue_model_to_entity(m) for m in result.scalars().all()], total or 0
