from datetime import date
from typing import AsyncContextManager, Callable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.enum.ticket_enum import EventStatus
from fira.service.ticketing.driven_adapter.model.event_model import EventModel
from fira.service.ticketing.driven_adapter.repo.ticketing_mapper import event_model_to_entity


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Event | None:
        async with self.session_factory() as session:
            model = await session.get(EventModel, event_id)
            return event_model_to_entity(model) if model else None

    @Logger.io
    async def list_events(
        self,
        *,
        organizer_id: int | None,
        status: EventStatus | None,
        offset: int,
        limit: int,
    ) -> tuple[List[Event], int]:
        conditions = []
        if organizer_id is not None:
            conditions.append(EventModel.organizer_id == organizer_id)
        if status:
            conditions.append(EventModel.status == status.value)

        async with self.session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(EventModel).where(*conditions)
            )
            result = await session.execute(
                select(EventModel)
                .where(*conditions)
                .order_by(EventModel.event_date, EventModel.start_time)
                .offset(offset)
                .limit(limit)
            )
            return [event_model_to_entity(m) for m in result.scalars().all()], total or 0

    @Logger.io
    async def list_active_at_venue_on(self, *, venue_id: int, event_date: date) -> List[Event]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(EventModel).where(
                    EventModel.venue_id == venue_id,
                    EventModel.event_date == event_date,
                    EventModel.status != EventStatus.CANCELLED.value,
                )
            )
            return [event_model_to_entity(m) for m in result.scalars().all()]
