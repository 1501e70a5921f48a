from typing import AsyncContextManager, Callable

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.enum.ticket_enum import EventStatus
from fira.service.ticketing.driven_adapter.model.event_model import EventModel
from fira.service.ticketing.driven_adapter.repo.ticketing_mapper import (
    event_entity_to_model,
    event_model_to_entity,
)


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, event: Event) -> Event:
        async with self.session_factory() as session:
            model = event_entity_to_model(event)
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return event_model_to_entity(model)

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Event | None:
        async with self.session_factory() as session:
            model = await session.get(EventModel, event_id)
            return event_model_to_entity(model) if model else None

    @Logger.io
    async def reserve_seats(self, *, event_id: int, quantity: int) -> Event | None:
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(
                    EventModel.id == event_id,
                    EventModel.status != EventStatus.CANCELLED.value,
                    EventModel.current_attendees + quantity <= EventModel.max_attendees,
                )
                .values(current_attendees=EventModel.current_attendees + quantity)
                .returning(EventModel)
            )
            model = result.scalar_one_or_none()
            await session.commit()
            return event_model_to_entity(model) if model else None

    @Logger.io
    async def release_seats(self, *, event_id: int, quantity: int) -> Event | None:
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(EventModel.id == event_id)
                .values(
                    current_attendees=func.greatest(EventModel.current_attendees - quantity, 0)
                )
                .returning(EventModel)
            )
            model = result.scalar_one_or_none()
            await session.commit()
            return event_model_to_entity(model) if model else None

    @Logger.io
    async def save_cancellation(self, *, event: Event) -> Event:
        async with self.session_factory() as session:
            result = await session.execute(
                update(EventModel)
                .where(EventModel.id == event.id)
                .values(
                    status=EventStatus.CANCELLED.value,
                    cancellation_reason=event.cancellation_reason,
                    cancelled_at=event.cancelled_at,
                    current_attendees=0,
                )
                .returning(EventModel)
            )
            model = result.scalar_one_or_none()
            if not model:
                raise NotFoundError('Event not found')
            await session.commit()
            return event_model_to_entity(model)
