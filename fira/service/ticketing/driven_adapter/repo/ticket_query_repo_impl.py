from typing import AsyncContextManager, Callable, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from fira.service.ticketing.driven_adapter.repo.ticketing_mapper import ticket_model_to_entity


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, ticket_id: UUID) -> Ticket | None:
        async with self.session_factory() as session:
            model = await session.get(TicketModel, ticket_id)
            return ticket_model_to_entity(model) if model else None

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> List[Ticket]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel)
                .where(TicketModel.user_id == user_id)
                .order_by(TicketModel.purchased_at.desc())
            )
            return [ticket_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_by_event(self, *, event_id: int) -> List[Ticket]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel)
                .where(TicketModel.event_id == event_id)
                .order_by(TicketModel.purchased_at)
            )
            return [ticket_model_to_entity(m) for m in result.scalars().all()]
