from typing import AsyncContextManager, Callable, List
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.enum.ticket_enum import TicketStatus
from fira.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from fira.service.ticketing.driven_adapter.repo.ticketing_mapper import (
    ticket_entity_to_model,
    ticket_model_to_entity,
)


class TicketCommandRepoImpl(ITicketCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, ticket: Ticket) -> Ticket:
        async with self.session_factory() as session:
            model = ticket_entity_to_model(ticket)
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return ticket_model_to_entity(model)

    @Logger.io
    async def get_by_id(self, *, ticket_id: UUID) -> Ticket | None:
        async with self.session_factory() as session:
            model = await session.get(TicketModel, ticket_id)
            return ticket_model_to_entity(model) if model else None

    @Logger.io
    async def get_by_payment_id(self, *, payment_id: UUID) -> Ticket | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel).where(TicketModel.payment_id == payment_id)
            )
            model = result.scalar_one_or_none()
            return ticket_model_to_entity(model) if model else None

    @Logger.io
    async def update_if_active(self, *, ticket: Ticket) -> Ticket | None:
        async with self.session_factory() as session:
            result = await session.execute(
                update(TicketModel)
                .where(
                    TicketModel.id == ticket.id,
                    TicketModel.status == TicketStatus.ACTIVE.value,
                )
                .values(
                    status=ticket.status.value,
                    is_used=ticket.is_used,
                    used_at=ticket.used_at,
                    checked_in_by=ticket.checked_in_by,
                    cancellation_reason=ticket.cancellation_reason,
                    cancelled_at=ticket.cancelled_at,
                )
                .returning(TicketModel)
            )
            model = result.scalar_one_or_none()
            await session.commit()
            return ticket_model_to_entity(model) if model else None

    @Logger.io
    async def list_active_by_event(self, *, event_id: int) -> List[Ticket]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel)
                .where(
                    TicketModel.event_id == event_id,
                    TicketModel.status == TicketStatus.ACTIVE.value,
                )
                .order_by(TicketModel.purchased_at)
            )
            return [ticket_model_to_entity(m) for m in result.scalars().all()]
