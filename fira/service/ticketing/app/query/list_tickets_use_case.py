from typing import List, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import ForbiddenError, NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from fira.service.ticketing.domain.entity.ticket_entity import Ticket


class ListTicketsUseCase:
    def __init__(self, *, ticket_query_repo: ITicketQueryRepo) -> None:
        self.ticket_query_repo = ticket_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
    ) -> Self:
        return cls(ticket_query_repo=ticket_query_repo)

    @Logger.io
    async def get_ticket(self, *, ticket_id: UUID, user_id: int | None = None) -> Ticket:
        ticket = await self.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')
        if user_id is not None and ticket.user_id != user_id:
            raise ForbiddenError('Unauthorized: This ticket belongs to another user')
        return ticket

    @Logger.io
    async def list_for_user(self, *, user_id: int) -> List[Ticket]:
        return await self.ticket_query_repo.list_by_user(user_id=user_id)

    @Logger.io
    async def list_for_event(self, *, event_id: int) -> List[Ticket]:
        return await self.ticket_query_repo.list_by_event(event_id=event_id)
