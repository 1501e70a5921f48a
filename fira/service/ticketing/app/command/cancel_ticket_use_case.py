from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import InvalidStateError, NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from fira.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from fira.service.ticketing.domain.entity.ticket_entity import Ticket


class CancelTicketUseCase:
    """
    Cancel one ticket and give its seats back to the event.

    No refund is issued here; see CancelTicketWithRefundUseCase.
    """

    def __init__(
        self, *, ticket_command_repo: ITicketCommandRepo, event_command_repo: IEventCommandRepo
    ) -> None:
        self.ticket_command_repo = ticket_command_repo
        self.event_command_repo = event_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_command_repo: ITicketCommandRepo = Depends(Provide[Container.ticket_command_repo]),
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
    ) -> Self:
        return cls(ticket_command_repo=ticket_command_repo, event_command_repo=event_command_repo)

    @Logger.io
    async def execute(self, *, ticket_id: UUID, reason: str | None = None) -> Ticket:
        ticket = await self.ticket_command_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')

        cancelled = await self.ticket_command_repo.update_if_active(
            ticket=ticket.cancel(reason=reason)
        )
        if cancelled is None:
            # Lost the race: surface the state the other writer left behind
            current = await self.ticket_command_repo.get_by_id(ticket_id=ticket_id)
            (current or ticket).cancel(reason=reason)
            raise InvalidStateError('Ticket was changed by another request')
        ticket = cancelled

        # Seats go back only once, by the request that won the transition
        await self.event_command_repo.release_seats(
            event_id=ticket.event_id, quantity=ticket.quantity
        )

        Logger.base.info(
            f'🚫 [CANCEL_TICKET] Ticket {ticket.code} cancelled, released {ticket.quantity}'
        )
        return ticket
