from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import InvalidStateError, NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from fira.service.ticketing.domain.entity.ticket_entity import Ticket


class ValidateTicketUseCase:
    """Venue check-in. A second scan of the same ticket is rejected."""

    def __init__(self, *, ticket_command_repo: ITicketCommandRepo) -> None:
        self.ticket_command_repo = ticket_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_command_repo: ITicketCommandRepo = Depends(Provide[Container.ticket_command_repo]),
    ) -> Self:
        return cls(ticket_command_repo=ticket_command_repo)

    @Logger.io
    async def execute(
        self,
        *,
        ticket_id: UUID,
        qr_payload: str | None = None,
        checked_in_by: int | None = None,
    ) -> Ticket:
        ticket = await self.ticket_command_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')

        checked_in = await self.ticket_command_repo.update_if_active(
            ticket=ticket.check_in(qr_payload=qr_payload, checked_in_by=checked_in_by)
        )
        if checked_in is None:
            current = await self.ticket_command_repo.get_by_id(ticket_id=ticket_id)
            (current or ticket).check_in(checked_in_by=checked_in_by)
            raise InvalidStateError('Ticket was changed by another request')
        ticket = checked_in
        Logger.base.info(f'✅ [CHECK_IN] Ticket {ticket.code} checked in at event {ticket.event_id}')
        return ticket
