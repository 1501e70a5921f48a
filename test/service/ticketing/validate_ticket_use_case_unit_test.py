"""Unit tests for ValidateTicketUseCase (venue check-in)"""

from typing import Callable
from unittest.mock import AsyncMock

import pytest

from fira.platform.exception.exceptions import AlreadyUsedError, NotFoundError
from fira.service.ticketing.app.command.validate_ticket_use_case import ValidateTicketUseCase
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.enum.ticket_enum import TicketStatus


@pytest.fixture
def ticket_command_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.update_if_active.side_effect = lambda *, ticket: ticket
    return repo


@pytest.mark.unit
class TestValidateTicket:
    @pytest.mark.asyncio
    async def test_first_scan_checks_in(
        self, ticket_command_repo: AsyncMock, make_ticket: Callable[..., Ticket]
    ):
        # Arrange
        ticket = make_ticket()
        ticket_command_repo.get_by_id.return_value = ticket
        use_case = ValidateTicketUseCase(ticket_command_repo=ticket_command_repo)

        # Act
        validated = await use_case.execute(
            ticket_id=ticket.id, qr_payload=ticket.qr_payload, checked_in_by=10
        )

        # Assert
        assert validated.status == TicketStatus.USED
        assert validated.checked_in_by == 10

    @pytest.mark.asyncio
    async def test_second_scan_is_rejected(
        self, ticket_command_repo: AsyncMock, make_ticket: Callable[..., Ticket]
    ):
        ticket = make_ticket().check_in()
        ticket_command_repo.get_by_id.return_value = ticket
        use_case = ValidateTicketUseCase(ticket_command_repo=ticket_command_repo)

        with pytest.raises(AlreadyUsedError, match='Ticket already used'):
            await use_case.execute(ticket_id=ticket.id)
        ticket_command_repo.update_if_active.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_ticket(
        self, ticket_command_repo: AsyncMock, make_ticket: Callable[..., Ticket]
    ):
        ticket_command_repo.get_by_id.return_value = None
        use_case = ValidateTicketUseCase(ticket_command_repo=ticket_command_repo)

        with pytest.raises(NotFoundError, match='Ticket not found'):
            await use_case.execute(ticket_id=make_ticket().id)

    @pytest.mark.asyncio
    async def test_scan_that_loses_the_race_reports_already_used(
        self, ticket_command_repo: AsyncMock, make_ticket: Callable[..., Ticket]
    ):
        # Arrange: read as active, but another gate checked it in first
        ticket = make_ticket()
        ticket_command_repo.get_by_id.side_effect = [ticket, ticket.check_in(checked_in_by=11)]
        ticket_command_repo.update_if_active.side_effect = None
        ticket_command_repo.update_if_active.return_value = None
        use_case = ValidateTicketUseCase(ticket_command_repo=ticket_command_repo)

        # Act / Assert
        with pytest.raises(AlreadyUsedError, match='Ticket already used'):
            await use_case.execute(ticket_id=ticket.id, checked_in_by=10)
