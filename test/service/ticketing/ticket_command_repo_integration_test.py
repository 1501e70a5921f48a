"""Integration tests for TicketCommandRepoImpl status transitions"""

from datetime import date, timedelta

import pytest
import pytest_asyncio

from fira.platform.database.orm_db_setting import Database
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.enum.ticket_enum import TicketStatus, TicketType
from fira.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
    EventCommandRepoImpl,
)
from fira.service.ticketing.driven_adapter.repo.ticket_command_repo_impl import (
    TicketCommandRepoImpl,
)


@pytest.fixture
def ticket_repo() -> TicketCommandRepoImpl:
    return TicketCommandRepoImpl(session_factory=Database().session)


@pytest_asyncio.fixture
async def event_id(clean_database: None) -> int:
    repo = EventCommandRepoImpl(session_factory=Database().session)
    event = await repo.create(
        event=Event.create(
            name='Neon Nights',
            description='Rooftop DJ set',
            organizer_id=10,
            venue_id=7,
            event_date=date.today() + timedelta(days=30),
            start_time='20:00',
            end_time='23:00',
            ticket_price=500,
            max_attendees=100,
        )
    )
    return event.id


def _ticket(event_id: int, **overrides) -> Ticket:
    fields = {
        'user_id': 20,
        'event_id': event_id,
        'ticket_type': TicketType.GENERAL,
        'quantity': 2,
        'unit_price': 500,
    }
    fields.update(overrides)
    return Ticket.create(**fields)


class TestUpdateIfActive:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_second_transition_is_refused(
        self, ticket_repo: TicketCommandRepoImpl, event_id: int
    ):
        # Arrange
        ticket = await ticket_repo.create(ticket=_ticket(event_id))

        # Act
        first = await ticket_repo.update_if_active(ticket=ticket.cancel(reason='Plans changed'))
        second = await ticket_repo.update_if_active(ticket=ticket.check_in(checked_in_by=5))

        # Assert
        assert first is not None
        assert first.status == TicketStatus.CANCELLED
        assert second is None
        stored = await ticket_repo.get_by_id(ticket_id=ticket.id)
        assert stored is not None
        assert stored.status == TicketStatus.CANCELLED
        assert not stored.is_used

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_check_in_is_stored(self, ticket_repo: TicketCommandRepoImpl, event_id: int):
        ticket = await ticket_repo.create(ticket=_ticket(event_id))

        checked_in = await ticket_repo.update_if_active(ticket=ticket.check_in(checked_in_by=5))

        assert checked_in is not None
        assert checked_in.status == TicketStatus.USED
        assert checked_in.checked_in_by == 5
        assert checked_in.used_at is not None


class TestListActiveByEvent:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_only_active_tickets_of_the_event(
        self, ticket_repo: TicketCommandRepoImpl, event_id: int
    ):
        # Arrange
        active = await ticket_repo.create(ticket=_ticket(event_id))
        cancelled = await ticket_repo.create(ticket=_ticket(event_id, user_id=21))
        await ticket_repo.update_if_active(ticket=cancelled.cancel(reason='Plans changed'))

        # Act
        tickets = await ticket_repo.list_active_by_event(event_id=event_id)

        # Assert
        assert [t.id for t in tickets] == [active.id]
