"""Unit tests for CreateEventUseCase venue slot conflicts"""

from datetime import date
from typing import Any, Callable
from unittest.mock import AsyncMock

import attrs
import pytest

from fira.platform.exception.exceptions import ConflictError, DomainError
from fira.service.ticketing.app.command.create_event_use_case import CreateEventUseCase
from fira.service.ticketing.domain.entity.event_entity import Event


EVENT_DATE = date(2026, 12, 31)


@pytest.fixture
def event_query_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.list_active_at_venue_on.return_value = []
    return repo


@pytest.fixture
def event_command_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = lambda *, event: attrs.evolve(event, id=42)
    return repo


@pytest.fixture
def use_case(event_command_repo: AsyncMock, event_query_repo: AsyncMock) -> CreateEventUseCase:
    return CreateEventUseCase(
        event_command_repo=event_command_repo, event_query_repo=event_query_repo
    )


def _request(**overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        'name': "New Year's Eve",
        'description': 'Countdown party',
        'organizer_id': 10,
        'venue_id': 7,
        'event_date': EVENT_DATE,
        'start_time': '21:00',
        'end_time': '23:59',
        'ticket_price': 1500,
        'max_attendees': 300,
        'category': 'party',
    }
    fields.update(overrides)
    return fields


@pytest.mark.unit
class TestCreateEvent:
    @pytest.mark.asyncio
    async def test_creates_event_when_venue_is_free(
        self, use_case: CreateEventUseCase, event_query_repo: AsyncMock
    ):
        event = await use_case.execute(**_request())

        assert event.id == 42
        assert event.category == 'party'
        event_query_repo.list_active_at_venue_on.assert_awaited_once_with(
            venue_id=7, event_date=EVENT_DATE
        )

    @pytest.mark.asyncio
    async def test_overlapping_event_at_venue_is_conflict(
        self,
        use_case: CreateEventUseCase,
        event_query_repo: AsyncMock,
        event_command_repo: AsyncMock,
        make_event: Callable[..., Event],
    ):
        # Arrange
        event_query_repo.list_active_at_venue_on.return_value = [
            make_event(
                name='Sunset Set', event_date=EVENT_DATE, start_time='18:00', end_time='22:00'
            )
        ]

        # Act & Assert
        with pytest.raises(ConflictError, match='already booked from 18:00 to 22:00'):
            await use_case.execute(**_request())
        event_command_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_back_to_back_events_are_allowed(
        self,
        use_case: CreateEventUseCase,
        event_query_repo: AsyncMock,
        make_event: Callable[..., Event],
    ):
        event_query_repo.list_active_at_venue_on.return_value = [
            make_event(event_date=EVENT_DATE, start_time='18:00', end_time='21:00')
        ]

        event = await use_case.execute(**_request())

        assert event.id == 42

    @pytest.mark.asyncio
    async def test_invalid_time_range_is_rejected_before_lookup(
        self, use_case: CreateEventUseCase, event_query_repo: AsyncMock
    ):
        with pytest.raises(DomainError, match='End time must be after start time'):
            await use_case.execute(**_request(start_time='22:00', end_time='21:00'))
        event_query_repo.list_active_at_venue_on.assert_not_called()
