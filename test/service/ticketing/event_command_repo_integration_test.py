"""
Integration tests for EventCommandRepoImpl

Seat counters are changed by conditional UPDATEs; these run them against
PostgreSQL.
"""

from datetime import date, timedelta

import pytest

from fira.platform.database.orm_db_setting import Database
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
    EventCommandRepoImpl,
)


@pytest.fixture
def repo() -> EventCommandRepoImpl:
    return EventCommandRepoImpl(session_factory=Database().session)


async def _create_event(repo: EventCommandRepoImpl, *, max_attendees: int = 5) -> Event:
    return await repo.create(
        event=Event.create(
            name='Neon Nights',
            description='Rooftop DJ set',
            organizer_id=10,
            venue_id=7,
            event_date=date.today() + timedelta(days=30),
            start_time='20:00',
            end_time='23:00',
            ticket_price=500,
            max_attendees=max_attendees,
        )
    )


class TestReserveSeats:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_reserve_within_capacity(self, repo: EventCommandRepoImpl):
        # Arrange
        event = await _create_event(repo)

        # Act
        reserved = await repo.reserve_seats(event_id=event.id, quantity=3)

        # Assert
        assert reserved is not None
        assert reserved.current_attendees == 3

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_reserve_past_capacity_leaves_counter_unchanged(
        self, repo: EventCommandRepoImpl
    ):
        # Arrange
        event = await _create_event(repo, max_attendees=5)
        await repo.reserve_seats(event_id=event.id, quantity=4)

        # Act
        reserved = await repo.reserve_seats(event_id=event.id, quantity=2)

        # Assert
        assert reserved is None
        stored = await repo.get_by_id(event_id=event.id)
        assert stored is not None
        assert stored.current_attendees == 4

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_reserve_exactly_to_capacity(self, repo: EventCommandRepoImpl):
        event = await _create_event(repo, max_attendees=5)

        reserved = await repo.reserve_seats(event_id=event.id, quantity=5)

        assert reserved is not None
        assert reserved.current_attendees == 5
        assert await repo.reserve_seats(event_id=event.id, quantity=1) is None

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_cancelled_event_rejects_reservations(self, repo: EventCommandRepoImpl):
        # Arrange
        event = await _create_event(repo)
        await repo.save_cancellation(event=event.cancel(reason='Storm warning'))

        # Act
        reserved = await repo.reserve_seats(event_id=event.id, quantity=1)

        # Assert
        assert reserved is None
        stored = await repo.get_by_id(event_id=event.id)
        assert stored is not None
        assert stored.is_cancelled
        assert stored.current_attendees == 0

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_unknown_event(self, repo: EventCommandRepoImpl):
        assert await repo.reserve_seats(event_id=999, quantity=1) is None


class TestReleaseAndCancel:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_release_never_goes_below_zero(self, repo: EventCommandRepoImpl):
        event = await _create_event(repo)
        await repo.reserve_seats(event_id=event.id, quantity=1)

        released = await repo.release_seats(event_id=event.id, quantity=3)

        assert released is not None
        assert released.current_attendees == 0

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_save_cancellation_zeroes_counter(self, repo: EventCommandRepoImpl):
        # Arrange
        event = await _create_event(repo)
        await repo.reserve_seats(event_id=event.id, quantity=4)

        # Act
        cancelled = await repo.save_cancellation(event=event.cancel(reason='Storm warning'))

        # Assert
        assert cancelled.is_cancelled
        assert cancelled.current_attendees == 0
        assert cancelled.cancellation_reason == 'Storm warning'
