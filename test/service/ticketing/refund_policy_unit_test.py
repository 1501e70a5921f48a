"""
Unit tests for the ticket refund policy

Event starts 2026-11-20 20:00 Asia/Kolkata, which is 14:30 UTC.
Default windows: full refund 7 days (168h) before, 50% from 48h before, nothing after.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable

import pytest

from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.enum.ticket_enum import EventStatus
from fira.service.ticketing.domain.refund_policy import RefundPolicy


STARTS_AT = datetime(2026, 11, 20, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def policy() -> RefundPolicy:
    return RefundPolicy(
        full_refund_hours=168,
        partial_refund_hours=48,
        partial_refund_percentage=50,
        event_timezone='Asia/Kolkata',
    )


@pytest.fixture
def event(make_event: Callable[..., Event]) -> Event:
    return make_event(event_date=date(2026, 11, 20), start_time='20:00')


@pytest.mark.unit
class TestRefundPolicy:
    def test_full_refund_well_before_event(
        self, policy: RefundPolicy, event: Event, make_ticket: Callable[..., Ticket]
    ):
        # Arrange
        ticket = make_ticket(unit_price=500, quantity=2)

        # Act
        result = policy.evaluate(ticket=ticket, event=event, now=STARTS_AT - timedelta(hours=200))

        # Assert
        assert result.eligible
        assert result.refund_percentage == 100
        assert result.refund_amount == 1000
        assert result.original_amount == 1000
        assert result.refund_type == 'full'
        assert result.event_starts_at == STARTS_AT

    def test_exactly_at_full_window_is_full_refund(
        self, policy: RefundPolicy, event: Event, make_ticket: Callable[..., Ticket]
    ):
        result = policy.evaluate(
            ticket=make_ticket(), event=event, now=STARTS_AT - timedelta(hours=168)
        )

        assert result.refund_percentage == 100

    def test_partial_refund_inside_full_window(
        self, policy: RefundPolicy, event: Event, make_ticket: Callable[..., Ticket]
    ):
        result = policy.evaluate(
            ticket=make_ticket(unit_price=250), event=event, now=STARTS_AT - timedelta(hours=72)
        )

        assert result.eligible
        assert result.refund_percentage == 50
        assert result.refund_amount == 125
        assert result.refund_type == 'partial'

    def test_no_refund_in_last_two_days(
        self, policy: RefundPolicy, event: Event, make_ticket: Callable[..., Ticket]
    ):
        result = policy.evaluate(
            ticket=make_ticket(), event=event, now=STARTS_AT - timedelta(hours=30)
        )

        assert not result.eligible
        assert result.refund_amount == 0
        assert 'Less than 48 hours' in result.reason

    def test_no_refund_after_start(
        self, policy: RefundPolicy, event: Event, make_ticket: Callable[..., Ticket]
    ):
        result = policy.evaluate(
            ticket=make_ticket(), event=event, now=STARTS_AT + timedelta(minutes=1)
        )

        assert not result.eligible
        assert result.reason == 'Event has already started'

    def test_cancelled_event_refunds_in_full_even_late(
        self, policy: RefundPolicy, event: Event, make_ticket: Callable[..., Ticket]
    ):
        cancelled_event = event.cancel(reason='Storm')
        assert cancelled_event.status == EventStatus.CANCELLED

        result = policy.evaluate(
            ticket=make_ticket(), event=cancelled_event, now=STARTS_AT - timedelta(hours=1)
        )

        assert result.eligible
        assert result.refund_percentage == 100

    def test_used_ticket_is_not_refundable(
        self, policy: RefundPolicy, event: Event, make_ticket: Callable[..., Ticket]
    ):
        result = policy.evaluate(
            ticket=make_ticket().check_in(), event=event, now=STARTS_AT - timedelta(days=5)
        )

        assert not result.eligible
        assert result.reason == 'Ticket has already been used'

    def test_cancelled_ticket_is_not_refundable(
        self, policy: RefundPolicy, event: Event, make_ticket: Callable[..., Ticket]
    ):
        result = policy.evaluate(
            ticket=make_ticket().cancel(), event=event, now=STARTS_AT - timedelta(days=5)
        )

        assert not result.eligible
        assert result.reason == 'Ticket is already cancelled'

    def test_free_ticket_has_nothing_to_refund(
        self, policy: RefundPolicy, event: Event, make_ticket: Callable[..., Ticket]
    ):
        result = policy.evaluate(
            ticket=make_ticket(unit_price=0, payment_id=None),
            event=event,
            now=STARTS_AT - timedelta(days=5),
        )

        assert not result.eligible
        assert result.refund_amount == 0

    def test_description_names_windows(self, policy: RefundPolicy):
        assert '168 hours' in policy.description
        assert '50%' in policy.description
