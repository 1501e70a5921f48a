"""
Unit tests for CancelTicketWithRefundUseCase

Buyer-initiated cancellation: seats go back, money goes back per the
refund policy, and a gateway failure is reported without undoing the cancel.
"""

from datetime import date, datetime, timedelta
from typing import Callable
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

import pytest

from fira.platform.exception.exceptions import (
    AlreadyUsedError,
    ForbiddenError,
    NotFoundError,
    PaymentGatewayError,
)
from fira.service.notification.domain.entity.notification_entity import NotificationType
from fira.service.payment.domain.entity.refund_entity import Refund, RefundReason, RefundType
from fira.service.ticketing.app.command.cancel_ticket_use_case import CancelTicketUseCase
from fira.service.ticketing.app.command.cancel_ticket_with_refund_use_case import (
    CancelTicketWithRefundUseCase,
)
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.enum.ticket_enum import TicketStatus
from fira.service.ticketing.domain.refund_policy import RefundPolicy


@pytest.fixture
def ticket(make_ticket: Callable[..., Ticket]) -> Ticket:
    return make_ticket(quantity=2)


@pytest.fixture
def ticket_command_repo(ticket: Ticket) -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = ticket
    repo.update_if_active.side_effect = lambda *, ticket: ticket
    return repo


@pytest.fixture
def event_command_repo(make_event: Callable[..., Event]) -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = make_event(current_attendees=2)
    return repo


@pytest.fixture
def request_refund(ticket: Ticket) -> AsyncMock:
    refund_use_case = AsyncMock()
    assert ticket.payment_id is not None
    refund_use_case.execute.side_effect = lambda **kwargs: Refund.create(
        payment_id=kwargs['payment_id'],
        user_id=ticket.user_id,
        reason=kwargs['reason'],
        amount=kwargs['amount'],
        payment_amount=ticket.price,
        reason_details=kwargs.get('reason_details'),
    )
    return refund_use_case


@pytest.fixture
def create_notification() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def use_case(
    ticket_command_repo: AsyncMock,
    event_command_repo: AsyncMock,
    request_refund: AsyncMock,
    create_notification: AsyncMock,
) -> CancelTicketWithRefundUseCase:
    return CancelTicketWithRefundUseCase(
        ticket_command_repo=ticket_command_repo,
        event_command_repo=event_command_repo,
        cancel_ticket=CancelTicketUseCase(
            ticket_command_repo=ticket_command_repo, event_command_repo=event_command_repo
        ),
        request_refund=request_refund,
        create_notification=create_notification,
        refund_policy=RefundPolicy(
            full_refund_hours=168,
            partial_refund_hours=48,
            partial_refund_percentage=50,
            event_timezone='Asia/Kolkata',
        ),
    )


@pytest.mark.unit
class TestCancelTicketWithRefund:
    @pytest.mark.asyncio
    async def test_full_refund_well_before_event(
        self,
        use_case: CancelTicketWithRefundUseCase,
        event_command_repo: AsyncMock,
        request_refund: AsyncMock,
        create_notification: AsyncMock,
        ticket: Ticket,
    ):
        # Act
        result = await use_case.execute(ticket_id=ticket.id, user_id=20, reason='Plans changed')

        # Assert
        assert result.ticket.status == TicketStatus.CANCELLED
        assert result.refund_eligibility.refund_percentage == 100
        assert result.refund is not None
        assert result.refund.amount == 1000
        assert result.refund.refund_type == RefundType.FULL
        assert result.refund_error is None

        event_command_repo.release_seats.assert_awaited_once_with(event_id=1, quantity=2)
        refund_call = request_refund.execute.call_args.kwargs
        assert refund_call['reason'] == RefundReason.USER_REQUEST
        assert refund_call['reason_details'] == 'Plans changed'

        notification = create_notification.execute.call_args.kwargs
        assert notification['type'] == NotificationType.TICKET_CANCELLED
        assert 'full refund of 1000' in notification['message']
        assert notification['data']['refund_amount'] == 1000

    @pytest.mark.asyncio
    async def test_partial_refund_inside_a_week(
        self,
        use_case: CancelTicketWithRefundUseCase,
        event_command_repo: AsyncMock,
        make_event: Callable[..., Event],
        ticket: Ticket,
    ):
        # Arrange: event starts 59 to 60 hours from now, venue local time
        starts = datetime.now(ZoneInfo('Asia/Kolkata')) + timedelta(hours=60)
        event_command_repo.get_by_id.return_value = make_event(
            event_date=starts.date(),
            start_time=f'{starts.hour:02d}:00',
            end_time=f'{starts.hour:02d}:59',
        )

        # Act
        result = await use_case.execute(ticket_id=ticket.id, user_id=20)

        # Assert
        assert result.refund_eligibility.refund_percentage == 50
        assert result.refund is not None
        assert result.refund.amount == 500
        assert result.refund.refund_type == RefundType.PARTIAL

    @pytest.mark.asyncio
    async def test_late_cancellation_cancels_without_refund(
        self,
        use_case: CancelTicketWithRefundUseCase,
        event_command_repo: AsyncMock,
        request_refund: AsyncMock,
        make_event: Callable[..., Event],
        ticket: Ticket,
    ):
        event_command_repo.get_by_id.return_value = make_event(
            event_date=date.today() - timedelta(days=1)
        )

        result = await use_case.execute(ticket_id=ticket.id, user_id=20)

        assert result.ticket.status == TicketStatus.CANCELLED
        assert not result.refund_eligibility.eligible
        assert result.refund is None
        request_refund.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_gateway_failure_is_reported_not_raised(
        self,
        use_case: CancelTicketWithRefundUseCase,
        request_refund: AsyncMock,
        create_notification: AsyncMock,
        ticket: Ticket,
    ):
        # Arrange
        request_refund.execute.side_effect = PaymentGatewayError('Payment gateway error: down')

        # Act
        result = await use_case.execute(ticket_id=ticket.id, user_id=20)

        # Assert
        assert result.ticket.status == TicketStatus.CANCELLED
        assert result.refund is None
        assert result.refund_error == 'Payment gateway error: down'
        assert create_notification.execute.call_args.kwargs['data']['refund_amount'] == 0

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_cancellation(
        self,
        use_case: CancelTicketWithRefundUseCase,
        create_notification: AsyncMock,
        ticket: Ticket,
    ):
        create_notification.execute.side_effect = RuntimeError('db down')

        result = await use_case.execute(ticket_id=ticket.id, user_id=20)

        assert result.ticket.status == TicketStatus.CANCELLED
        assert result.refund is not None

    @pytest.mark.asyncio
    async def test_other_users_ticket_is_forbidden(
        self,
        use_case: CancelTicketWithRefundUseCase,
        ticket_command_repo: AsyncMock,
        ticket: Ticket,
    ):
        with pytest.raises(ForbiddenError, match='belongs to another user'):
            await use_case.execute(ticket_id=ticket.id, user_id=21)
        ticket_command_repo.update_if_active.assert_not_called()

    @pytest.mark.asyncio
    async def test_used_ticket_cannot_be_cancelled(
        self,
        use_case: CancelTicketWithRefundUseCase,
        ticket_command_repo: AsyncMock,
        request_refund: AsyncMock,
        ticket: Ticket,
    ):
        ticket_command_repo.get_by_id.return_value = ticket.check_in()

        with pytest.raises(AlreadyUsedError):
            await use_case.execute(ticket_id=ticket.id, user_id=20)
        request_refund.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_ticket(
        self,
        use_case: CancelTicketWithRefundUseCase,
        ticket_command_repo: AsyncMock,
        ticket: Ticket,
    ):
        ticket_command_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match='Ticket not found'):
            await use_case.execute(ticket_id=ticket.id, user_id=20)
