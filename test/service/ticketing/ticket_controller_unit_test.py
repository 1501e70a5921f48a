"""
HTTP tests for /api/ticket

Use cases are replaced through FastAPI dependency_overrides; the tests check
status codes, payload shape and error mapping only.
"""

from datetime import datetime, timezone
from typing import Callable
from unittest.mock import AsyncMock

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from fira.platform.exception.exceptions import AlreadyUsedError, ForbiddenError
from fira.service.payment.app.dto.gateway_dto import PaymentInitiation
from fira.service.payment.domain.entity.payment_entity import Payment, PaymentStatus
from fira.service.payment.domain.entity.refund_entity import Refund, RefundReason
from fira.service.ticketing.app.command.cancel_ticket_with_refund_use_case import (
    CancelTicketWithRefundUseCase,
)
from fira.service.ticketing.app.command.purchase_ticket_use_case import PurchaseTicketUseCase
from fira.service.ticketing.app.command.validate_ticket_use_case import ValidateTicketUseCase
from fira.service.ticketing.app.dto.ticketing_dto import PurchaseResult, TicketCancellationResult
from fira.service.ticketing.app.query.list_tickets_use_case import ListTicketsUseCase
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.refund_policy import RefundPolicy


@pytest.fixture
def use_case() -> AsyncMock:
    return AsyncMock()


@pytest.mark.unit
class TestPurchaseEndpoint:
    def test_free_ticket_is_issued_with_201(
        self,
        app: FastAPI,
        client: TestClient,
        auth_headers: dict[str, str],
        use_case: AsyncMock,
        make_ticket: Callable[..., Ticket],
    ):
        # Arrange
        ticket = make_ticket(unit_price=0, payment_id=None)
        use_case.execute.return_value = PurchaseResult(ticket=ticket)
        app.dependency_overrides[PurchaseTicketUseCase.depends] = lambda: use_case

        # Act
        response = client.post(
            '/api/ticket/purchase', json={'event_id': 1, 'quantity': 1}, headers=auth_headers
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body['payment_required'] is False
        assert body['ticket']['code'] == ticket.code
        assert body['ticket']['status'] == 'active'
        assert use_case.execute.call_args.kwargs['user_id'] == 20

    def test_paid_ticket_answers_202_with_checkout(
        self,
        app: FastAPI,
        client: TestClient,
        auth_headers: dict[str, str],
        use_case: AsyncMock,
        make_payment: Callable[..., Payment],
    ):
        # Arrange
        payment = make_payment(status=PaymentStatus.PENDING)
        use_case.execute.return_value = PurchaseResult(
            payment_initiation=PaymentInitiation(payment=payment, key_id='rzp_test_key')
        )
        app.dependency_overrides[PurchaseTicketUseCase.depends] = lambda: use_case

        # Act
        response = client.post(
            '/api/ticket/purchase', json={'event_id': 1, 'quantity': 1}, headers=auth_headers
        )

        # Assert
        assert response.status_code == 202
        body = response.json()
        assert body['payment_required'] is True
        assert body['ticket'] is None
        assert body['payment'] == {
            'payment_id': str(payment.id),
            'order_id': 'order_test_1',
            'amount': 500,
            'currency': 'INR',
            'key_id': 'rzp_test_key',
        }

    def test_missing_identity_is_401(self, app: FastAPI, client: TestClient, use_case: AsyncMock):
        app.dependency_overrides[PurchaseTicketUseCase.depends] = lambda: use_case

        response = client.post('/api/ticket/purchase', json={'event_id': 1})

        assert response.status_code == 401
        use_case.execute.assert_not_called()

    def test_invalid_quantity_is_400(
        self,
        app: FastAPI,
        client: TestClient,
        auth_headers: dict[str, str],
        use_case: AsyncMock,
    ):
        app.dependency_overrides[PurchaseTicketUseCase.depends] = lambda: use_case

        response = client.post(
            '/api/ticket/purchase', json={'event_id': 1, 'quantity': 0}, headers=auth_headers
        )

        assert response.status_code == 400


@pytest.mark.unit
class TestTicketEndpoints:
    def test_list_my_tickets(
        self,
        app: FastAPI,
        client: TestClient,
        auth_headers: dict[str, str],
        use_case: AsyncMock,
        make_ticket: Callable[..., Ticket],
    ):
        use_case.list_for_user.return_value = [make_ticket(), make_ticket()]
        app.dependency_overrides[ListTicketsUseCase.depends] = lambda: use_case

        response = client.get('/api/ticket/my', headers=auth_headers)

        assert response.status_code == 200
        assert len(response.json()) == 2
        use_case.list_for_user.assert_awaited_once_with(user_id=20)

    def test_foreign_ticket_is_403(
        self,
        app: FastAPI,
        client: TestClient,
        auth_headers: dict[str, str],
        use_case: AsyncMock,
        make_ticket: Callable[..., Ticket],
    ):
        use_case.get_ticket.side_effect = ForbiddenError(
            'Unauthorized: This ticket belongs to another user'
        )
        app.dependency_overrides[ListTicketsUseCase.depends] = lambda: use_case

        response = client.get(f'/api/ticket/{make_ticket().id}', headers=auth_headers)

        assert response.status_code == 403
        assert response.json() == {
            'detail': 'Unauthorized: This ticket belongs to another user'
        }

    def test_second_scan_is_409(
        self,
        app: FastAPI,
        client: TestClient,
        auth_headers: dict[str, str],
        use_case: AsyncMock,
        make_ticket: Callable[..., Ticket],
    ):
        use_case.execute.side_effect = AlreadyUsedError('Ticket already used')
        app.dependency_overrides[ValidateTicketUseCase.depends] = lambda: use_case

        response = client.post(
            f'/api/ticket/{make_ticket().id}/validate', json={}, headers=auth_headers
        )

        assert response.status_code == 409
        assert response.json()['detail'] == 'Ticket already used'

    def test_cancel_returns_refund(
        self,
        app: FastAPI,
        client: TestClient,
        auth_headers: dict[str, str],
        use_case: AsyncMock,
        make_ticket: Callable[..., Ticket],
        make_event: Callable[..., Event],
    ):
        # Arrange
        ticket = make_ticket()
        assert ticket.payment_id is not None
        event = make_event()
        eligibility = RefundPolicy(
            full_refund_hours=168,
            partial_refund_hours=48,
            partial_refund_percentage=50,
            event_timezone='Asia/Kolkata',
        ).evaluate(ticket=ticket, event=event, now=datetime(2000, 1, 1, tzinfo=timezone.utc))
        refund = Refund.create(
            payment_id=ticket.payment_id,
            user_id=20,
            reason=RefundReason.USER_REQUEST,
            amount=500,
            payment_amount=500,
        )
        use_case.execute.return_value = TicketCancellationResult(
            ticket=ticket.cancel(reason='Sick'), refund_eligibility=eligibility, refund=refund
        )
        app.dependency_overrides[CancelTicketWithRefundUseCase.depends] = lambda: use_case

        # Act
        response = client.post(
            f'/api/ticket/{ticket.id}/cancel', json={'reason': 'Sick'}, headers=auth_headers
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body['ticket']['status'] == 'cancelled'
        assert body['refund_eligibility']['refund_type'] == 'full'
        assert body['refund'] == {
            'id': str(refund.id),
            'amount': 500,
            'refund_type': 'full',
            'status': 'pending',
        }
        assert body['refund_error'] is None
        use_case.execute.assert_awaited_once_with(ticket_id=ticket.id, user_id=20, reason='Sick')
