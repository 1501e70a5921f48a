from typing import List, Optional
from uuid import UUID

import attrs

from fira.service.payment.app.dto.gateway_dto import PaymentInitiation
from fira.service.payment.domain.entity.refund_entity import Refund
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.refund_policy import RefundEligibility


@attrs.frozen
class PurchaseResult:
    """Either an issued ticket, or the checkout the buyer must complete first."""

    ticket: Optional[Ticket] = None
    payment_initiation: Optional[PaymentInitiation] = None

    @property
    def payment_required(self) -> bool:
        return self.ticket is None and self.payment_initiation is not None


@attrs.define
class CancellationSummary:
    total_tickets: int = 0
    refunds_initiated: int = 0
    refunds_failed: int = 0
    total_refund_amount: int = 0
    notifications_failed: int = 0
    failed_ticket_ids: List[UUID] = attrs.field(factory=list)


@attrs.frozen
class EventCancellationResult:
    event: Event
    refund_results: CancellationSummary


@attrs.frozen
class TicketCancellationResult:
    ticket: Ticket
    refund_eligibility: RefundEligibility
    refund: Optional[Refund] = None
    refund_error: Optional[str] = None
