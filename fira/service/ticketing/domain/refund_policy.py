"""
Ticket refund policy

Decides how much of a ticket's price goes back to the buyer when the buyer
cancels. Organizer cancellations always refund in full.
"""

from datetime import datetime

import attrs

from fira.service.payment.domain.money import percentage_of
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.enum.ticket_enum import TicketStatus


@attrs.frozen
class RefundEligibility:
    eligible: bool
    reason: str
    refund_amount: int
    original_amount: int
    refund_percentage: int
    policy: str
    event_starts_at: datetime

    @property
    def refund_type(self) -> str:
        return 'full' if self.refund_percentage == 100 else 'partial'


@attrs.frozen
class RefundPolicy:
    full_refund_hours: int
    partial_refund_hours: int
    partial_refund_percentage: int
    event_timezone: str

    @property
    def description(self) -> str:
        return (
            f'Full refund up to {self.full_refund_hours} hours before the event, '
            f'{self.partial_refund_percentage}% up to {self.partial_refund_hours} hours before, '
            'no refund after that. Cancelled events are refunded in full.'
        )

    def evaluate(self, *, ticket: Ticket, event: Event, now: datetime) -> RefundEligibility:
        starts_at = event.starts_at(self.event_timezone)

        def result(eligible: bool, reason: str, percentage: int) -> RefundEligibility:
            return RefundEligibility(
                eligible=eligible,
                reason=reason,
                refund_amount=percentage_of(ticket.price, percentage) if eligible else 0,
                original_amount=ticket.price,
                refund_percentage=percentage if eligible else 0,
                policy=self.description,
                event_starts_at=starts_at,
            )

        if ticket.is_used or ticket.status == TicketStatus.USED:
            return result(False, 'Ticket has already been used', 0)
        if ticket.status == TicketStatus.CANCELLED:
            return result(False, 'Ticket is already cancelled', 0)
        if ticket.price == 0:
            return result(False, 'Free ticket, nothing to refund', 0)
        if event.is_cancelled:
            return result(True, 'Event was cancelled by the organizer', 100)

        hours_left = (starts_at - now).total_seconds() / 3600
        if hours_left <= 0:
            return result(False, 'Event has already started', 0)
        if hours_left >= self.full_refund_hours:
            return result(True, 'Cancelled well before the event', 100)
        if hours_left >= self.partial_refund_hours:
            return result(
                True, 'Cancelled close to the event', self.partial_refund_percentage
            )
        return result(False, f'Less than {self.partial_refund_hours} hours before the event', 0)
