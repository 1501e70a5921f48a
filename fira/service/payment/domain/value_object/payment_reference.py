"""
What a payment pays for.

A payment references exactly one of an event (ticket purchase before the ticket
exists), a venue booking (advance payment) or an issued ticket. The row stores
the pair (kind, id); these classes are the typed form used by the domain.
"""

from enum import StrEnum
from uuid import UUID

import attrs


class ReferenceKind(StrEnum):
    EVENT = 'event'
    BOOKING = 'booking'
    TICKET = 'ticket'


@attrs.frozen
class EventReference:
    event_id: int

    kind = ReferenceKind.EVENT

    @property
    def reference_id(self) -> str:
        return str(self.event_id)


@attrs.frozen
class BookingReference:
    booking_id: UUID

    kind = ReferenceKind.BOOKING

    @property
    def reference_id(self) -> str:
        return str(self.booking_id)


@attrs.frozen
class TicketReference:
    ticket_id: UUID

    kind = ReferenceKind.TICKET

    @property
    def reference_id(self) -> str:
        return str(self.ticket_id)


PaymentReference = EventReference | BookingReference | TicketReference


def reference_from_columns(*, kind: str, reference_id: str) -> PaymentReference:
    match ReferenceKind(kind):
        case ReferenceKind.EVENT:
            return EventReference(event_id=int(reference_id))
        case ReferenceKind.BOOKING:
            return BookingReference(booking_id=UUID(reference_id))
        case ReferenceKind.TICKET:
            return TicketReference(ticket_id=UUID(reference_id))
