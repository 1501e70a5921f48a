from datetime import datetime, timezone
import secrets
from typing import Optional
from uuid import UUID

import attrs
import orjson
from uuid_utils.compat import uuid7

from fira.platform.exception.exceptions import (
    AlreadyCancelledError,
    AlreadyUsedError,
    DomainError,
    InvalidStateError,
)
from fira.service.ticketing.domain.enum.ticket_enum import TicketStatus, TicketType


TICKET_CODE_PREFIX = 'TKT-'


def generate_ticket_code() -> str:
    return f'{TICKET_CODE_PREFIX}{secrets.token_hex(6).upper()}'


@attrs.define
class Ticket:
    id: UUID
    code: str
    user_id: int
    event_id: int
    ticket_type: TicketType
    quantity: int
    price: int  # total paid for this ticket (event price x quantity)
    qr_payload: str
    qr_image: Optional[str] = None  # PNG data URL
    status: TicketStatus = TicketStatus.ACTIVE
    is_used: bool = False
    used_at: Optional[datetime] = None
    checked_in_by: Optional[int] = None
    payment_id: Optional[UUID] = None
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    purchased_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        user_id: int,
        event_id: int,
        ticket_type: TicketType,
        quantity: int,
        unit_price: int,
        payment_id: Optional[UUID] = None,
    ) -> 'Ticket':
        if quantity < 1:
            raise DomainError('Quantity must be at least 1')

        ticket_id = uuid7()
        code = generate_ticket_code()
        now = datetime.now(timezone.utc)
        qr_payload = orjson.dumps(
            {
                'ticket_code': code,
                'ticket_id': str(ticket_id),
                'event_id': event_id,
                'user_id': user_id,
                'issued_at': now.isoformat(),
            }
        ).decode()
        return cls(
            id=ticket_id,
            code=code,
            user_id=user_id,
            event_id=event_id,
            ticket_type=ticket_type,
            quantity=quantity,
            price=unit_price * quantity,
            qr_payload=qr_payload,
            payment_id=payment_id,
            status=TicketStatus.ACTIVE,
            purchased_at=now,
        )

    def check_in(
        self, *, qr_payload: Optional[str] = None, checked_in_by: Optional[int] = None
    ) -> 'Ticket':
        if self.is_used or self.status == TicketStatus.USED:
            raise AlreadyUsedError('Ticket already used')
        if self.status == TicketStatus.CANCELLED:
            raise InvalidStateError('Ticket has been cancelled')
        if qr_payload is not None and qr_payload != self.qr_payload:
            raise DomainError('Invalid QR code')
        return attrs.evolve(
            self,
            status=TicketStatus.USED,
            is_used=True,
            used_at=datetime.now(timezone.utc),
            checked_in_by=checked_in_by,
        )

    def cancel(self, *, reason: Optional[str] = None) -> 'Ticket':
        if self.is_used or self.status == TicketStatus.USED:
            raise AlreadyUsedError('Cannot cancel used ticket')
        if self.status == TicketStatus.CANCELLED:
            raise AlreadyCancelledError('Ticket is already cancelled')
        return attrs.evolve(
            self,
            status=TicketStatus.CANCELLED,
            cancellation_reason=reason,
            cancelled_at=datetime.now(timezone.utc),
        )
