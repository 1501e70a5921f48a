from datetime import date, datetime, time, timezone
from typing import Optional
import zoneinfo

import attrs

from fira.platform.exception.exceptions import AlreadyCancelledError, DomainError
from fira.service.ticketing.domain.enum.ticket_enum import EventStatus
from fira.service.ticketing.domain.value_object.time_slot import TimeSlot, parse_hh_mm


@attrs.define
class Event:
    id: Optional[int]
    name: str
    description: str
    organizer_id: int
    venue_id: int
    event_date: date
    start_time: str  # HH:MM, venue local time
    end_time: str
    ticket_price: int  # 0 means free entry
    max_attendees: int
    current_attendees: int = 0
    category: Optional[str] = None
    status: EventStatus = EventStatus.UPCOMING
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        name: str,
        description: str,
        organizer_id: int,
        venue_id: int,
        event_date: date,
        start_time: str,
        end_time: str,
        ticket_price: int,
        max_attendees: int,
        category: Optional[str] = None,
    ) -> 'Event':
        if not name.strip():
            raise DomainError('Event name is required')
        if ticket_price < 0:
            raise DomainError('Ticket price cannot be negative')
        if max_attendees <= 0:
            raise DomainError('Max attendees must be positive')
        TimeSlot(start_time=start_time, end_time=end_time).validate()

        now = datetime.now(timezone.utc)
        return cls(
            id=None,
            name=name.strip(),
            description=description,
            organizer_id=organizer_id,
            venue_id=venue_id,
            event_date=event_date,
            start_time=start_time,
            end_time=end_time,
            ticket_price=ticket_price,
            max_attendees=max_attendees,
            current_attendees=0,
            category=category,
            status=EventStatus.UPCOMING,
            created_at=now,
            updated_at=now,
        )

    @property
    def time_slot(self) -> TimeSlot:
        return TimeSlot(start_time=self.start_time, end_time=self.end_time)

    @property
    def is_free(self) -> bool:
        return self.ticket_price == 0

    @property
    def is_cancelled(self) -> bool:
        return self.status == EventStatus.CANCELLED

    @property
    def available_tickets(self) -> int:
        return max(self.max_attendees - self.current_attendees, 0)

    def has_capacity_for(self, quantity: int) -> bool:
        return self.current_attendees + quantity <= self.max_attendees

    def starts_at(self, tz_name: str) -> datetime:
        minutes = parse_hh_mm(self.start_time)
        local = datetime.combine(
            self.event_date,
            time(minutes // 60, minutes % 60),
            tzinfo=zoneinfo.ZoneInfo(tz_name),
        )
        return local.astimezone(timezone.utc)

    def cancel(self, *, reason: str) -> 'Event':
        if self.is_cancelled:
            raise AlreadyCancelledError('Event is already cancelled')
        now = datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=EventStatus.CANCELLED,
            cancellation_reason=reason,
            cancelled_at=now,
            current_attendees=0,
            updated_at=now,
        )
