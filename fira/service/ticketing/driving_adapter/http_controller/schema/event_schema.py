from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from fira.service.ticketing.domain.enum.ticket_enum import EventStatus


class EventCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = ''
    venue_id: int
    event_date: date
    start_time: str = Field(pattern=r'^\d{2}:\d{2}$')
    end_time: str = Field(pattern=r'^\d{2}:\d{2}$')
    ticket_price: int = Field(ge=0)
    max_attendees: int = Field(gt=0)
    category: Optional[str] = None

    model_config = {
        'json_schema_extra': {
            'example': {
                'name': 'Neon Nights',
                'description': 'Rooftop DJ set',
                'venue_id': 7,
                'event_date': '2026-12-31',
                'start_time': '20:00',
                'end_time': '23:30',
                'ticket_price': 500,
                'max_attendees': 200,
                'category': 'party',
            }
        }
    }


class EventResponse(BaseModel):
    model_config = {'from_attributes': True}

    id: int
    name: str
    description: str
    organizer_id: int
    venue_id: int
    event_date: date
    start_time: str
    end_time: str
    ticket_price: int
    max_attendees: int
    current_attendees: int
    available_tickets: int
    category: Optional[str] = None
    status: EventStatus
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class EventListResponse(BaseModel):
    events: List[EventResponse]
    total: int
    total_pages: int
    current_page: int


class EventCancelRequest(BaseModel):
    reason: Optional[str] = None

    model_config = {'json_schema_extra': {'example': {'reason': 'Artist unavailable'}}}


class CancellationSummaryResponse(BaseModel):
    model_config = {'from_attributes': True}

    total_tickets: int
    refunds_initiated: int
    refunds_failed: int
    total_refund_amount: int
    notifications_failed: int
    failed_ticket_ids: List[UUID]


class EventCancellationResponse(BaseModel):
    event: EventResponse
    refund_results: CancellationSummaryResponse
