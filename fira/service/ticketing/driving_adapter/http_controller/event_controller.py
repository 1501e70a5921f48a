from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from fira.platform.logging.loguru_io import Logger
from fira.service.shared_kernel.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)
from fira.service.ticketing.app.command.cancel_event_use_case import CancelEventUseCase
from fira.service.ticketing.app.command.create_event_use_case import CreateEventUseCase
from fira.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from fira.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from fira.service.ticketing.app.query.list_tickets_use_case import ListTicketsUseCase
from fira.service.ticketing.domain.enum.ticket_enum import EventStatus
from fira.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    CancellationSummaryResponse,
    EventCancellationResponse,
    EventCancelRequest,
    EventCreateRequest,
    EventListResponse,
    EventResponse,
)
from fira.service.ticketing.driving_adapter.http_controller.schema.ticket_schema import (
    TicketResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    organizer_id: int = Depends(get_current_user_id),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.execute(
        name=request.name,
        description=request.description,
        organizer_id=organizer_id,
        venue_id=request.venue_id,
        event_date=request.event_date,
        start_time=request.start_time,
        end_time=request.end_time,
        ticket_price=request.ticket_price,
        max_attendees=request.max_attendees,
        category=request.category,
    )
    return EventResponse.model_validate(event)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    organizer_id: Optional[int] = None,
    event_status: Optional[EventStatus] = Query(default=None, alias='status'),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> EventListResponse:
    result = await use_case.execute(
        organizer_id=organizer_id, status=event_status, page=page, limit=limit
    )
    return EventListResponse(
        events=[EventResponse.model_validate(e) for e in result.items],
        total=result.total,
        total_pages=result.total_pages,
        current_page=result.page,
    )


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    event = await use_case.execute(event_id=event_id)
    return EventResponse.model_validate(event)


@router.get('/{event_id}/tickets', status_code=status.HTTP_200_OK)
@Logger.io
async def list_event_tickets(
    event_id: int,
    _user_id: int = Depends(get_current_user_id),
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
) -> List[TicketResponse]:
    tickets = await use_case.list_for_event(event_id=event_id)
    return [TicketResponse.model_validate(t) for t in tickets]


@router.post('/{event_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_event(
    event_id: int,
    request: EventCancelRequest,
    organizer_id: int = Depends(get_current_user_id),
    use_case: CancelEventUseCase = Depends(CancelEventUseCase.depends),
) -> EventCancellationResponse:
    """Cancel the event, refund every paid ticket and notify all holders."""
    result = await use_case.execute(
        event_id=event_id, reason=request.reason, organizer_id=organizer_id
    )
    return EventCancellationResponse(
        event=EventResponse.model_validate(result.event),
        refund_results=CancellationSummaryResponse.model_validate(result.refund_results),
    )
