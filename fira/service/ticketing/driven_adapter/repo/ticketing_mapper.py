from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.entity.ticket_entity import Ticket
from fira.service.ticketing.domain.enum.ticket_enum import EventStatus, TicketStatus, TicketType
from fira.service.ticketing.driven_adapter.model.event_model import EventModel
from fira.service.ticketing.driven_adapter.model.ticket_model import TicketModel


def event_model_to_entity(model: EventModel) -> Event:
    return Event(
        id=model.id,
        name=model.name,
        description=model.description,
        organizer_id=model.organizer_id,
        venue_id=model.venue_id,
        event_date=model.event_date,
        start_time=model.start_time,
        end_time=model.end_time,
        ticket_price=model.ticket_price,
        max_attendees=model.max_attendees,
        current_attendees=model.current_attendees,
        category=model.category,
        status=EventStatus(model.status),
        cancellation_reason=model.cancellation_reason,
        cancelled_at=model.cancelled_at,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def event_entity_to_model(event: Event) -> EventModel:
    return EventModel(
        name=event.name,
        description=event.description,
        organizer_id=event.organizer_id,
        venue_id=event.venue_id,
        event_date=event.event_date,
        start_time=event.start_time,
        end_time=event.end_time,
        ticket_price=event.ticket_price,
        max_attendees=event.max_attendees,
        current_attendees=event.current_attendees,
        category=event.category,
        status=event.status.value,
    )


def ticket_model_to_entity(model: TicketModel) -> Ticket:
    return Ticket(
        id=model.id,
        code=model.code,
        user_id=model.user_id,
        event_id=model.event_id,
        ticket_type=TicketType(model.ticket_type),
        quantity=model.quantity,
        price=model.price,
        qr_payload=model.qr_payload,
        qr_image=model.qr_image,
        status=TicketStatus(model.status),
        is_used=model.is_used,
        used_at=model.used_at,
        checked_in_by=model.checked_in_by,
        payment_id=model.payment_id,
        cancellation_reason=model.cancellation_reason,
        cancelled_at=model.cancelled_at,
        purchased_at=model.purchased_at,
    )


def ticket_entity_to_model(ticket: Ticket, model: TicketModel | None = None) -> TicketModel:
    model = model or TicketModel(id=ticket.id)
    model.code = ticket.code
    model.user_id = ticket.user_id
    model.event_id = ticket.event_id
    model.ticket_type = ticket.ticket_type.value
    model.quantity = ticket.quantity
    model.price = ticket.price
    model.qr_payload = ticket.qr_payload
    model.qr_image = ticket.qr_image
    model.status = ticket.status.value
    model.is_used = ticket.is_used
    model.used_at = ticket.used_at
    model.checked_in_by = ticket.checked_in_by
    model.payment_id = ticket.payment_id
    model.cancellation_reason = ticket.cancellation_reason
    model.cancelled_at = ticket.cancelled_at
    if ticket.purchased_at is not None:
        model.purchased_at = ticket.purchased_at
    return model
