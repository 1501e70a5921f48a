"""
Wire Modules Configuration

Modules whose `depends` classmethods resolve `Provide[...]` markers.
Shared between production and test environments.
"""

from types import ModuleType

from fira.service.notification.app.command import (
    create_notification_use_case,
    mark_notification_read_use_case,
)
from fira.service.notification.app.query import list_notifications_use_case
from fira.service.payment.app.command import (
    initiate_payment_use_case,
    request_refund_use_case,
    verify_payment_use_case,
)
from fira.service.payment.app.query import get_payment_use_case, list_payments_use_case
from fira.service.ticketing.app.command import (
    cancel_event_use_case,
    cancel_ticket_use_case,
    cancel_ticket_with_refund_use_case,
    create_event_use_case,
    purchase_ticket_use_case,
    validate_ticket_use_case,
)
from fira.service.ticketing.app.query import (
    check_refund_eligibility_use_case,
    get_event_use_case,
    list_events_use_case,
    list_tickets_use_case,
)
from fira.service.venue_booking.app.command import (
    cancel_booking_use_case,
    complete_booking_payment_use_case,
    create_booking_use_case,
    create_venue_use_case,
    initiate_booking_payment_use_case,
    respond_to_booking_use_case,
    update_venue_status_use_case,
)
from fira.service.venue_booking.app.query import list_bookings_use_case, list_venues_use_case


WIRE_MODULES: list[ModuleType] = [
    # payment
    initiate_payment_use_case,
    verify_payment_use_case,
    request_refund_use_case,
    get_payment_use_case,
    list_payments_use_case,
    # notification
    create_notification_use_case,
    mark_notification_read_use_case,
    list_notifications_use_case,
    # ticketing
    create_event_use_case,
    purchase_ticket_use_case,
    validate_ticket_use_case,
    cancel_ticket_use_case,
    cancel_ticket_with_refund_use_case,
    cancel_event_use_case,
    check_refund_eligibility_use_case,
    get_event_use_case,
    list_events_use_case,
    list_tickets_use_case,
    # venue booking
    create_booking_use_case,
    respond_to_booking_use_case,
    cancel_booking_use_case,
    initiate_booking_payment_use_case,
    complete_booking_payment_use_case,
    list_bookings_use_case,
    # venue
    create_venue_use_case,
    update_venue_status_use_case,
    list_venues_use_case,
]
