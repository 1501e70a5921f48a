from fira.service.venue_booking.domain.entity.booking_entity import (
    Booking,
    BookingPaymentStatus,
    BookingStatus,
)
from fira.service.venue_booking.driven_adapter.model.booking_model import BookingModel


def booking_model_to_entity(model: BookingModel) -> Booking:
    return Booking(
        id=model.id,
        user_id=model.user_id,
        venue_id=model.venue_id,
        venue_owner_id=model.venue_owner_id,
        event_id=model.event_id,
        booking_date=model.booking_date,
        start_time=model.start_time,
        end_time=model.end_time,
        purpose=model.purpose,
        expected_guests=model.expected_guests,
        special_requests=model.special_requests,
        status=BookingStatus(model.status),
        rejection_reason=model.rejection_reason,
        total_amount=model.total_amount,
        platform_fee=model.platform_fee,
        payment_status=BookingPaymentStatus(model.payment_status),
        payment_id=model.payment_id,
        responded_at=model.responded_at,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def booking_entity_to_model(booking: Booking, model: BookingModel | None = None) -> BookingModel:
    model = model or BookingModel(id=booking.id)
    model.user_id = booking.user_id
    model.venue_id = booking.venue_id
    model.venue_owner_id = booking.venue_owner_id
    model.event_id = booking.event_id
    model.booking_date = booking.booking_date
    model.start_time = booking.start_time
    model.end_time = booking.end_time
    model.purpose = booking.purpose
    model.expected_guests = booking.expected_guests
    model.special_requests = booking.special_requests
    model.status = booking.status.value
    model.rejection_reason = booking.rejection_reason
    model.total_amount = booking.total_amount
    model.platform_fee = booking.platform_fee
    model.payment_status = booking.payment_status.value
    model.payment_id = booking.payment_id
    model.responded_at = booking.responded_at
    return model
