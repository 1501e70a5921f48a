from datetime import date
from uuid import UUID

import attrs

from fira.service.payment.app.dto.gateway_dto import PaymentInitiation
from fira.service.venue_booking.domain.entity.booking_entity import Booking


@attrs.frozen
class BookingPaymentInitiation:
    booking: Booking
    initiation: PaymentInitiation
    advance_amount: int

    @property
    def remaining_amount(self) -> int:
        return self.booking.total_amount - self.advance_amount

    @property
    def booking_id(self) -> UUID:
        return self.booking.id

    @property
    def venue_id(self) -> int:
        return self.booking.venue_id

    @property
    def booking_date(self) -> date:
        return self.booking.booking_date
