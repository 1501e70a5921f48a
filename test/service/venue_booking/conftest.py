from datetime import date
from typing import Any, Callable

import attrs
import pytest

from fira.service.venue_booking.domain.entity.booking_entity import Booking
from fira.service.venue_booking.domain.entity.venue_entity import Venue, VenueStatus


VENUE_OWNER_ID = 30


@pytest.fixture
def make_booking() -> Callable[..., Booking]:
    """Pending booking by user 20 for venue 7 on 2026-12-24, 18:00-22:00, 20000 total."""

    def _make(**overrides: Any) -> Booking:
        fields: dict[str, Any] = {
            'user_id': 20,
            'venue_id': 7,
            'venue_owner_id': VENUE_OWNER_ID,
            'booking_date': date(2026, 12, 24),
            'start_time': '18:00',
            'end_time': '22:00',
            'total_amount': 20000,
            'purpose': 'Company party',
            'expected_guests': 80,
        }
        fields.update(overrides)
        return Booking.create(**fields)

    return _make


@pytest.fixture
def make_venue() -> Callable[..., Venue]:
    """Approved venue 7 owned by VENUE_OWNER_ID: 4000 base plus 4000 per started hour."""

    def _make(**overrides: Any) -> Venue:
        fields: dict[str, Any] = {
            'owner_id': VENUE_OWNER_ID,
            'name': 'Harbour Hall',
            'description': 'Riverside hall',
            'city': 'Pune',
            'address': '12 River Road',
            'capacity': 200,
            'base_price': 4000,
            'price_per_hour': 4000,
        }
        status = overrides.pop('status', VenueStatus.APPROVED)
        venue_id = overrides.pop('id', 7)
        fields.update(overrides)
        return attrs.evolve(Venue.create(**fields), id=venue_id, status=status)

    return _make
