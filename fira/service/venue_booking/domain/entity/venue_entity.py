from datetime import datetime, timezone
from enum import StrEnum
from typing import Optional

import attrs

from fira.platform.exception.exceptions import DomainError, InvalidStateError
from fira.service.ticketing.domain.value_object.time_slot import TimeSlot


class VenueStatus(StrEnum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    SUSPENDED = 'suspended'


@attrs.define
class Venue:
    """
    A bookable space. The owner and the price list live here, never on the
    booking request: bookings copy both from the venue when they are created.
    """

    id: Optional[int]
    owner_id: int
    name: str
    description: str
    city: str
    address: str
    capacity: int
    base_price: int
    price_per_hour: Optional[int] = None
    status: VenueStatus = VenueStatus.PENDING
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        owner_id: int,
        name: str,
        description: str,
        city: str,
        address: str,
        capacity: int,
        base_price: int,
        price_per_hour: Optional[int] = None,
    ) -> 'Venue':
        if not name.strip():
            raise DomainError('Venue name is required')
        if capacity <= 0:
            raise DomainError('Capacity must be positive')
        if base_price < 0 or (price_per_hour is not None and price_per_hour < 0):
            raise DomainError('Prices cannot be negative')
        if base_price == 0 and not price_per_hour:
            raise DomainError('Venue needs a base price or an hourly price')

        now = datetime.now(timezone.utc)
        return cls(
            id=None,
            owner_id=owner_id,
            name=name.strip(),
            description=description,
            city=city,
            address=address,
            capacity=capacity,
            base_price=base_price,
            price_per_hour=price_per_hour,
            created_at=now,
            updated_at=now,
        )

    def quote(self, slot: TimeSlot) -> int:
        """Base price plus the hourly rate for every started hour of the slot."""
        slot.validate()
        minutes = slot.end_minutes - slot.start_minutes
        hours = -(-minutes // 60)
        return self.base_price + (self.price_per_hour or 0) * hours

    def ensure_bookable(self, *, expected_guests: int) -> None:
        if not self.is_active or self.status != VenueStatus.APPROVED:
            raise InvalidStateError('Venue is not accepting bookings')
        if expected_guests > self.capacity:
            raise DomainError(f'Venue capacity is {self.capacity} guests')

    def change_status(self, status: VenueStatus) -> 'Venue':
        return attrs.evolve(self, status=status, updated_at=datetime.now(timezone.utc))
