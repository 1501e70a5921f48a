from fira.service.venue_booking.domain.entity.venue_entity import Venue, VenueStatus
from fira.service.venue_booking.driven_adapter.model.venue_model import VenueModel


def venue_model_to_entity(model: VenueModel) -> Venue:
    return Venue(
        id=model.id,
        owner_id=model.owner_id,
        name=model.name,
        description=model.description,
        city=model.city,
        address=model.address,
        capacity=model.capacity,
        base_price=model.base_price,
        price_per_hour=model.price_per_hour,
        status=VenueStatus(model.status),
        is_active=model.is_active,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def venue_entity_to_model(venue: Venue, model: VenueModel | None = None) -> VenueModel:
    model = model or VenueModel()
    model.owner_id = venue.owner_id
    model.name = venue.name
    model.description = venue.description
    model.city = venue.city
    model.address = venue.address
    model.capacity = venue.capacity
    model.base_price = venue.base_price
    model.price_per_hour = venue.price_per_hour
    model.status = venue.status.value
    model.is_active = venue.is_active
    return model
