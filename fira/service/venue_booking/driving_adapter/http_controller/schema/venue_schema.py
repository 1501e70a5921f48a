from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from fira.service.venue_booking.domain.entity.venue_entity import VenueStatus


class VenueCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = ''
    city: str = Field(min_length=1, max_length=100)
    address: str = ''
    capacity: int = Field(gt=0)
    base_price: int = Field(ge=0)
    price_per_hour: Optional[int] = Field(default=None, ge=0)

    model_config = {
        'json_schema_extra': {
            'example': {
                'name': 'Harbour Hall',
                'description': 'Riverside hall with a stage',
                'city': 'Pune',
                'address': '12 River Road',
                'capacity': 300,
                'base_price': 20000,
                'price_per_hour': 5000,
            }
        }
    }


class VenueStatusRequest(BaseModel):
    status: VenueStatus


class VenueResponse(BaseModel):
    model_config = {'from_attributes': True}

    id: int
    owner_id: int
    name: str
    description: str
    city: str
    address: str
    capacity: int
    base_price: int
    price_per_hour: Optional[int] = None
    status: VenueStatus
    is_active: bool
    created_at: Optional[datetime] = None


class VenueListResponse(BaseModel):
    venues: List[VenueResponse]
    total: int
    total_pages: int
    current_page: int
