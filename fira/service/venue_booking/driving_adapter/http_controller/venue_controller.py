from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fira.platform.logging.loguru_io import Logger
from fira.service.shared_kernel.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)
from fira.service.venue_booking.app.command.create_venue_use_case import CreateVenueUseCase
from fira.service.venue_booking.app.command.update_venue_status_use_case import (
    UpdateVenueStatusUseCase,
)
from fira.service.venue_booking.app.query.list_venues_use_case import ListVenuesUseCase
from fira.service.venue_booking.domain.entity.venue_entity import VenueStatus
from fira.service.venue_booking.driving_adapter.http_controller.schema.venue_schema import (
    VenueCreateRequest,
    VenueListResponse,
    VenueResponse,
    VenueStatusRequest,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_venue(
    request: VenueCreateRequest,
    owner_id: int = Depends(get_current_user_id),
    use_case: CreateVenueUseCase = Depends(CreateVenueUseCase.depends),
) -> VenueResponse:
    venue = await use_case.execute(
        owner_id=owner_id,
        name=request.name,
        description=request.description,
        city=request.city,
        address=request.address,
        capacity=request.capacity,
        base_price=request.base_price,
        price_per_hour=request.price_per_hour,
    )
    return VenueResponse.model_validate(venue)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_venues(
    venue_status: VenueStatus = Query(default=VenueStatus.APPROVED, alias='status'),
    city: Optional[str] = None,
    owner_id: Optional[int] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    use_case: ListVenuesUseCase = Depends(ListVenuesUseCase.depends),
) -> VenueListResponse:
    result = await use_case.list_venues(
        status=venue_status, city=city, owner_id=owner_id, page=page, limit=limit
    )
    return VenueListResponse(
        venues=[VenueResponse.model_validate(v) for v in result.items],
        total=result.total,
        total_pages=result.total_pages,
        current_page=result.page,
    )


@router.get('/{venue_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_venue(
    venue_id: int,
    use_case: ListVenuesUseCase = Depends(ListVenuesUseCase.depends),
) -> VenueResponse:
    venue = await use_case.get_venue(venue_id=venue_id)
    return VenueResponse.model_validate(venue)


@router.put('/{venue_id}/status', status_code=status.HTTP_200_OK)
@Logger.io
async def update_venue_status(
    venue_id: int,
    request: VenueStatusRequest,
    use_case: UpdateVenueStatusUseCase = Depends(UpdateVenueStatusUseCase.depends),
) -> VenueResponse:
    venue = await use_case.execute(venue_id=venue_id, status=request.status)
    return VenueResponse.model_validate(venue)
