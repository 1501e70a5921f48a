from datetime import date
from typing import AsyncContextManager, Callable, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.logging.loguru_io import Logger
from fira.service.venue_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from fira.service.venue_booking.domain.entity.booking_entity import Booking, BookingStatus
from fira.service.venue_booking.driven_adapter.model.booking_model import BookingModel
from fira.service.venue_booking.driven_adapter.repo.booking_mapper import booking_model_to_entity


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        async with self.session_factory() as session:
            model = await session.get(BookingModel, booking_id)
            return booking_model_to_entity(model) if model else None

    @Logger.io
    async def list_bookings(
        self, *, status: BookingStatus | None, offset: int, limit: int
    ) -> tuple[List[Booking], int]:
        conditions = [BookingModel.status == status.value] if status else []

        async with self.session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(BookingModel).where(*conditions)
            )
            result = await session.execute(
                select(BookingModel)
                .where(*conditions)
                .order_by(BookingModel.created_at.desc())
                .offset(offset)
                .limit(limit)
            )
            return [booking_model_to_entity(m) for m in result.scalars().all()], total or 0

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.booking_date.desc())
            )
            return [booking_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_by_venue(self, *, venue_id: int) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.venue_id == venue_id)
                .order_by(BookingModel.booking_date)
            )
            return [booking_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_accepted_at_venue_on(
        self, *, venue_id: int, booking_date: date
    ) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel).where(
                    BookingModel.venue_id == venue_id,
                    BookingModel.booking_date == booking_date,
                    BookingModel.status == BookingStatus.ACCEPTED.value,
                )
            )
            return [booking_model_to_entity(m) for m in result.scalars().all()]
