from typing import AsyncContextManager, Callable, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.logging.loguru_io import Logger
from fira.service.notification.app.interface.i_notification_query_repo import (
    INotificationQueryRepo,
)
from fira.service.notification.domain.entity.notification_entity import Notification
from fira.service.notification.driven_adapter.model.notification_model import NotificationModel
from fira.service.notification.driven_adapter.repo.notification_command_repo_impl import (
    NotificationCommandRepoImpl,
)


class NotificationQueryRepoImpl(INotificationQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, notification_id: UUID) -> Notification | None:
        async with self.session_factory() as session:
            model = await session.get(NotificationModel, notification_id)
            return NotificationCommandRepoImpl._to_entity(model) if model else None

    @Logger.io
    async def list_by_user(self, *, user_id: int, limit: int) -> List[Notification]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(NotificationModel)
                .where(NotificationModel.user_id == user_id)
                .order_by(NotificationModel.created_at.desc())
                .limit(limit)
            )
            return [NotificationCommandRepoImpl._to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def count_unread(self, *, user_id: int) -> int:
        async with self.session_factory() as session:
            count = await session.scalar(
                select(func.count())
                .select_from(NotificationModel)
                .where(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False))
            )
            return count or 0
