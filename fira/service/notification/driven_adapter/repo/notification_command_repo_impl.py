from datetime import datetime
from typing import AsyncContextManager, Callable, List
from uuid import UUID

from sqlalchemy import delete, insert, update
from sqlalchemy.ext.asyncio import AsyncSession

from fira.platform.logging.loguru_io import Logger
from fira.service.notification.app.interface.i_notification_command_repo import (
    INotificationCommandRepo,
)
from fira.service.notification.domain.entity.notification_entity import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from fira.service.notification.driven_adapter.model.notification_model import NotificationModel


class NotificationCommandRepoImpl(INotificationCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @staticmethod
    def _to_row(notification: Notification) -> dict:
        return {
            'id': notification.id,
            'user_id': notification.user_id,
            'type': notification.type.value,
            'title': notification.title,
            'message': notification.message,
            'data': notification.data,
            'priority': notification.priority.value,
            'channel': notification.channel.value,
            'is_read': notification.is_read,
            'read_at': notification.read_at,
        }

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            data=model.data or {},
            priority=NotificationPriority(model.priority),
            channel=NotificationChannel(model.channel),
            is_read=model.is_read,
            read_at=model.read_at,
            created_at=model.created_at,
        )

    @Logger.io
    async def create(self, *, notification: Notification) -> Notification:
        async with self.session_factory() as session:
            model = NotificationModel(**self._to_row(notification))
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return self._to_entity(model)

    @Logger.io
    async def create_many(self, *, notifications: List[Notification]) -> int:
        if not notifications:
            return 0
        async with self.session_factory() as session:
            await session.execute(
                insert(NotificationModel), [self._to_row(n) for n in notifications]
            )
            await session.commit()
            return len(notifications)

    @Logger.io
    async def mark_as_read(
        self, *, notification_id: UUID, read_at: datetime
    ) -> Notification | None:
        async with self.session_factory() as session:
            result = await session.execute(
                update(NotificationModel)
                .where(NotificationModel.id == notification_id)
                .values(is_read=True, read_at=read_at)
                .returning(NotificationModel)
            )
            model = result.scalar_one_or_none()
            await session.commit()
            return self._to_entity(model) if model else None

    @Logger.io
    async def mark_all_as_read(self, *, user_id: int, read_at: datetime) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                update(NotificationModel)
                .where(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False))
                .values(is_read=True, read_at=read_at)
            )
            await session.commit()
            return result.rowcount or 0  # type: ignore[attr-defined]

    @Logger.io
    async def delete(self, *, notification_id: UUID) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(NotificationModel).where(NotificationModel.id == notification_id)
            )
            await session.commit()
            return bool(result.rowcount)  # type: ignore[attr-defined]
