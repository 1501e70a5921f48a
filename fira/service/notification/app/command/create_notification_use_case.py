from typing import Any, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
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


class CreateNotificationUseCase:
    """In-app notification writer; also used by event, ticket and booking flows."""

    def __init__(self, *, notification_command_repo: INotificationCommandRepo) -> None:
        self.notification_command_repo = notification_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        notification_command_repo: INotificationCommandRepo = Depends(
            Provide[Container.notification_command_repo]
        ),
    ) -> Self:
        return cls(notification_command_repo=notification_command_repo)

    @Logger.io
    async def execute(
        self,
        *,
        user_id: int,
        type: NotificationType,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
        priority: NotificationPriority = NotificationPriority.MEDIUM,
        channel: NotificationChannel = NotificationChannel.IN_APP,
    ) -> Notification:
        notification = Notification.create(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            data=data,
            priority=priority,
            channel=channel,
        )
        return await self.notification_command_repo.create(notification=notification)

    @Logger.io
    async def execute_bulk(
        self,
        *,
        user_ids: List[int],
        type: NotificationType,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> int:
        if not user_ids:
            return 0
        notifications = [
            Notification.create(user_id=user_id, type=type, title=title, message=message, data=data)
            for user_id in dict.fromkeys(user_ids)
        ]
        count = await self.notification_command_repo.create_many(notifications=notifications)
        Logger.base.info(f'📣 [NOTIFICATION] Sent {count} {type.value} notifications')
        return count
