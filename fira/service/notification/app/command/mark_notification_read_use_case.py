from datetime import datetime, timezone
from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.notification.app.interface.i_notification_command_repo import (
    INotificationCommandRepo,
)
from fira.service.notification.domain.entity.notification_entity import Notification


class MarkNotificationReadUseCase:
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
    async def mark_as_read(self, *, notification_id: UUID) -> Notification:
        notification = await self.notification_command_repo.mark_as_read(
            notification_id=notification_id, read_at=datetime.now(timezone.utc)
        )
        if not notification:
            raise NotFoundError('Notification not found')
        return notification

    @Logger.io
    async def mark_all_as_read(self, *, user_id: int) -> int:
        return await self.notification_command_repo.mark_all_as_read(
            user_id=user_id, read_at=datetime.now(timezone.utc)
        )

    @Logger.io
    async def delete(self, *, notification_id: UUID) -> None:
        if not await self.notification_command_repo.delete(notification_id=notification_id):
            raise NotFoundError('Notification not found')
