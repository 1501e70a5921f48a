from typing import List, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.core_setting import Settings
from fira.platform.config.di import Container
from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.notification.app.interface.i_notification_query_repo import (
    INotificationQueryRepo,
)
from fira.service.notification.domain.entity.notification_entity import Notification


class ListNotificationsUseCase:
    def __init__(self, *, notification_query_repo: INotificationQueryRepo, limit: int) -> None:
        self.notification_query_repo = notification_query_repo
        self.limit = limit

    @classmethod
    @inject
    def depends(
        cls,
        notification_query_repo: INotificationQueryRepo = Depends(
            Provide[Container.notification_query_repo]
        ),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            notification_query_repo=notification_query_repo,
            limit=settings.NOTIFICATION_LIST_LIMIT,
        )

    @Logger.io
    async def list_for_user(self, *, user_id: int) -> List[Notification]:
        return await self.notification_query_repo.list_by_user(user_id=user_id, limit=self.limit)

    @Logger.io
    async def unread_count(self, *, user_id: int) -> int:
        return await self.notification_query_repo.count_unread(user_id=user_id)

    @Logger.io
    async def get_by_id(self, *, notification_id: UUID) -> Notification:
        notification = await self.notification_query_repo.get_by_id(
            notification_id=notification_id
        )
        if not notification:
            raise NotFoundError('Notification not found')
        return notification
