from abc import ABC, abstractmethod
from datetime import datetime
from typing import List
from uuid import UUID

from fira.service.notification.domain.entity.notification_entity import Notification


class INotificationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def create_many(self, *, notifications: List[Notification]) -> int:
        """Insert in one statement; returns the number of rows written."""
        pass

    @abstractmethod
    async def mark_as_read(
        self, *, notification_id: UUID, read_at: datetime
    ) -> Notification | None:
        pass

    @abstractmethod
    async def mark_all_as_read(self, *, user_id: int, read_at: datetime) -> int:
        pass

    @abstractmethod
    async def delete(self, *, notification_id: UUID) -> bool:
        pass
