from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from fira.service.notification.domain.entity.notification_entity import Notification


class INotificationQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, notification_id: UUID) -> Notification | None:
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: int, limit: int) -> List[Notification]:
        """Newest first."""
        pass

    @abstractmethod
    async def count_unread(self, *, user_id: int) -> int:
        pass
