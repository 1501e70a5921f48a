from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from fira.service.ticketing.domain.entity.ticket_entity import Ticket


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, ticket_id: UUID) -> Ticket | None:
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> List[Ticket]:
        """Newest purchase first."""
        pass

    @abstractmethod
    async def list_by_event(self, *, event_id: int) -> List[Ticket]:
        pass
