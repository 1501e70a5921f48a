from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from fira.service.ticketing.domain.entity.ticket_entity import Ticket


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, ticket: Ticket) -> Ticket:
        pass

    @abstractmethod
    async def get_by_id(self, *, ticket_id: UUID) -> Ticket | None:
        pass

    @abstractmethod
    async def get_by_payment_id(self, *, payment_id: UUID) -> Ticket | None:
        pass

    @abstractmethod
    async def update_if_active(self, *, ticket: Ticket) -> Ticket | None:
        """
        Persist a transition out of `active` (check-in or cancellation).

        Conditional on the stored row still being active, so of two racing
        writers only one wins.

        Returns:
            Updated ticket, or None when the stored ticket was no longer active
        """
        pass

    @abstractmethod
    async def list_active_by_event(self, *, event_id: int) -> List[Ticket]:
        pass
