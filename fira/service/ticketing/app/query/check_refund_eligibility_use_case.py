from datetime import datetime, timezone
from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.core_setting import Settings
from fira.platform.config.di import Container
from fira.platform.exception.exceptions import ForbiddenError, NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from fira.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from fira.service.ticketing.domain.refund_policy import RefundEligibility, RefundPolicy


def refund_policy_from_settings(settings: Settings) -> RefundPolicy:
    return RefundPolicy(
        full_refund_hours=settings.REFUND_FULL_HOURS,
        partial_refund_hours=settings.REFUND_PARTIAL_HOURS,
        partial_refund_percentage=settings.REFUND_PARTIAL_PERCENTAGE,
        event_timezone=settings.EVENT_TIMEZONE,
    )


class CheckRefundEligibilityUseCase:
    def __init__(
        self,
        *,
        ticket_query_repo: ITicketQueryRepo,
        event_query_repo: IEventQueryRepo,
        refund_policy: RefundPolicy,
    ) -> None:
        self.ticket_query_repo = ticket_query_repo
        self.event_query_repo = event_query_repo
        self.refund_policy = refund_policy

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            ticket_query_repo=ticket_query_repo,
            event_query_repo=event_query_repo,
            refund_policy=refund_policy_from_settings(settings),
        )

    @Logger.io
    async def execute(self, *, ticket_id: UUID, user_id: int) -> RefundEligibility:
        ticket = await self.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')
        if ticket.user_id != user_id:
            raise ForbiddenError('Unauthorized: This ticket belongs to another user')

        event = await self.event_query_repo.get_by_id(event_id=ticket.event_id)
        if not event:
            raise NotFoundError('Event not found')

        return self.refund_policy.evaluate(
            ticket=ticket, event=event, now=datetime.now(timezone.utc)
        )
