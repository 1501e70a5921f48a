from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.logging.loguru_io import Logger
from fira.service.shared_kernel.app.dto.page import Page, page_offset
from fira.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from fira.service.ticketing.domain.entity.event_entity import Event
from fira.service.ticketing.domain.enum.ticket_enum import EventStatus


class ListEventsUseCase:
    def __init__(self, *, event_query_repo: IEventQueryRepo) -> None:
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(event_query_repo=event_query_repo)

    @Logger.io
    async def execute(
        self,
        *,
        organizer_id: int | None = None,
        status: EventStatus | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[Event]:
        events, total = await self.event_query_repo.list_events(
            organizer_id=organizer_id,
            status=status,
            offset=page_offset(page=page, limit=limit),
            limit=limit,
        )
        return Page(items=events, total=total, page=page, limit=limit)
