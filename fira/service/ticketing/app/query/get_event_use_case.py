from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from fira.platform.config.di import Container
from fira.platform.exception.exceptions import NotFoundError
from fira.platform.logging.loguru_io import Logger
from fira.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from fira.service.ticketing.domain.entity.event_entity import Event


class GetEventUseCase:
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
    async def execute(self, *, event_id: int) -> Event:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')
        return event
