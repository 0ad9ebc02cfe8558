from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus


class ListEventsUseCase:
    """
    Catalog reads

    The public sees approved (or legacy, status-less) visible events. Admins
    see everything and may filter by moderation status; organizers also see
    their own events in any state.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def list_events(
        self,
        *,
        caller: Caller,
        category: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[ApprovalStatus] = None,
    ) -> List[Event]:
        if status is not None and not caller.is_admin:
            raise ForbiddenError('Only admins can filter events by moderation status')

        async with self.uow:
            events = await self.uow.event_repo.list_events(
                status=status, category=category, search=search
            )
        return [event for event in events if event.is_visible_to(caller)]

    @Logger.io
    async def get_event(self, *, caller: Caller, event_id: str) -> Event:
        async with self.uow:
            event = await self.uow.event_repo.get_by_id(event_id=event_id)
        if event is None or not event.is_visible_to(caller):
            raise NotFoundError(f'Event {event_id} not found')
        return event
