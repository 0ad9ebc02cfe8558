from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.caller_entity import Caller


class UpdateEventVisibilityUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def set_visibility(self, *, caller: Caller, event_id: str, is_visible: bool) -> Event:
        async with self.uow:
            event = await self.uow.event_repo.get_by_id(event_id=event_id, for_update=True)
            if event is None or not event.is_visible_to(caller):
                raise NotFoundError(f'Event {event_id} not found')
            if not event.is_managed_by(caller):
                raise ForbiddenError('Only the event organizer or an admin can change visibility')

            event.set_visibility(is_visible=is_visible)
            await self.uow.event_repo.save(event=event)
            await self.uow.commit()
        return event
