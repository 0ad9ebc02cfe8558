from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.aggregate.event_aggregate import Event


class ReviewEventUseCase:
    """Admin moderation: pending events become approved (listed) or rejected"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    async def _load(self, event_id: str) -> Event:
        event = await self.uow.event_repo.get_by_id(event_id=event_id, for_update=True)
        if event is None:
            raise NotFoundError(f'Event {event_id} not found')
        return event

    @Logger.io
    async def approve(self, *, event_id: str) -> Event:
        async with self.uow:
            event = await self._load(event_id)
            event.approve()
            await self.uow.event_repo.save(event=event)
            await self.uow.commit()

        Logger.base.info(f'✅ [EVENT] {event.title} approved and listed')
        return event

    @Logger.io
    async def reject(self, *, event_id: str, reason: Optional[str]) -> Event:
        async with self.uow:
            event = await self._load(event_id)
            event.reject(reason=reason or '')
            await self.uow.event_repo.save(event=event)
            await self.uow.commit()
        return event
