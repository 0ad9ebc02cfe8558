from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.entity.organizer_entity import Organizer


class UpdateOrganizerStatusUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def suspend(self, *, organizer_id: str, reason: Optional[str] = None) -> Organizer:
        async with self.uow:
            organizer = await self._load(organizer_id)
            suspended = organizer.suspend(reason=reason)
            await self.uow.organizer_repo.save_organizer(organizer=suspended)
            await self.uow.commit()

        Logger.base.warning(f'⛔ [ORGANIZER] {organizer.organization_name} suspended: {reason}')
        return suspended

    @Logger.io
    async def reactivate(self, *, organizer_id: str) -> Organizer:
        async with self.uow:
            organizer = await self._load(organizer_id)
            active = organizer.reactivate()
            await self.uow.organizer_repo.save_organizer(organizer=active)
            await self.uow.commit()
        return active

    async def _load(self, organizer_id: str) -> Organizer:
        organizer = await self.uow.organizer_repo.get_organizer(organizer_id=organizer_id)
        if organizer is None:
            raise NotFoundError(f'Organizer {organizer_id} not found')
        return organizer
