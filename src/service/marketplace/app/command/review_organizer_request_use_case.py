from typing import Optional, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.entity.organizer_entity import Organizer, OrganizerRequest


class ReviewOrganizerRequestUseCase:
    """Admin approval of organizer applications; approval creates the Organizer"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    async def _load(self, request_id: str) -> OrganizerRequest:
        request = await self.uow.organizer_repo.get_request(request_id=request_id)
        if request is None:
            raise NotFoundError(f'Organizer request {request_id} not found')
        return request

    @Logger.io
    async def approve(self, *, request_id: str) -> Tuple[OrganizerRequest, Organizer]:
        async with self.uow:
            request = await self._load(request_id)
            approved, organizer = request.approve()
            await self.uow.organizer_repo.save_request(request=approved)
            await self.uow.organizer_repo.save_organizer(organizer=organizer)
            await self.uow.commit()

        Logger.base.info(
            f'🤝 [ORGANIZER] {organizer.organization_name} approved for user {organizer.user_id}'
        )
        return approved, organizer

    @Logger.io
    async def reject(self, *, request_id: str, reason: Optional[str]) -> OrganizerRequest:
        async with self.uow:
            request = await self._load(request_id)
            rejected = request.reject(reason=reason or '')
            await self.uow.organizer_repo.save_request(request=rejected)
            await self.uow.commit()
        return rejected
