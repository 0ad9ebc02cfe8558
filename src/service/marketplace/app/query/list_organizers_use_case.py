from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.organizer_entity import Organizer, OrganizerRequest
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus


class ListOrganizersUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def list_requests(
        self, *, caller: Caller, status: Optional[ApprovalStatus] = None
    ) -> List[OrganizerRequest]:
        """Admins see every request; anyone else only their own"""
        if not caller.is_admin and caller.is_anonymous:
            return []
        async with self.uow:
            return await self.uow.organizer_repo.list_requests(
                status=status, user_id=None if caller.is_admin else caller.user_id
            )

    @Logger.io
    async def list_organizers(self) -> List[Organizer]:
        async with self.uow:
            return await self.uow.organizer_repo.list_organizers()
