from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.organizer_entity import OrganizerRequest
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus


class SubmitOrganizerRequestUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def submit(
        self,
        *,
        caller: Caller,
        organization_name: str,
        contact_email: str,
        phone: str = '',
        document: str = '',
        description: str = '',
    ) -> OrganizerRequest:
        if caller.is_anonymous:
            raise ForbiddenError('Sign in to apply as an organizer')

        async with self.uow:
            user_id = caller.user_id or ''
            if await self.uow.organizer_repo.get_organizer_by_user_id(user_id=user_id):
                raise ConflictError('User is already an organizer')
            pending = await self.uow.organizer_repo.list_requests(
                status=ApprovalStatus.PENDING, user_id=user_id
            )
            if pending:
                raise ConflictError('An organizer request is already pending review')

            request = OrganizerRequest.submit(
                user_id=user_id,
                organization_name=organization_name,
                contact_email=contact_email,
                phone=phone,
                document=document,
                description=description,
            )
            await self.uow.organizer_repo.save_request(request=request)
            await self.uow.commit()

        Logger.base.info(f'📝 [ORGANIZER] Request {request.id} submitted by user {user_id}')
        return request
