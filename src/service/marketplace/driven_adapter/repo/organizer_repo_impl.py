from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import as_utc
from src.service.marketplace.app.interface.i_organizer_repo import IOrganizerRepo
from src.service.marketplace.domain.entity.organizer_entity import (
    Organizer,
    OrganizerRequest,
    OrganizerStatus,
)
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.domain.value_object.money import Money
from src.service.marketplace.driven_adapter.model.organizer_model import (
    OrganizerModel,
    OrganizerRequestModel,
)


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    return as_utc(value) if value is not None else None


class OrganizerRepoImpl(IOrganizerRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _model_to_request(model: OrganizerRequestModel) -> OrganizerRequest:
        return OrganizerRequest(
            id=model.id,
            user_id=model.user_id,
            organization_name=model.organization_name,
            contact_email=model.contact_email,
            phone=model.phone,
            document=model.document,
            description=model.description,
            status=ApprovalStatus(model.status),
            rejection_reason=model.rejection_reason,
            created_at=_utc(model.created_at),
            reviewed_at=_utc(model.reviewed_at),
        )

    @staticmethod
    def _model_to_organizer(model: OrganizerModel) -> Organizer:
        return Organizer(
            id=model.id,
            user_id=model.user_id,
            request_id=model.request_id,
            organization_name=model.organization_name,
            contact_email=model.contact_email,
            status=OrganizerStatus(model.status),
            total_events=model.total_events,
            total_revenue=Money(model.total_revenue),
            suspension_reason=model.suspension_reason,
            created_at=_utc(model.created_at),
            updated_at=_utc(model.updated_at),
        )

    @Logger.io
    async def get_request(self, *, request_id: str) -> Optional[OrganizerRequest]:
        model = await self.session.get(OrganizerRequestModel, request_id)
        return self._model_to_request(model) if model else None

    @Logger.io
    async def save_request(self, *, request: OrganizerRequest) -> OrganizerRequest:
        model = await self.session.get(OrganizerRequestModel, request.id)
        if model is None:
            model = OrganizerRequestModel(id=request.id)
            self.session.add(model)
        model.user_id = request.user_id
        model.organization_name = request.organization_name
        model.contact_email = request.contact_email
        model.phone = request.phone
        model.document = request.document
        model.description = request.description
        model.status = request.status.value
        model.rejection_reason = request.rejection_reason
        model.created_at = request.created_at
        model.reviewed_at = request.reviewed_at
        await self.session.flush()
        return request

    @Logger.io
    async def list_requests(
        self, *, status: Optional[ApprovalStatus] = None, user_id: Optional[str] = None
    ) -> List[OrganizerRequest]:
        stmt = select(OrganizerRequestModel)
        if status is not None:
            stmt = stmt.where(OrganizerRequestModel.status == status.value)
        if user_id is not None:
            stmt = stmt.where(OrganizerRequestModel.user_id == user_id)
        result = await self.session.execute(stmt.order_by(OrganizerRequestModel.created_at))
        return [self._model_to_request(model) for model in result.scalars().all()]

    @Logger.io
    async def get_organizer(self, *, organizer_id: str) -> Optional[Organizer]:
        model = await self.session.get(OrganizerModel, organizer_id)
        return self._model_to_organizer(model) if model else None

    @Logger.io
    async def get_organizer_by_user_id(self, *, user_id: str) -> Optional[Organizer]:
        result = await self.session.execute(
            select(OrganizerModel).where(OrganizerModel.user_id == user_id)
        )
        model = result.scalar_one_or_none()
        return self._model_to_organizer(model) if model else None

    @Logger.io
    async def save_organizer(self, *, organizer: Organizer) -> Organizer:
        model = await self.session.get(OrganizerModel, organizer.id)
        if model is None:
            model = OrganizerModel(id=organizer.id)
            self.session.add(model)
        model.user_id = organizer.user_id
        model.request_id = organizer.request_id
        model.organization_name = organizer.organization_name
        model.contact_email = organizer.contact_email
        model.status = organizer.status.value
        model.total_events = organizer.total_events
        model.total_revenue = organizer.total_revenue.amount
        model.suspension_reason = organizer.suspension_reason
        model.created_at = organizer.created_at
        model.updated_at = organizer.updated_at
        await self.session.flush()
        return organizer

    @Logger.io
    async def list_organizers(self) -> List[Organizer]:
        result = await self.session.execute(
            select(OrganizerModel).order_by(OrganizerModel.organization_name)
        )
        return [self._model_to_organizer(model) for model in result.scalars().all()]
