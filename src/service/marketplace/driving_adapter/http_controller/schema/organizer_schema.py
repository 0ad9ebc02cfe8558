from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.service.marketplace.domain.entity.organizer_entity import Organizer, OrganizerRequest


class OrganizerRequestCreate(BaseModel):
    organization_name: str
    contact_email: str
    phone: str = ''
    document: str = ''
    description: str = ''


class ReviewRejectRequest(BaseModel):
    reason: str = ''


class SuspendRequest(BaseModel):
    reason: Optional[str] = None


class OrganizerRequestResponse(BaseModel):
    id: str
    user_id: str
    organization_name: str
    contact_email: str
    phone: str
    document: str
    description: str
    status: str
    rejection_reason: Optional[str]
    created_at: Optional[datetime]
    reviewed_at: Optional[datetime]

    @classmethod
    def from_entity(cls, request: OrganizerRequest) -> 'OrganizerRequestResponse':
        return cls(
            id=request.id,
            user_id=request.user_id,
            organization_name=request.organization_name,
            contact_email=request.contact_email,
            phone=request.phone,
            document=request.document,
            description=request.description,
            status=request.status.value,
            rejection_reason=request.rejection_reason,
            created_at=request.created_at,
            reviewed_at=request.reviewed_at,
        )


class OrganizerResponse(BaseModel):
    id: str
    user_id: str
    request_id: str
    organization_name: str
    contact_email: str
    status: str
    total_events: int
    total_revenue: str
    suspension_reason: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def from_entity(cls, organizer: Organizer) -> 'OrganizerResponse':
        return cls(
            id=organizer.id,
            user_id=organizer.user_id,
            request_id=organizer.request_id,
            organization_name=organizer.organization_name,
            contact_email=organizer.contact_email,
            status=organizer.status.value,
            total_events=organizer.total_events,
            total_revenue=str(organizer.total_revenue),
            suspension_reason=organizer.suspension_reason,
            created_at=organizer.created_at,
        )


class OrganizerApprovalResponse(BaseModel):
    request: OrganizerRequestResponse
    organizer: OrganizerResponse
