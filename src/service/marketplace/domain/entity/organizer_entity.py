from datetime import datetime, timezone
from enum import StrEnum
from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidStateTransitionError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import new_id
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.domain.value_object.money import Money


class OrganizerStatus(StrEnum):
    ACTIVE = 'active'
    SUSPENDED = 'suspended'


@attrs.define(kw_only=True)
class OrganizerRequest:
    """Application from a user asking to sell events on the marketplace"""

    id: str
    user_id: str
    organization_name: str
    contact_email: str
    phone: str = ''
    document: str = ''
    description: str = ''
    status: ApprovalStatus = ApprovalStatus.PENDING
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def submit(
        cls,
        *,
        user_id: str,
        organization_name: str,
        contact_email: str,
        phone: str = '',
        document: str = '',
        description: str = '',
    ) -> 'OrganizerRequest':
        if not user_id:
            raise ValidationError('Organizer request needs an identified user')
        if not organization_name or not organization_name.strip():
            raise ValidationError('Organization name cannot be empty')
        if not contact_email or '@' not in contact_email:
            raise ValidationError('Contact email is invalid')

        return cls(
            id=new_id(),
            user_id=user_id,
            organization_name=organization_name.strip(),
            contact_email=contact_email.strip(),
            phone=phone,
            document=document,
            description=description,
            created_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def approve(self) -> tuple['OrganizerRequest', 'Organizer']:
        if self.status != ApprovalStatus.PENDING:
            raise InvalidStateTransitionError(f'Organizer request already {self.status}')

        now = datetime.now(timezone.utc)
        approved = attrs.evolve(self, status=ApprovalStatus.APPROVED, reviewed_at=now)
        return approved, Organizer.from_request(approved)

    @Logger.io
    def reject(self, *, reason: str) -> 'OrganizerRequest':
        if self.status != ApprovalStatus.PENDING:
            raise InvalidStateTransitionError(f'Organizer request already {self.status}')
        if not reason or not reason.strip():
            raise ValidationError('Rejection reason is required')

        return attrs.evolve(
            self,
            status=ApprovalStatus.REJECTED,
            rejection_reason=reason.strip(),
            reviewed_at=datetime.now(timezone.utc),
        )


@attrs.define(kw_only=True)
class Organizer:
    id: str
    user_id: str
    request_id: str
    organization_name: str
    contact_email: str
    status: OrganizerStatus = OrganizerStatus.ACTIVE
    total_events: int = 0
    total_revenue: Money = attrs.field(factory=Money.zero)
    suspension_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_request(cls, request: OrganizerRequest) -> 'Organizer':
        now = datetime.now(timezone.utc)
        return cls(
            id=new_id(),
            user_id=request.user_id,
            request_id=request.id,
            organization_name=request.organization_name,
            contact_email=request.contact_email,
            status=OrganizerStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status == OrganizerStatus.ACTIVE

    @Logger.io
    def suspend(self, *, reason: Optional[str] = None) -> 'Organizer':
        if self.status == OrganizerStatus.SUSPENDED:
            raise InvalidStateTransitionError(f'Organizer {self.organization_name} is already suspended')
        return attrs.evolve(
            self,
            status=OrganizerStatus.SUSPENDED,
            suspension_reason=reason,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def reactivate(self) -> 'Organizer':
        if self.status == OrganizerStatus.ACTIVE:
            raise InvalidStateTransitionError(f'Organizer {self.organization_name} is already active')
        return attrs.evolve(
            self,
            status=OrganizerStatus.ACTIVE,
            suspension_reason=None,
            updated_at=datetime.now(timezone.utc),
        )

    def record_event_created(self) -> 'Organizer':
        return attrs.evolve(
            self, total_events=self.total_events + 1, updated_at=datetime.now(timezone.utc)
        )

    def record_sale(self, amount: Money) -> 'Organizer':
        return attrs.evolve(
            self, total_revenue=self.total_revenue + amount, updated_at=datetime.now(timezone.utc)
        )

    def record_refund(self, amount: Money) -> 'Organizer':
        # Clamp so a refund on a pre-existing sale never drives revenue negative
        remaining = max(self.total_revenue, amount) - amount
        return attrs.evolve(self, total_revenue=remaining, updated_at=datetime.now(timezone.utc))
