from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.command.review_organizer_request_use_case import (
    ReviewOrganizerRequestUseCase,
)
from src.service.marketplace.app.command.submit_organizer_request_use_case import (
    SubmitOrganizerRequestUseCase,
)
from src.service.marketplace.app.command.update_organizer_status_use_case import (
    UpdateOrganizerStatusUseCase,
)
from src.service.marketplace.app.query.list_organizers_use_case import ListOrganizersUseCase
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
    require_signed_in,
)
from src.service.marketplace.driving_adapter.http_controller.schema.organizer_schema import (
    OrganizerApprovalResponse,
    OrganizerRequestCreate,
    OrganizerRequestResponse,
    OrganizerResponse,
    ReviewRejectRequest,
    SuspendRequest,
)


request_router = APIRouter()
organizer_router = APIRouter()


@request_router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def submit_request(
    request: OrganizerRequestCreate,
    caller: Caller = Depends(require_signed_in),
    use_case: SubmitOrganizerRequestUseCase = Depends(SubmitOrganizerRequestUseCase.depends),
) -> OrganizerRequestResponse:
    organizer_request = await use_case.submit(
        caller=caller,
        organization_name=request.organization_name,
        contact_email=request.contact_email,
        phone=request.phone,
        document=request.document,
        description=request.description,
    )
    return OrganizerRequestResponse.from_entity(organizer_request)


@request_router.get('')
@Logger.io
async def list_requests(
    request_status: Optional[ApprovalStatus] = Query(default=None, alias='status'),
    caller: Caller = Depends(require_signed_in),
    use_case: ListOrganizersUseCase = Depends(ListOrganizersUseCase.depends),
) -> List[OrganizerRequestResponse]:
    requests = await use_case.list_requests(caller=caller, status=request_status)
    return [OrganizerRequestResponse.from_entity(r) for r in requests]


@request_router.post('/{request_id}/approve')
@Logger.io
async def approve_request(
    request_id: str,
    caller: Caller = Depends(require_admin),
    use_case: ReviewOrganizerRequestUseCase = Depends(ReviewOrganizerRequestUseCase.depends),
) -> OrganizerApprovalResponse:
    approved, organizer = await use_case.approve(request_id=request_id)
    return OrganizerApprovalResponse(
        request=OrganizerRequestResponse.from_entity(approved),
        organizer=OrganizerResponse.from_entity(organizer),
    )


@request_router.post('/{request_id}/reject')
@Logger.io
async def reject_request(
    request_id: str,
    request: ReviewRejectRequest,
    caller: Caller = Depends(require_admin),
    use_case: ReviewOrganizerRequestUseCase = Depends(ReviewOrganizerRequestUseCase.depends),
) -> OrganizerRequestResponse:
    rejected = await use_case.reject(request_id=request_id, reason=request.reason)
    return OrganizerRequestResponse.from_entity(rejected)


@organizer_router.get('')
@Logger.io
async def list_organizers(
    caller: Caller = Depends(require_admin),
    use_case: ListOrganizersUseCase = Depends(ListOrganizersUseCase.depends),
) -> List[OrganizerResponse]:
    organizers = await use_case.list_organizers()
    return [OrganizerResponse.from_entity(organizer) for organizer in organizers]


@organizer_router.post('/{organizer_id}/suspend')
@Logger.io
async def suspend_organizer(
    organizer_id: str,
    request: Optional[SuspendRequest] = None,
    caller: Caller = Depends(require_admin),
    use_case: UpdateOrganizerStatusUseCase = Depends(UpdateOrganizerStatusUseCase.depends),
) -> OrganizerResponse:
    organizer = await use_case.suspend(
        organizer_id=organizer_id, reason=request.reason if request else None
    )
    return OrganizerResponse.from_entity(organizer)


@organizer_router.post('/{organizer_id}/reactivate')
@Logger.io
async def reactivate_organizer(
    organizer_id: str,
    caller: Caller = Depends(require_admin),
    use_case: UpdateOrganizerStatusUseCase = Depends(UpdateOrganizerStatusUseCase.depends),
) -> OrganizerResponse:
    organizer = await use_case.reactivate(organizer_id=organizer_id)
    return OrganizerResponse.from_entity(organizer)
