from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.command.add_batch_use_case import AddBatchUseCase
from src.service.marketplace.app.command.add_ticket_type_use_case import AddTicketTypeUseCase
from src.service.marketplace.app.command.create_event_use_case import CreateEventUseCase
from src.service.marketplace.app.command.reserve_tickets_use_case import ReserveTicketsUseCase
from src.service.marketplace.app.command.review_event_use_case import ReviewEventUseCase
from src.service.marketplace.app.command.update_event_visibility_use_case import (
    UpdateEventVisibilityUseCase,
)
from src.service.marketplace.app.query.get_event_report_use_case import GetEventReportUseCase
from src.service.marketplace.app.query.list_events_use_case import ListEventsUseCase
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import (
    get_current_caller,
    require_admin,
    require_organizer_or_admin,
)
from src.service.marketplace.driving_adapter.http_controller.schema.event_schema import (
    BatchCreateRequest,
    BatchResponse,
    EventCreateRequest,
    EventResponse,
    RejectRequest,
    TicketTypeCreateRequest,
    TicketTypeResponse,
    VisibilityRequest,
)
from src.service.marketplace.driving_adapter.http_controller.schema.order_schema import (
    OrderResponse,
    ReserveRequest,
)
from src.service.marketplace.driving_adapter.http_controller.schema.report_schema import (
    BuyerRecordResponse,
    CheckInStatsResponse,
    EventReportResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('')
@Logger.io
async def list_events(
    category: Optional[str] = None,
    search: Optional[str] = None,
    event_status: Optional[ApprovalStatus] = Query(default=None, alias='status'),
    caller: Caller = Depends(get_current_caller),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_events(
        caller=caller, category=category, search=search, status=event_status
    )
    return [EventResponse.from_entity(event) for event in events]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    caller: Caller = Depends(require_organizer_or_admin),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.create_event(
        caller=caller,
        title=request.title,
        description=request.description,
        event_date=request.event_date,
        event_time=request.event_time,
        location=request.location,
        category=request.category,
        image=request.image,
        price=request.price,
        total_tickets=request.total_tickets,
        available_tickets=request.available_tickets,
    )
    return EventResponse.from_entity(event)


@router.get('/{event_id}')
@Logger.io
async def get_event(
    event_id: str,
    caller: Caller = Depends(get_current_caller),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> EventResponse:
    event = await use_case.get_event(caller=caller, event_id=event_id)
    return EventResponse.from_entity(event)


@router.post('/{event_id}/ticket-types', status_code=status.HTTP_201_CREATED)
@Logger.io
async def add_ticket_type(
    event_id: str,
    request: TicketTypeCreateRequest,
    caller: Caller = Depends(require_organizer_or_admin),
    use_case: AddTicketTypeUseCase = Depends(AddTicketTypeUseCase.depends),
) -> TicketTypeResponse:
    ticket_type = await use_case.add_ticket_type(
        caller=caller,
        event_id=event_id,
        name=request.name,
        description=request.description,
        price=request.price,
        total_tickets=request.total_tickets,
        available_tickets=request.available_tickets,
        allow_half_price=request.allow_half_price,
    )
    return TicketTypeResponse.from_entity(ticket_type)


@router.post(
    '/{event_id}/ticket-types/{ticket_type_id}/batches', status_code=status.HTTP_201_CREATED
)
@Logger.io
async def add_batch(
    event_id: str,
    ticket_type_id: str,
    request: BatchCreateRequest,
    caller: Caller = Depends(require_organizer_or_admin),
    use_case: AddBatchUseCase = Depends(AddBatchUseCase.depends),
) -> BatchResponse:
    batch = await use_case.add_batch(
        caller=caller,
        event_id=event_id,
        ticket_type_id=ticket_type_id,
        name=request.name,
        price=request.price,
        quantity=request.quantity,
        available_quantity=request.available_quantity,
        start_at=request.start_at,
        end_at=request.end_at,
    )
    return BatchResponse.from_entity(batch)


@router.patch('/{event_id}/visibility')
@Logger.io
async def update_visibility(
    event_id: str,
    request: VisibilityRequest,
    caller: Caller = Depends(require_organizer_or_admin),
    use_case: UpdateEventVisibilityUseCase = Depends(UpdateEventVisibilityUseCase.depends),
) -> EventResponse:
    event = await use_case.set_visibility(
        caller=caller, event_id=event_id, is_visible=request.is_visible
    )
    return EventResponse.from_entity(event)


@router.post('/{event_id}/approve')
@Logger.io
async def approve_event(
    event_id: str,
    caller: Caller = Depends(require_admin),
    use_case: ReviewEventUseCase = Depends(ReviewEventUseCase.depends),
) -> EventResponse:
    event = await use_case.approve(event_id=event_id)
    return EventResponse.from_entity(event)


@router.post('/{event_id}/reject')
@Logger.io
async def reject_event(
    event_id: str,
    request: RejectRequest,
    caller: Caller = Depends(require_admin),
    use_case: ReviewEventUseCase = Depends(ReviewEventUseCase.depends),
) -> EventResponse:
    event = await use_case.reject(event_id=event_id, reason=request.reason)
    return EventResponse.from_entity(event)


@router.post('/{event_id}/reserve', status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve_flat(
    event_id: str,
    request: ReserveRequest,
    caller: Caller = Depends(get_current_caller),
    use_case: ReserveTicketsUseCase = Depends(ReserveTicketsUseCase.depends),
) -> OrderResponse:
    with tracer.start_as_current_span('controller.reserve_tickets') as span:
        span.set_attribute('event.id', event_id)
        span.set_attribute('order.quantity', request.quantity)
        order = await use_case.reserve(
            caller=caller,
            event_id=event_id,
            quantity=request.quantity,
            half_price=request.half_price,
            buyer=request.buyer.to_entity() if request.buyer else None,
        )
        span.set_attribute('order.id', order.id)
        return OrderResponse.from_entity(order)


@router.post(
    '/{event_id}/ticket-types/{ticket_type_id}/reserve', status_code=status.HTTP_201_CREATED
)
@Logger.io
async def reserve_ticket_type(
    event_id: str,
    ticket_type_id: str,
    request: ReserveRequest,
    caller: Caller = Depends(get_current_caller),
    use_case: ReserveTicketsUseCase = Depends(ReserveTicketsUseCase.depends),
) -> OrderResponse:
    with tracer.start_as_current_span('controller.reserve_tickets') as span:
        span.set_attribute('event.id', event_id)
        span.set_attribute('ticket_type.id', ticket_type_id)
        span.set_attribute('order.quantity', request.quantity)
        order = await use_case.reserve(
            caller=caller,
            event_id=event_id,
            ticket_type_id=ticket_type_id,
            quantity=request.quantity,
            half_price=request.half_price,
            buyer=request.buyer.to_entity() if request.buyer else None,
        )
        span.set_attribute('order.id', order.id)
        return OrderResponse.from_entity(order)


@router.get('/{event_id}/buyers')
@Logger.io
async def list_buyers(
    event_id: str,
    caller: Caller = Depends(require_organizer_or_admin),
    use_case: GetEventReportUseCase = Depends(GetEventReportUseCase.depends),
) -> List[BuyerRecordResponse]:
    records = await use_case.list_buyers(caller=caller, event_id=event_id)
    return [BuyerRecordResponse.from_record(record) for record in records]


@router.get('/{event_id}/report')
@Logger.io
async def get_report(
    event_id: str,
    caller: Caller = Depends(require_organizer_or_admin),
    use_case: GetEventReportUseCase = Depends(GetEventReportUseCase.depends),
) -> EventReportResponse:
    report = await use_case.get_report(caller=caller, event_id=event_id)
    return EventReportResponse.from_report(report)


@router.get('/{event_id}/check-in-stats')
@Logger.io
async def get_check_in_stats(
    event_id: str,
    caller: Caller = Depends(get_current_caller),
    use_case: GetEventReportUseCase = Depends(GetEventReportUseCase.depends),
) -> CheckInStatsResponse:
    stats = await use_case.get_check_in_stats(caller=caller, event_id=event_id)
    return CheckInStatsResponse.from_stats(stats)
