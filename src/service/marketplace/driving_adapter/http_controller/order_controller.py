from typing import List, Optional

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.marketplace.app.command.check_in_use_case import CheckInUseCase
from src.service.marketplace.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.marketplace.app.command.request_refund_use_case import RequestRefundUseCase
from src.service.marketplace.app.command.resolve_refund_use_case import ResolveRefundUseCase
from src.service.marketplace.app.query.get_order_use_case import GetOrderUseCase
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import (
    get_current_caller,
    require_admin,
    require_signed_in,
    require_staff,
)
from src.service.marketplace.driving_adapter.http_controller.schema.order_schema import (
    OrderResponse,
    RefundRequest,
    RefundResolveRequest,
)


router = APIRouter()


@router.get('/my_orders')
@Logger.io
async def list_my_orders(
    caller: Caller = Depends(get_current_caller),
    use_case: GetOrderUseCase = Depends(GetOrderUseCase.depends),
) -> List[OrderResponse]:
    orders = await use_case.my_orders(caller=caller)
    return [OrderResponse.from_entity(order) for order in orders]


@router.get('/{order_id}')
@Logger.io
async def get_order(
    order_id: str,
    caller: Caller = Depends(get_current_caller),
    use_case: GetOrderUseCase = Depends(GetOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.get_order(caller=caller, order_id=order_id)
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/confirm')
@Logger.io
async def confirm_payment(
    order_id: str,
    caller: Caller = Depends(require_signed_in),
    use_case: ConfirmPaymentUseCase = Depends(ConfirmPaymentUseCase.depends),
) -> OrderResponse:
    order = await use_case.confirm(caller=caller, order_id=order_id)
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/cancel')
@Logger.io
async def cancel_reservation(
    order_id: str,
    caller: Caller = Depends(require_signed_in),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> OrderResponse:
    order = await use_case.cancel(caller=caller, order_id=order_id)
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/check-in')
@Logger.io
async def check_in(
    order_id: str,
    caller: Caller = Depends(require_staff),
    use_case: CheckInUseCase = Depends(CheckInUseCase.depends),
) -> OrderResponse:
    order = await use_case.check_in(order_id=order_id)
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/refund-request', status_code=status.HTTP_202_ACCEPTED)
@Logger.io
async def request_refund(
    order_id: str,
    request: Optional[RefundRequest] = None,
    caller: Caller = Depends(require_signed_in),
    use_case: RequestRefundUseCase = Depends(RequestRefundUseCase.depends),
) -> OrderResponse:
    order = await use_case.request_refund(
        caller=caller, order_id=order_id, reason=request.reason if request else None
    )
    return OrderResponse.from_entity(order)


@router.post('/{order_id}/refund-resolve')
@Logger.io
async def resolve_refund(
    order_id: str,
    request: RefundResolveRequest,
    caller: Caller = Depends(require_admin),
    use_case: ResolveRefundUseCase = Depends(ResolveRefundUseCase.depends),
) -> OrderResponse:
    order = await use_case.resolve(
        order_id=order_id, approve=request.approve, reason=request.reason
    )
    return OrderResponse.from_entity(order)
