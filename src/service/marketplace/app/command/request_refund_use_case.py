from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.platform.types.clock import utc_now
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.order_entity import Order


class RequestRefundUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def request_refund(
        self, *, caller: Caller, order_id: str, reason: Optional[str] = None
    ) -> Order:
        """
        Raises:
            RefundWindowClosedError: fewer than REFUND_WINDOW_DAYS days before the event
            InvalidStateTransitionError: order not confirmed, or a refund was already requested
        """
        async with self.uow:
            order = await self.uow.order_repo.get_by_id(order_id=order_id)
            if order is None:
                raise NotFoundError(f'Order {order_id} not found')
            if not caller.owns(order.user_id):
                raise ForbiddenError('Only the buyer can request a refund')
            event = await self.uow.event_repo.get_by_id(event_id=order.event_id)
            if event is None:
                raise NotFoundError(f'Event {order.event_id} not found')

            requested = order.request_refund(
                event_date=event.event_date,
                now=utc_now(),
                window_days=settings.REFUND_WINDOW_DAYS,
                reason=reason,
            )
            await self.uow.order_repo.save(order=requested)
            await self.uow.commit()

        metrics.record_transition(status=requested.status.value)
        return requested
