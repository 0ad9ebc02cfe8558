from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.platform.types.clock import utc_now
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.order_entity import Order


class ConfirmPaymentUseCase:
    """
    Mark a reservation as paid

    Payment itself happens at the external gateway; this records the outcome.
    Inventory was already taken at reservation time.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def confirm(self, *, caller: Caller, order_id: str) -> Order:
        async with self.uow:
            order = await self.uow.order_repo.get_by_id(order_id=order_id)
            if order is None:
                raise NotFoundError(f'Order {order_id} not found')
            if not (caller.is_admin or caller.owns(order.user_id)):
                raise ForbiddenError('Only the buyer can confirm this order')

            confirmed = order.confirm_payment(now=utc_now())
            await self.uow.order_repo.save(order=confirmed)

            event = await self.uow.event_repo.get_by_id(event_id=order.event_id)
            if event is not None and event.organizer_id is not None:
                organizer = await self.uow.organizer_repo.get_organizer_by_user_id(
                    user_id=event.organizer_id
                )
                if organizer is not None:
                    await self.uow.organizer_repo.save_organizer(
                        organizer=organizer.record_sale(confirmed.subtotal)
                    )

            await self.uow.commit()

        metrics.record_transition(status=confirmed.status.value)
        Logger.base.info(f'💳 [ORDER] Payment confirmed for order {order_id} ({confirmed.total_paid})')
        return confirmed
