from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.platform.types.clock import utc_now
from src.service.marketplace.app.command.order_inventory_release import release_order_inventory
from src.service.marketplace.app.interface.i_inventory_lock import IInventoryLock
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.order_entity import Order


class CancelReservationUseCase:
    """Buyer abandons checkout; the held tickets go back on sale"""

    def __init__(self, *, uow: AbstractUnitOfWork, inventory_lock: IInventoryLock) -> None:
        self.uow = uow
        self.inventory_lock = inventory_lock

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        inventory_lock: IInventoryLock = Depends(Provide[Container.inventory_lock]),
    ) -> Self:
        return cls(uow=uow, inventory_lock=inventory_lock)

    @Logger.io
    async def cancel(self, *, caller: Caller, order_id: str) -> Order:
        async with self.uow:
            order = await self.uow.order_repo.get_by_id(order_id=order_id)
        if order is None:
            raise NotFoundError(f'Order {order_id} not found')
        if not (caller.is_admin or caller.owns(order.user_id)):
            raise ForbiddenError('Only the buyer can cancel this order')

        async with self.inventory_lock.hold(key=order.allocation.lock_key):
            async with self.uow:
                # Re-read under the lock; the sweeper may have expired it meanwhile
                current = await self.uow.order_repo.get_by_id(order_id=order_id)
                if current is None:
                    raise NotFoundError(f'Order {order_id} not found')
                cancelled = current.cancel(now=utc_now())
                await release_order_inventory(uow=self.uow, order=cancelled, reason='cancelled')
                await self.uow.order_repo.save(order=cancelled)
                await self.uow.commit()

        metrics.record_transition(status=cancelled.status.value)
        return cancelled
