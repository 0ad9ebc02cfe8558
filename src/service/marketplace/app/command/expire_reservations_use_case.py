"""
Expire Reservations Use Case

Background sweep run from the application lifespan: every reservation whose
TTL has elapsed moves to `expired` and its tickets return to the counter they
were taken from. Each order is handled in its own lock + transaction so one
busy counter does not hold back the rest.
"""

from datetime import datetime
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import BusyError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.platform.types.clock import utc_now
from src.service.marketplace.app.command.order_inventory_release import release_order_inventory
from src.service.marketplace.app.interface.i_inventory_lock import IInventoryLock
from src.service.marketplace.domain.entity.order_entity import Order


class ExpireReservationsUseCase:
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

    async def expire_overdue(self, *, now: Optional[datetime] = None) -> List[Order]:
        now = now or utc_now()
        async with self.uow:
            overdue = await self.uow.order_repo.list_expired_reservations(now=now)

        expired: List[Order] = []
        for order in overdue:
            try:
                result = await self._expire_one(
                    order_id=order.id, lock_key=order.allocation.lock_key, now=now
                )
            except BusyError:
                # Picked up again on the next sweep
                Logger.base.warning(f'⏳ [SWEEPER] Counter busy, skipping order {order.id} this round')
                continue
            if result is not None:
                expired.append(result)

        if expired:
            Logger.base.info(f'🧹 [SWEEPER] Expired {len(expired)} reservation(s)')
        return expired

    async def _expire_one(self, *, order_id: str, lock_key: str, now: datetime) -> Optional[Order]:
        async with self.inventory_lock.hold(key=lock_key):
            async with self.uow:
                order = await self.uow.order_repo.get_by_id(order_id=order_id)
                # Confirmed or cancelled while we waited for the lock
                if order is None or not order.is_reservation_expired(now):
                    return None
                expired = order.expire(now=now)
                await release_order_inventory(uow=self.uow, order=expired, reason='expired')
                await self.uow.order_repo.save(order=expired)
                await self.uow.commit()

        metrics.record_transition(status=expired.status.value)
        return expired
