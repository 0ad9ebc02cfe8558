from datetime import datetime
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_inventory_lock import IInventoryLock
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.ticket_batch_entity import TicketBatch
from src.service.marketplace.domain.value_object.allocation import inventory_lock_key
from src.service.marketplace.domain.value_object.money import Money


class AddBatchUseCase:
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
    async def add_batch(
        self,
        *,
        caller: Caller,
        event_id: str,
        ticket_type_id: str,
        name: str,
        price: Decimal,
        quantity: int,
        start_at: datetime,
        end_at: datetime,
        available_quantity: Optional[int] = None,
    ) -> TicketBatch:
        async with self.inventory_lock.hold(
            key=inventory_lock_key(event_id=event_id)
        ):
            async with self.uow:
                event = await self.uow.event_repo.get_by_id(event_id=event_id, for_update=True)
                if event is None:
                    raise NotFoundError(f'Event {event_id} not found')
                if not event.is_managed_by(caller):
                    raise ForbiddenError('Only the event organizer or an admin can add batches')

                batch = event.add_batch(
                    ticket_type_id=ticket_type_id,
                    name=name,
                    price=Money(price),
                    quantity=quantity,
                    start_at=start_at,
                    end_at=end_at,
                    available_quantity=available_quantity,
                )
                await self.uow.event_repo.save(event=event)
                await self.uow.commit()

        return batch
