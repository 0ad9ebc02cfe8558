"""Shared step for every transition that gives an order's tickets back"""

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.inventory_ledger_domain import InventoryLedger


@Logger.io
async def release_order_inventory(*, uow: AbstractUnitOfWork, order: Order, reason: str) -> int:
    """
    Must run inside an open unit of work while the order's inventory lock is held.
    Returns the number of tickets actually restored.
    """
    event = await uow.event_repo.get_by_id(event_id=order.event_id, for_update=True)
    if event is None:
        raise NotFoundError(f'Event {order.event_id} not found')

    restored = InventoryLedger.release(event=event, allocation=order.allocation)
    await uow.event_repo.save(event=event)

    metrics.record_release(event_id=event.id, reason=reason, quantity=restored)
    metrics.update_availability(event_id=event.id, available=event.available_tickets)
    return restored
