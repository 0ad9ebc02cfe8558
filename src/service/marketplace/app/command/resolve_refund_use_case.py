"""
Resolve Refund Use Case

Admin decision on a pending refund request. Approval:
1. Releases the order's tickets through the ledger under the inventory lock
2. Stores refund_amount = total paid minus the processing fee
3. Deducts the sale from the organizer's revenue
4. Hands the amount to the payout gateway once the transaction is committed
"""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.platform.types.clock import utc_now
from src.service.marketplace.app.command.order_inventory_release import release_order_inventory
from src.service.marketplace.app.interface.i_inventory_lock import IInventoryLock
from src.service.marketplace.app.interface.i_refund_payout_gateway import IRefundPayoutGateway
from src.service.marketplace.domain.entity.order_entity import Order


class ResolveRefundUseCase:
    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        inventory_lock: IInventoryLock,
        refund_payout_gateway: IRefundPayoutGateway,
    ) -> None:
        self.uow = uow
        self.inventory_lock = inventory_lock
        self.refund_payout_gateway = refund_payout_gateway
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        inventory_lock: IInventoryLock = Depends(Provide[Container.inventory_lock]),
        refund_payout_gateway: IRefundPayoutGateway = Depends(
            Provide[Container.refund_payout_gateway]
        ),
    ) -> Self:
        return cls(
            uow=uow, inventory_lock=inventory_lock, refund_payout_gateway=refund_payout_gateway
        )

    @Logger.io
    async def resolve(
        self, *, order_id: str, approve: bool, reason: Optional[str] = None
    ) -> Order:
        with self.tracer.start_as_current_span(
            'use_case.resolve_refund',
            attributes={'order.id': order_id, 'refund.approve': approve},
        ):
            async with self.uow:
                order = await self.uow.order_repo.get_by_id(order_id=order_id)
            if order is None:
                raise NotFoundError(f'Order {order_id} not found')

            async with self.inventory_lock.hold(key=order.allocation.lock_key):
                async with self.uow:
                    current = await self.uow.order_repo.get_by_id(order_id=order_id)
                    if current is None:
                        raise NotFoundError(f'Order {order_id} not found')
                    resolved = current.resolve_refund(
                        approve=approve,
                        now=utc_now(),
                        processing_fee_rate=settings.REFUND_PROCESSING_FEE_RATE,
                        rejection_reason=reason,
                    )
                    if approve:
                        await release_order_inventory(
                            uow=self.uow, order=resolved, reason='refunded'
                        )
                        await self._deduct_organizer_revenue(order=resolved)
                    await self.uow.order_repo.save(order=resolved)
                    await self.uow.commit()

            metrics.record_transition(status=resolved.status.value)
            if approve and resolved.refund_amount is not None:
                reference = await self.refund_payout_gateway.schedule_payout(
                    order_id=resolved.id,
                    purchase_id=resolved.purchase_id,
                    amount=resolved.refund_amount,
                )
                metrics.record_refund(amount=float(resolved.refund_amount.amount))
                Logger.base.info(
                    f'💸 [REFUND] Order {order_id} refunded {resolved.refund_amount} (payout={reference})'
                )

        return resolved

    async def _deduct_organizer_revenue(self, *, order: Order) -> None:
        event = await self.uow.event_repo.get_by_id(event_id=order.event_id)
        if event is None or event.organizer_id is None:
            return
        organizer = await self.uow.organizer_repo.get_organizer_by_user_id(
            user_id=event.organizer_id
        )
        if organizer is not None:
            await self.uow.organizer_repo.save_organizer(
                organizer=organizer.record_refund(order.subtotal)
            )
