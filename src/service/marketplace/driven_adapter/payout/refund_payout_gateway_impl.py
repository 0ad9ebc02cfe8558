"""Mock payout gateway: records refunds instead of calling a payment provider."""

from datetime import datetime, timezone
from typing import List

from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import new_id
from src.service.marketplace.app.interface.i_refund_payout_gateway import IRefundPayoutGateway
from src.service.marketplace.domain.value_object.money import Money


class MockRefundPayoutGateway(IRefundPayoutGateway):
    def __init__(self) -> None:
        self.payouts: List[dict] = []  # inspected by tests

    @Logger.io
    async def schedule_payout(self, *, order_id: str, purchase_id: str, amount: Money) -> str:
        reference = f'payout_{new_id()}'
        self.payouts.append(
            {
                'reference': reference,
                'order_id': order_id,
                'purchase_id': purchase_id,
                'amount': amount,
                'scheduled_at': datetime.now(timezone.utc),
            }
        )
        Logger.base.info(f'💸 [PAYOUT] Scheduled {amount} for purchase {purchase_id} ({reference})')
        return reference
