from abc import ABC, abstractmethod

from src.service.marketplace.domain.value_object.money import Money


class IRefundPayoutGateway(ABC):
    @abstractmethod
    async def schedule_payout(self, *, order_id: str, purchase_id: str, amount: Money) -> str:
        """
        Hand an approved refund to the payment provider

        Returns:
            Provider reference for the payout
        """
        pass
