from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus


class IOrderRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def save(self, *, order: Order) -> Order:
        pass

    @abstractmethod
    async def list_by_event(self, *, event_id: str) -> List[Order]:
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: str) -> List[Order]:
        """Purchase history of one user, newest first"""
        pass

    @abstractmethod
    async def list_by_statuses(self, *, statuses: Iterable[OrderStatus]) -> List[Order]:
        """Orders of every event in any of `statuses`, oldest first"""
        pass

    @abstractmethod
    async def list_expired_reservations(self, *, now: datetime) -> List[Order]:
        """Reserved orders whose hold ran out at or before `now`"""
        pass
