from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.user_role import UserRole


class GetOrderUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_order(self, *, caller: Caller, order_id: str) -> Order:
        async with self.uow:
            order = await self.uow.order_repo.get_by_id(order_id=order_id)
        if order is None:
            raise NotFoundError(f'Order {order_id} not found')
        if not (caller.is_admin or caller.role == UserRole.STAFF or caller.owns(order.user_id)):
            raise ForbiddenError('Not allowed to view this order')
        return order

    @Logger.io
    async def my_orders(self, *, caller: Caller) -> List[Order]:
        if caller.is_anonymous:
            return []
        async with self.uow:
            return await self.uow.order_repo.list_by_user(user_id=caller.user_id or '')
