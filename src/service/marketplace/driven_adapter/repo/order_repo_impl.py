from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import as_utc
from src.service.marketplace.app.interface.i_order_repo import IOrderRepo
from src.service.marketplace.domain.entity.buyer_entity import Buyer, Gender, PurchaseChannel
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus, RefundStatus
from src.service.marketplace.domain.value_object.money import Money
from src.service.marketplace.driven_adapter.model.order_model import OrderModel


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    return as_utc(value) if value is not None else None


class OrderRepoImpl(IOrderRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _buyer_to_dict(buyer: Optional[Buyer]) -> Optional[dict]:
        if buyer is None:
            return None
        return {
            'name': buyer.name,
            'email': buyer.email,
            'phone': buyer.phone,
            'document': buyer.document,
            'age': buyer.age,
            'gender': buyer.gender.value if buyer.gender else None,
            'city': buyer.city,
            'state': buyer.state,
            'purchase_channel': buyer.purchase_channel.value,
        }

    @staticmethod
    def _dict_to_buyer(data: Optional[dict]) -> Optional[Buyer]:
        if not data:
            return None
        return Buyer(
            name=data['name'],
            email=data['email'],
            phone=data.get('phone', ''),
            document=data.get('document', ''),
            age=data.get('age'),
            gender=Gender(data['gender']) if data.get('gender') else None,
            city=data.get('city', ''),
            state=data.get('state', ''),
            purchase_channel=PurchaseChannel(data.get('purchase_channel', PurchaseChannel.DESKTOP)),
        )

    @classmethod
    def _model_to_entity(cls, model: OrderModel) -> Order:
        return Order(
            id=model.id,
            purchase_id=model.purchase_id,
            event_id=model.event_id,
            user_id=model.user_id,
            quantity=model.quantity,
            unit_price=Money(model.unit_price),
            service_fee_rate=model.service_fee_rate,
            subtotal=Money(model.subtotal),
            service_fee=Money(model.service_fee),
            total_paid=Money(model.total_paid),
            ticket_type_id=model.ticket_type_id,
            ticket_type_name=model.ticket_type_name,
            batch_id=model.batch_id,
            half_price=model.half_price,
            buyer=cls._dict_to_buyer(model.buyer),
            status=OrderStatus(model.status),
            refund_status=RefundStatus(model.refund_status),
            refund_request_date=_utc(model.refund_request_date),
            refund_reason=model.refund_reason,
            refund_amount=Money(model.refund_amount) if model.refund_amount is not None else None,
            refund_rejection_reason=model.refund_rejection_reason,
            expires_at=_utc(model.expires_at),
            created_at=_utc(model.created_at),
            confirmed_at=_utc(model.confirmed_at),
            used_at=_utc(model.used_at),
            updated_at=_utc(model.updated_at),
        )

    @classmethod
    def _apply(cls, model: OrderModel, order: Order) -> None:
        model.purchase_id = order.purchase_id
        model.event_id = order.event_id
        model.user_id = order.user_id
        model.ticket_type_id = order.ticket_type_id
        model.ticket_type_name = order.ticket_type_name
        model.batch_id = order.batch_id
        model.quantity = order.quantity
        model.half_price = order.half_price
        model.unit_price = order.unit_price.amount
        model.service_fee_rate = order.service_fee_rate
        model.subtotal = order.subtotal.amount
        model.service_fee = order.service_fee.amount
        model.total_paid = order.total_paid.amount
        model.buyer = cls._buyer_to_dict(order.buyer)
        model.status = order.status.value
        model.refund_status = order.refund_status.value
        model.refund_request_date = order.refund_request_date
        model.refund_reason = order.refund_reason
        model.refund_amount = order.refund_amount.amount if order.refund_amount else None
        model.refund_rejection_reason = order.refund_rejection_reason
        model.expires_at = order.expires_at
        model.created_at = order.created_at
        model.confirmed_at = order.confirmed_at
        model.used_at = order.used_at
        model.updated_at = order.updated_at

    @Logger.io
    async def get_by_id(self, *, order_id: str) -> Optional[Order]:
        model = await self.session.get(OrderModel, order_id)
        return self._model_to_entity(model) if model else None

    @Logger.io
    async def save(self, *, order: Order) -> Order:
        model = await self.session.get(OrderModel, order.id)
        if model is None:
            model = OrderModel(id=order.id)
            self.session.add(model)
        self._apply(model, order)
        await self.session.flush()
        return order

    @Logger.io
    async def list_by_event(self, *, event_id: str) -> List[Order]:
        result = await self.session.execute(
            select(OrderModel)
            .where(OrderModel.event_id == event_id)
            .order_by(OrderModel.created_at)
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_by_user(self, *, user_id: str) -> List[Order]:
        result = await self.session.execute(
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc())
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_by_statuses(self, *, statuses: Iterable[OrderStatus]) -> List[Order]:
        result = await self.session.execute(
            select(OrderModel)
            .where(OrderModel.status.in_([status.value for status in statuses]))
            .order_by(OrderModel.created_at)
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_expired_reservations(self, *, now: datetime) -> List[Order]:
        result = await self.session.execute(
            select(OrderModel)
            .where(
                OrderModel.status == OrderStatus.RESERVED.value,
                OrderModel.expires_at <= now,
            )
            .order_by(OrderModel.expires_at)
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]
