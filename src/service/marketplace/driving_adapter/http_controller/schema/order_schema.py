from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.service.marketplace.domain.entity.buyer_entity import Buyer, Gender, PurchaseChannel
from src.service.marketplace.domain.entity.order_entity import Order


class BuyerSchema(BaseModel):
    name: str
    email: str
    phone: str = ''
    document: str = ''
    age: Optional[int] = None
    gender: Optional[Gender] = None
    city: str = ''
    state: str = ''
    purchase_channel: PurchaseChannel = PurchaseChannel.DESKTOP

    def to_entity(self) -> Buyer:
        return Buyer.create(**self.model_dump())

    @classmethod
    def from_entity(cls, buyer: Buyer) -> 'BuyerSchema':
        return cls(
            name=buyer.name,
            email=buyer.email,
            phone=buyer.phone,
            document=buyer.document,
            age=buyer.age,
            gender=buyer.gender,
            city=buyer.city,
            state=buyer.state,
            purchase_channel=buyer.purchase_channel,
        )


class ReserveRequest(BaseModel):
    quantity: int = Field(default=1)
    half_price: bool = False
    buyer: Optional[BuyerSchema] = None

    class Config:
        json_schema_extra = {
            'example': {
                'quantity': 3,
                'half_price': False,
                'buyer': {
                    'name': 'Ana Souza',
                    'email': 'ana@example.com',
                    'age': 28,
                    'gender': 'female',
                    'city': 'Recife',
                    'purchase_channel': 'mobile',
                },
            }
        }


class RefundRequest(BaseModel):
    reason: Optional[str] = None


class RefundResolveRequest(BaseModel):
    approve: bool
    reason: Optional[str] = None


class OrderResponse(BaseModel):
    id: str
    purchase_id: str
    event_id: str
    user_id: Optional[str]
    ticket_type_id: Optional[str]
    ticket_type_name: Optional[str]
    batch_id: Optional[str]
    quantity: int
    half_price: bool
    unit_price: str
    service_fee_rate: str
    subtotal: str
    service_fee: str
    total_paid: str
    status: str
    refund_status: str
    refund_request_date: Optional[datetime]
    refund_reason: Optional[str]
    refund_amount: Optional[str]
    refund_rejection_reason: Optional[str]
    expires_at: Optional[datetime]
    created_at: Optional[datetime]
    confirmed_at: Optional[datetime]
    used_at: Optional[datetime]
    buyer: Optional[BuyerSchema]

    @classmethod
    def from_entity(cls, order: Order) -> 'OrderResponse':
        return cls(
            id=order.id,
            purchase_id=order.purchase_id,
            event_id=order.event_id,
            user_id=order.user_id,
            ticket_type_id=order.ticket_type_id,
            ticket_type_name=order.ticket_type_name,
            batch_id=order.batch_id,
            quantity=order.quantity,
            half_price=order.half_price,
            unit_price=str(order.unit_price),
            service_fee_rate=str(order.service_fee_rate),
            subtotal=str(order.subtotal),
            service_fee=str(order.service_fee),
            total_paid=str(order.total_paid),
            status=order.status.value,
            refund_status=order.refund_status.value,
            refund_request_date=order.refund_request_date,
            refund_reason=order.refund_reason,
            refund_amount=str(order.refund_amount) if order.refund_amount is not None else None,
            refund_rejection_reason=order.refund_rejection_reason,
            expires_at=order.expires_at,
            created_at=order.created_at,
            confirmed_at=order.confirmed_at,
            used_at=order.used_at,
            buyer=BuyerSchema.from_entity(order.buyer) if order.buyer else None,
        )
