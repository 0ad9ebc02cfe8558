"""Builders shared by the marketplace unit tests"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.buyer_entity import Buyer, Gender, PurchaseChannel
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.domain.inventory_ledger_domain import InventoryLedger
from src.service.marketplace.domain.pricing_domain import PricingEngine
from src.service.marketplace.domain.value_object.money import Money


NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
ORGANIZER_ID = 'organizer-1'
BUYER_ID = 'buyer-1'


def make_event(
    *,
    title: str = 'Festival',
    event_date: Optional[date] = None,
    price: str = '150',
    total_tickets: int = 250,
    available_tickets: Optional[int] = None,
    status: Optional[ApprovalStatus] = ApprovalStatus.APPROVED,
    organizer_id: Optional[str] = ORGANIZER_ID,
    category: str = 'music',
) -> Event:
    event = Event.create(
        title=title,
        event_date=event_date or (NOW + timedelta(days=30)).date(),
        location='Riverside Park',
        price=Money.of(price),
        total_tickets=total_tickets,
        available_tickets=available_tickets,
        category=category,
        organizer_id=organizer_id,
    )
    event.status = status
    return event


def make_festival_with_pista(
    *, allow_half_price: bool = False, event_date: Optional[date] = None
) -> Event:
    """Event 'Festival' with ticket type 'Pista': price 150, 250 total, 200 available"""
    event = make_event(event_date=event_date)
    event.add_ticket_type(
        name='Pista',
        price=Money.of('150'),
        total_tickets=250,
        available_tickets=200,
        allow_half_price=allow_half_price,
    )
    return event


def make_buyer(
    *,
    name: str = 'Ana Souza',
    age: Optional[int] = 28,
    gender: Optional[Gender] = Gender.FEMALE,
    city: str = 'Recife',
    channel: PurchaseChannel = PurchaseChannel.MOBILE,
) -> Buyer:
    return Buyer.create(
        name=name,
        email=f'{name.split()[0].lower()}@example.com',
        age=age,
        gender=gender,
        city=city,
        purchase_channel=channel,
    )


def make_reserved_order(
    event: Event,
    *,
    quantity: int = 1,
    ticket_type_id: Optional[str] = None,
    now: datetime = NOW,
    buyer: Optional[Buyer] = None,
    user_id: str = BUYER_ID,
) -> Order:
    """Reserve through the ledger so event counters and the order agree"""
    ticket_type = event.get_ticket_type(ticket_type_id) if ticket_type_id else None
    batch = InventoryLedger.active_batch(ticket_type, now) if ticket_type else None
    unit_price = PricingEngine.unit_price(event=event, ticket_type=ticket_type, batch=batch)
    allocation = InventoryLedger.reserve(
        event=event, quantity=quantity, now=now, ticket_type_id=ticket_type_id
    )
    quote = PricingEngine.order_total(
        unit_price=unit_price, quantity=quantity, service_fee_rate=Decimal('0.10')
    )
    return Order.reserve(
        allocation=allocation,
        quote=quote,
        user_id=user_id,
        now=now,
        ttl=timedelta(minutes=15),
        ticket_type_name=ticket_type.name if ticket_type else None,
        buyer=buyer,
    )


def make_confirmed_order(event: Event, **kwargs) -> Order:
    order = make_reserved_order(event, **kwargs)
    return order.confirm_payment(now=kwargs.get('now', NOW))
