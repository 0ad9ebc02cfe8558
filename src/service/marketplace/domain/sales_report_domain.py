"""
Sales Report Domain
Read-only projections over an event and its orders: per-type sales, money
split and attendee demographics. The platform report folds the same money
split across every event, each at the commission rate it captured.
"""

from collections import Counter, defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

import attrs

from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.buyer_entity import Buyer
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus
from src.service.marketplace.domain.pricing_domain import PricingEngine
from src.service.marketplace.domain.value_object.money import Money


AGE_GROUPS = ('18-25', '26-35', '36-45', '46+')
TOP_CITIES_LIMIT = 5
TOP_EVENTS_LIMIT = 5


def _percentage(part: int, whole: int) -> Decimal:
    if not whole:
        return Decimal(0)
    return (Decimal(part) * 100 / Decimal(whole)).quantize(Decimal('0.1'))


@attrs.frozen
class TicketTypeSales:
    ticket_type_id: str
    name: str
    price: Money
    total_tickets: int
    sold_tickets: int
    available_tickets: int
    revenue: Money
    occupancy: Decimal


@attrs.frozen
class BuyerRecord:
    order_id: str
    purchase_id: str
    quantity: int
    ticket_type_name: Optional[str]
    status: OrderStatus
    buyer: Buyer


@attrs.frozen
class CheckInStats:
    tickets_sold: int
    tickets_checked_in: int
    check_in_rate: Decimal


@attrs.frozen
class EventReport:
    event_id: str
    title: str
    total_tickets: int
    sold_tickets: int
    available_tickets: int
    occupancy: Decimal
    gross_revenue: Money
    service_fees: Money
    commission_rate: Decimal
    platform_commission: Money
    organizer_net: Money
    refunded_amount: Money
    ticket_types: List[TicketTypeSales]
    purchase_channels: Dict[str, int]
    genders: Dict[str, int]
    age_groups: Dict[str, int]
    top_cities: List[Tuple[str, int]]
    check_in: CheckInStats


@attrs.frozen
class EventRevenue:
    event_id: str
    title: str
    organizer_id: Optional[str]
    category: str
    tickets_sold: int
    gross_revenue: Money
    commission_rate: Decimal
    platform_commission: Money
    organizer_net: Money


@attrs.frozen
class PlatformReport:
    total_events: int
    events_with_sales: int
    tickets_sold: int
    gross_revenue: Money
    service_fees: Money
    platform_commission: Money
    organizer_net: Money
    refunded_amount: Money
    average_ticket_price: Money
    effective_commission_rate: Decimal
    revenue_by_category: Dict[str, Money]
    top_events: List[EventRevenue]


class SalesReport:
    @staticmethod
    def buyers(orders: Iterable[Order]) -> List[BuyerRecord]:
        """Attendees of paid orders, oldest purchase first"""
        paid = sorted(
            (order for order in orders if order.is_paid and order.buyer is not None),
            key=lambda order: order.created_at or order.updated_at,
        )
        return [
            BuyerRecord(
                order_id=order.id,
                purchase_id=order.purchase_id,
                quantity=order.quantity,
                ticket_type_name=order.ticket_type_name,
                status=order.status,
                buyer=order.buyer,  # type: ignore[arg-type]
            )
            for order in paid
        ]

    @staticmethod
    def check_in_stats(orders: Iterable[Order]) -> CheckInStats:
        paid = [order for order in orders if order.is_paid]
        sold = sum(order.quantity for order in paid)
        used = sum(order.quantity for order in paid if order.status == OrderStatus.USED)
        return CheckInStats(
            tickets_sold=sold, tickets_checked_in=used, check_in_rate=_percentage(used, sold)
        )

    @classmethod
    def build(cls, *, event: Event, orders: Iterable[Order]) -> EventReport:
        orders = [order for order in orders if order.event_id == event.id]
        paid = [order for order in orders if order.is_paid]

        gross = sum((order.subtotal for order in paid), Money.zero())
        service_fees = sum((order.service_fee for order in paid), Money.zero())
        refunded = sum(
            (
                order.refund_amount
                for order in orders
                if order.status == OrderStatus.REFUND_APPROVED and order.refund_amount is not None
            ),
            Money.zero(),
        )
        split = PricingEngine.platform_commission(gross=gross, rate_percent=event.commission_rate)

        buyers = [record.buyer for record in cls.buyers(paid)]
        cities = Counter(buyer.city for buyer in buyers if buyer.city)
        age_groups: Dict[str, int] = {group: 0 for group in AGE_GROUPS}
        for buyer in buyers:
            if buyer.age_group:
                age_groups[buyer.age_group] += 1

        return EventReport(
            event_id=event.id,
            title=event.title,
            total_tickets=event.total_tickets,
            sold_tickets=event.sold_tickets,
            available_tickets=event.available_tickets,
            occupancy=_percentage(event.sold_tickets, event.total_tickets),
            gross_revenue=gross,
            service_fees=service_fees,
            commission_rate=event.commission_rate,
            platform_commission=split.commission,
            organizer_net=split.organizer_net,
            refunded_amount=refunded,
            ticket_types=[
                TicketTypeSales(
                    ticket_type_id=ticket_type.id,
                    name=ticket_type.name,
                    price=ticket_type.price,
                    total_tickets=ticket_type.total_tickets,
                    sold_tickets=ticket_type.sold,
                    available_tickets=ticket_type.available_tickets,
                    revenue=ticket_type.catalog_revenue,
                    occupancy=ticket_type.occupancy,
                )
                for ticket_type in event.ticket_types
            ],
            purchase_channels=dict(Counter(str(buyer.purchase_channel) for buyer in buyers)),
            genders=dict(Counter(str(buyer.gender) for buyer in buyers if buyer.gender)),
            age_groups=age_groups,
            top_cities=cities.most_common(TOP_CITIES_LIMIT),
            check_in=cls.check_in_stats(paid),
        )

    @staticmethod
    def platform(*, events: Iterable[Event], orders: Iterable[Order]) -> PlatformReport:
        """
        Totals over the price snapshots of every paid order on the platform.

        Commission is split per event at the rate the event captured when it
        was created, so later changes to the commission settings never rewrite
        past revenue. Orders of unknown events are ignored.
        """
        events_by_id = {event.id: event for event in events}
        paid_by_event: Dict[str, List[Order]] = defaultdict(list)
        service_fees = Money.zero()
        refunded = Money.zero()
        for order in orders:
            if order.event_id not in events_by_id:
                continue
            if order.is_paid:
                paid_by_event[order.event_id].append(order)
                service_fees += order.service_fee
            elif order.status == OrderStatus.REFUND_APPROVED and order.refund_amount is not None:
                refunded += order.refund_amount

        rows: List[EventRevenue] = []
        for event_id, paid in paid_by_event.items():
            event = events_by_id[event_id]
            gross = sum((order.subtotal for order in paid), Money.zero())
            split = PricingEngine.platform_commission(
                gross=gross, rate_percent=event.commission_rate
            )
            rows.append(
                EventRevenue(
                    event_id=event.id,
                    title=event.title,
                    organizer_id=event.organizer_id,
                    category=event.category,
                    tickets_sold=sum(order.quantity for order in paid),
                    gross_revenue=gross,
                    commission_rate=event.commission_rate,
                    platform_commission=split.commission,
                    organizer_net=split.organizer_net,
                )
            )

        gross_total = sum((row.gross_revenue for row in rows), Money.zero())
        commission_total = sum((row.platform_commission for row in rows), Money.zero())
        tickets = sum(row.tickets_sold for row in rows)

        by_category: Dict[str, Money] = defaultdict(Money.zero)
        for row in rows:
            by_category[row.category or 'uncategorized'] += row.gross_revenue

        effective_rate = Decimal(0)
        if gross_total.amount:
            effective_rate = (commission_total.amount * 100 / gross_total.amount).quantize(
                Decimal('0.01')
            )

        return PlatformReport(
            total_events=len(events_by_id),
            events_with_sales=len(rows),
            tickets_sold=tickets,
            gross_revenue=gross_total,
            service_fees=service_fees,
            platform_commission=commission_total,
            organizer_net=gross_total - commission_total,
            refunded_amount=refunded,
            average_ticket_price=(
                Money(gross_total.amount / tickets).rounded() if tickets else Money.zero()
            ),
            effective_commission_rate=effective_rate,
            revenue_by_category=dict(by_category),
            top_events=sorted(rows, key=lambda row: row.gross_revenue, reverse=True)[
                :TOP_EVENTS_LIMIT
            ],
        )
