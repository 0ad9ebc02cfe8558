from datetime import timedelta
from decimal import Decimal

import pytest

from src.service.marketplace.domain.entity.buyer_entity import Gender, PurchaseChannel
from src.service.marketplace.domain.sales_report_domain import SalesReport
from src.service.marketplace.domain.value_object.money import Money
from test.service.marketplace.fixtures import (
    NOW,
    make_buyer,
    make_confirmed_order,
    make_event,
    make_festival_with_pista,
    make_reserved_order,
)


@pytest.fixture
def festival():
    return make_festival_with_pista()


@pytest.fixture
def orders(festival):
    pista_id = festival.ticket_types[0].id
    paid = [
        make_confirmed_order(
            festival, quantity=2, ticket_type_id=pista_id, buyer=make_buyer(age=22)
        ),
        make_confirmed_order(
            festival,
            quantity=1,
            ticket_type_id=pista_id,
            buyer=make_buyer(
                name='Bruno Lima',
                age=40,
                gender=Gender.MALE,
                city='Olinda',
                channel=PurchaseChannel.DESKTOP,
            ),
        ),
    ]
    pending = make_reserved_order(
        festival, quantity=4, ticket_type_id=pista_id, buyer=make_buyer(name='Carla Dias')
    )
    return [*paid, pending]


@pytest.mark.unit
class TestSalesReport:
    def test_buyers_only_include_paid_orders(self, orders):
        records = SalesReport.buyers(orders)

        assert [r.buyer.name for r in records] == ['Ana Souza', 'Bruno Lima']

    def test_money_split(self, festival, orders):
        report = SalesReport.build(event=festival, orders=orders)

        assert str(report.gross_revenue) == '450.00'
        assert str(report.service_fees) == '45.00'
        assert report.commission_rate == Decimal('5')
        assert str(report.platform_commission) == '22.50'
        assert str(report.organizer_net) == '427.50'

    def test_demographics(self, festival, orders):
        report = SalesReport.build(event=festival, orders=orders)

        assert report.purchase_channels == {'mobile': 1, 'desktop': 1}
        assert report.genders == {'female': 1, 'male': 1}
        assert report.age_groups == {'18-25': 1, '26-35': 0, '36-45': 1, '46+': 0}
        assert report.top_cities == [('Recife', 1), ('Olinda', 1)]

    def test_check_in_stats(self, festival, orders):
        event_day = NOW + timedelta(days=30)
        orders[0] = orders[0].check_in(event_date=festival.event_date, now=event_day)

        stats = SalesReport.check_in_stats(orders)

        assert stats.tickets_sold == 3
        assert stats.tickets_checked_in == 2
        assert stats.check_in_rate == Decimal('66.7')

    def test_per_type_figures_follow_counters(self, festival, orders):
        report = SalesReport.build(event=festival, orders=orders)

        (pista,) = report.ticket_types
        # 50 sold before the orders plus 7 reserved through the ledger
        assert pista.sold_tickets == 57
        assert report.available_tickets == 193


@pytest.fixture
def marathon():
    event = make_event(title='Maratona', price='100', total_tickets=500, category='sports')
    event.commission_rate = Decimal('8')
    return event


@pytest.fixture
def platform_orders(festival, orders, marathon):
    refunded = (
        make_confirmed_order(marathon, quantity=1)
        .request_refund(event_date=marathon.event_date, now=NOW, window_days=7)
        .resolve_refund(approve=True, now=NOW, processing_fee_rate=Decimal('0.10'))
    )
    return [*orders, make_confirmed_order(marathon, quantity=2), refunded]


@pytest.mark.unit
class TestPlatformReport:
    def test_totals_across_events(self, festival, marathon, platform_orders):
        quiet = make_event(title='Sarau')

        report = SalesReport.platform(
            events=[festival, marathon, quiet], orders=platform_orders
        )

        assert report.total_events == 3
        assert report.events_with_sales == 2
        assert report.tickets_sold == 5
        assert str(report.gross_revenue) == '650.00'
        assert str(report.service_fees) == '65.00'
        assert str(report.refunded_amount) == '99.00'
        assert str(report.average_ticket_price) == '130.00'

    def test_commission_uses_each_event_rate(self, festival, marathon, platform_orders):
        report = SalesReport.platform(events=[festival, marathon], orders=platform_orders)

        # 5% of 450.00 plus 8% of 200.00
        assert str(report.platform_commission) == '38.50'
        assert str(report.organizer_net) == '611.50'
        assert report.effective_commission_rate == Decimal('5.92')
        assert [row.title for row in report.top_events] == ['Festival', 'Maratona']
        assert [str(row.platform_commission) for row in report.top_events] == ['22.50', '16.00']
        assert {k: str(v) for k, v in report.revenue_by_category.items()} == {
            'music': '450.00',
            'sports': '200.00',
        }

    def test_empty_platform(self):
        report = SalesReport.platform(events=[], orders=[])

        assert report.tickets_sold == 0
        assert report.average_ticket_price == Money.zero()
        assert report.effective_commission_rate == Decimal(0)
        assert report.top_events == []
