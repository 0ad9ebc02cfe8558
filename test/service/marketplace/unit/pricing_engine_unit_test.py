from decimal import Decimal

import pytest

from src.platform.exception.exceptions import NotEligibleError, ValidationError
from src.service.marketplace.domain.pricing_domain import PricingEngine
from src.service.marketplace.domain.value_object.money import Money
from test.service.marketplace.fixtures import make_event, make_festival_with_pista


@pytest.mark.unit
class TestUnitPrice:
    def test_half_price_on_eligible_type(self):
        event = make_festival_with_pista(allow_half_price=True)

        price = PricingEngine.unit_price(
            event=event, ticket_type=event.ticket_types[0], half_price_requested=True
        )

        assert str(price) == '75.00'

    def test_half_price_not_allowed_on_type(self):
        event = make_festival_with_pista(allow_half_price=False)

        with pytest.raises(NotEligibleError):
            PricingEngine.unit_price(
                event=event, ticket_type=event.ticket_types[0], half_price_requested=True
            )

    def test_flat_event_never_allows_half_price(self):
        with pytest.raises(NotEligibleError):
            PricingEngine.unit_price(event=make_event(), half_price_requested=True)

    def test_flat_event_uses_event_price(self):
        assert PricingEngine.unit_price(event=make_event(price='80')) == Money.of('80')


@pytest.mark.unit
class TestOrderTotal:
    def test_festival_pista_total(self):
        quote = PricingEngine.order_total(
            unit_price=Money.of('150'), quantity=3, service_fee_rate=Decimal('0.10')
        )

        assert str(quote.subtotal) == '450.00'
        assert str(quote.service_fee) == '45.00'
        assert str(quote.total) == '495.00'

    def test_rounds_only_the_totals(self):
        # 3 x 33.335 = 100.005 -> fee 10.0005 -> total 110.0055
        quote = PricingEngine.order_total(
            unit_price=Money.of('33.335'), quantity=3, service_fee_rate=Decimal('0.10')
        )

        assert quote.subtotal.amount == Decimal('100.01')
        assert quote.total.amount == Decimal('110.01')
        assert quote.subtotal + quote.service_fee == quote.total

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            PricingEngine.order_total(
                unit_price=Money.of('10'), quantity=0, service_fee_rate=Decimal('0.10')
            )


@pytest.mark.unit
class TestPlatformCommission:
    @pytest.mark.parametrize(
        'gross, rate',
        [('495.00', '5'), ('333.33', '4'), ('0.01', '6'), ('1234.56', '7.5'), ('100.00', '0')],
    )
    def test_commission_plus_net_equals_gross(self, gross: str, rate: str):
        split = PricingEngine.platform_commission(gross=Money.of(gross), rate_percent=Decimal(rate))

        assert split.commission + split.organizer_net == split.gross

    def test_commission_rounded_half_up(self):
        split = PricingEngine.platform_commission(
            gross=Money.of('333.30'), rate_percent=Decimal('5')
        )

        # 16.665 -> 16.67
        assert split.commission.amount == Decimal('16.67')
        assert split.organizer_net.amount == Decimal('316.63')

    @pytest.mark.parametrize('rate', ['-1', '100.01', '150'])
    def test_rate_outside_range_is_rejected(self, rate: str):
        with pytest.raises(ValidationError):
            PricingEngine.platform_commission(gross=Money.of('100'), rate_percent=Decimal(rate))
