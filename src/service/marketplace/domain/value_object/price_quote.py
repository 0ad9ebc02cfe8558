from decimal import Decimal

import attrs

from src.service.marketplace.domain.value_object.money import Money


@attrs.frozen
class OrderQuote:
    unit_price: Money
    quantity: int
    service_fee_rate: Decimal
    subtotal: Money
    service_fee: Money
    total: Money


@attrs.frozen
class CommissionSplit:
    gross: Money
    rate: Decimal
    commission: Money
    organizer_net: Money
