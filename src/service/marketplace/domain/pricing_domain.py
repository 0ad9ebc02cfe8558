"""
Pricing Domain
Unit price resolution, checkout totals and platform commission.

All intermediate arithmetic stays at full Decimal precision; values are
rounded half-up to the cent only where a total is produced.
"""

from decimal import Decimal
from typing import Optional

from src.platform.exception.exceptions import NotEligibleError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.commission_settings_entity import validate_rate
from src.service.marketplace.domain.entity.ticket_batch_entity import TicketBatch
from src.service.marketplace.domain.entity.ticket_type_entity import TicketType
from src.service.marketplace.domain.value_object.money import Money
from src.service.marketplace.domain.value_object.price_quote import CommissionSplit, OrderQuote


class PricingEngine:
    @staticmethod
    def base_price(
        *,
        event: Event,
        ticket_type: Optional[TicketType] = None,
        batch: Optional[TicketBatch] = None,
    ) -> Money:
        """Batch price, else ticket type price, else event price"""
        if batch is not None:
            return batch.price
        if ticket_type is not None:
            return ticket_type.price
        return event.price

    @classmethod
    @Logger.io
    def unit_price(
        cls,
        *,
        event: Event,
        ticket_type: Optional[TicketType] = None,
        batch: Optional[TicketBatch] = None,
        half_price_requested: bool = False,
        half_price_factor: Decimal = Decimal('0.5'),
    ) -> Money:
        """
        Raises:
            NotEligibleError: half price requested on a type that does not allow it
        """
        base = cls.base_price(event=event, ticket_type=ticket_type, batch=batch)
        if not half_price_requested:
            return base
        if ticket_type is None or not ticket_type.allow_half_price:
            raise NotEligibleError('Half price is not available for this ticket')
        return base * half_price_factor

    @staticmethod
    @Logger.io
    def order_total(*, unit_price: Money, quantity: int, service_fee_rate: Decimal) -> OrderQuote:
        if quantity < 1:
            raise ValidationError('Quantity must be at least 1')
        if service_fee_rate < 0:
            raise ValidationError('Service fee rate cannot be negative')

        exact_subtotal = unit_price * quantity
        exact_fee = exact_subtotal * service_fee_rate
        subtotal = exact_subtotal.rounded()
        total = (exact_subtotal + exact_fee).rounded()
        return OrderQuote(
            unit_price=unit_price,
            quantity=quantity,
            service_fee_rate=service_fee_rate,
            subtotal=subtotal,
            # Derived so subtotal + service_fee always equals total to the cent
            service_fee=total - subtotal,
            total=total,
        )

    @staticmethod
    def platform_commission(*, gross: Money, rate_percent: Decimal) -> CommissionSplit:
        validate_rate(rate_percent)
        commission = (gross * rate_percent * Decimal('0.01')).rounded()
        return CommissionSplit(
            gross=gross,
            rate=rate_percent,
            commission=commission,
            organizer_net=gross - commission,
        )
