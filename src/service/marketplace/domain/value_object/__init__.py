"""Marketplace Domain Value Objects"""

from src.service.marketplace.domain.value_object.allocation import Allocation
from src.service.marketplace.domain.value_object.money import Money
from src.service.marketplace.domain.value_object.price_quote import CommissionSplit, OrderQuote

__all__ = ['Allocation', 'CommissionSplit', 'Money', 'OrderQuote']
