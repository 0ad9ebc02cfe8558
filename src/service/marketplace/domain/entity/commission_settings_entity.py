from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Optional

import attrs

from src.platform.exception.exceptions import ValidationError


def validate_rate(rate: Decimal, *, label: str = 'Commission rate') -> Decimal:
    if not Decimal(0) <= rate <= Decimal(100):
        raise ValidationError(f'{label} must be between 0 and 100, got {rate}')
    return rate


@attrs.define(kw_only=True)
class CommissionSettings:
    """Platform commission, in percent, with optional per-category overrides"""

    default_rate: Decimal
    category_rates: Dict[str, Decimal] = attrs.field(factory=dict)
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls, *, default_rate: Decimal, category_rates: Optional[Dict[str, Decimal]] = None
    ) -> 'CommissionSettings':
        validate_rate(default_rate, label='Default commission rate')
        normalized = {}
        for category, rate in (category_rates or {}).items():
            normalized[cls.normalize_category(category)] = validate_rate(
                rate, label=f'Commission rate for {category}'
            )
        return cls(
            default_rate=default_rate,
            category_rates=normalized,
            updated_at=datetime.now(timezone.utc),
        )

    @staticmethod
    def normalize_category(category: str) -> str:
        return (category or '').strip().casefold()

    def rate_for(self, category: Optional[str]) -> Decimal:
        return self.category_rates.get(self.normalize_category(category or ''), self.default_rate)
