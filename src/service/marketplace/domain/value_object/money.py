"""
Money - fixed-point monetary amount

Amounts are held as Decimal at full precision so that chained
multiplications (half price, fee rates, commission) do not drift.
Rounding to the cent (half-up) happens only when a value is produced
for a total or for display.
"""

from decimal import ROUND_HALF_UP, Decimal

import attrs


CENT = Decimal('0.01')


def _to_decimal(value: Decimal | int | str | float) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() first so 0.1 becomes Decimal('0.1') and not the binary expansion
        return Decimal(str(value))
    return Decimal(value)


def _validate_non_negative(instance: object, attribute: attrs.Attribute, value: Decimal) -> None:
    if value < 0:
        raise ValueError('Money amount cannot be negative')


@attrs.frozen(order=True)
class Money:
    amount: Decimal = attrs.field(converter=_to_decimal, validator=_validate_non_negative)

    @classmethod
    def zero(cls) -> 'Money':
        return cls(Decimal(0))

    @classmethod
    def of(cls, value: Decimal | int | str | float) -> 'Money':
        return cls(_to_decimal(value))

    def __add__(self, other: 'Money') -> 'Money':
        return Money(self.amount + other.amount)

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(self.amount - other.amount)

    def __mul__(self, factor: Decimal | int) -> 'Money':
        return Money(self.amount * _to_decimal(factor))

    __rmul__ = __mul__

    def rounded(self) -> 'Money':
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP))

    @property
    def minor_units(self) -> int:
        return int(self.rounded().amount * 100)

    def __str__(self) -> str:
        return f'{self.rounded().amount:.2f}'
