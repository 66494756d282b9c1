"""
Fixed-point money helpers.

All amounts are `Decimal` quantized to the smallest currency unit (0.01) with
ROUND_HALF_UP. Floats never enter a calculation: adapters convert at the boundary.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


CURRENCY_UNIT = Decimal('0.01')
ZERO = Decimal('0.00')

MoneyLike = Union[Decimal, int, str]


def to_money(value: MoneyLike) -> Decimal:
    if isinstance(value, float):
        raise TypeError('float amounts are not accepted, pass Decimal, int or str')
    return Decimal(value).quantize(CURRENCY_UNIT, rounding=ROUND_HALF_UP)


def clamp_non_negative(amount: Decimal) -> Decimal:
    return amount if amount > ZERO else ZERO


def to_minor_units(amount: Decimal) -> int:
    return int(to_money(amount) / CURRENCY_UNIT)


def from_minor_units(units: int) -> Decimal:
    return (Decimal(units) * CURRENCY_UNIT).quantize(CURRENCY_UNIT)


def format_money(amount: Decimal, *, symbol: str) -> str:
    return f'{symbol}{to_money(amount)}'
