"""Decimal helpers for money and hour totals."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")


def quantize(value: Decimal, exp: Decimal = CENTS) -> Decimal:
    """Round half up to the given exponent."""
    return value.quantize(exp, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    """Coerce a stored value (Decimal, int, str) to Decimal without float drift."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def total(values: Iterable) -> Decimal:
    return sum((to_decimal(v) for v in values), Decimal("0"))


def format_money(value: Decimal) -> str:
    """Two decimals, e.g. '1234.50'."""
    return f"{quantize(value, CENTS):f}"


def format_hours(value: Decimal) -> str:
    """One decimal, e.g. '7.5'."""
    return f"{quantize(value, TENTHS):f}"
