"""Display formatting for currency amounts and percentages."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from fintrack.normalizer import coerce_number


def _round(value: float, places: str) -> Decimal:
    # Decimal(float) is exact, so halves round the way the typed value reads
    return Decimal(value).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def as_currency(value: Any) -> str:
    """Format an amount as whole US dollars.

    Example:
        >>> as_currency(1234.5)
        '$1,235'
        >>> as_currency("-50")
        '-$50'
    """
    rounded = _round(coerce_number(value), "1")
    sign = "-" if rounded.is_signed() else ""
    return f"{sign}${abs(rounded):,.0f}"


def format_percent(value: Any) -> str:
    """One-decimal representation of a percentage value, without the % sign."""
    return f"{_round(coerce_number(value), '0.1'):.1f}"
