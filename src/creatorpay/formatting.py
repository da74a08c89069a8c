"""Display formatting for engine output.

Whole-dollar currency and counts round half up with thousands separators;
``None`` renders as ``"N/A"`` everywhere.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

NOT_AVAILABLE = "N/A"

_WHOLE = Decimal("1")
_TWO_PLACES = Decimal("0.01")
_ONE_PLACE = Decimal("0.1")


def round_whole(value: Decimal) -> int:
    """Round *value* half up to an integer."""
    return int(value.quantize(_WHOLE, rounding=ROUND_HALF_UP))


def format_currency(value: Decimal | None) -> str:
    """Format as whole dollars, e.g. ``$1,759``."""
    if value is None:
        return NOT_AVAILABLE
    return f"${round_whole(value):,}"


def format_cents(value: Decimal | None) -> str:
    """Format as dollars and cents, e.g. ``$17.59``.  Used for CPM and CAC."""
    if value is None:
        return NOT_AVAILABLE
    return f"${value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP):,}"


def format_count(value: Decimal | None) -> str:
    """Format as a rounded count, e.g. ``100,000``."""
    if value is None:
        return NOT_AVAILABLE
    return f"{round_whole(value):,}"


def format_percent(value: Decimal | None) -> str:
    """Format with one decimal place, e.g. ``84.9%``."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value.quantize(_ONE_PLACE, rounding=ROUND_HALF_UP)}%"


def format_ratio(value: Decimal | None) -> str:
    """Format a multiplier such as ROAS, e.g. ``6.67x``."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)}x"
