"""Lenient coercion of raw user input into engine-safe Decimal values.

Raw metric text never produces an error: anything that is not a finite
number becomes zero, and negatives clamp to zero.  Text parsing reads the
leading numeric prefix of the string, so ``"12k"`` is 12 and ``"abc"`` is 0.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

# Revenue-share domain, in percent
REVENUE_SHARE_MIN = Decimal("10")
REVENUE_SHARE_MAX = Decimal("30")
DEFAULT_REVENUE_SHARE = Decimal("15")

_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Magnitudes outside 1e-15 .. 1e15 exceed what the funnel arithmetic can
# carry in the default decimal context; such input reads as zero.
MAX_ADJUSTED_EXPONENT = 15
MIN_ADJUSTED_EXPONENT = -15


def _interpret(value: object) -> Decimal | None:
    """Return the numeric reading of *value*, or ``None`` if it has none."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match is None:
            return None
        try:
            result = Decimal(match.group(1))
        except InvalidOperation:
            return None
    else:
        return None

    if not result.is_finite():
        return None
    if result and not MIN_ADJUSTED_EXPONENT <= result.adjusted() <= MAX_ADJUSTED_EXPONENT:
        return None
    return result


def parse_number(value: object) -> Decimal:
    """Convert *value* to a finite Decimal, or zero if that is not possible.

    Values whose magnitude lies outside ``1e-15 .. 1e15`` also read as zero.

    Args:
        value: A str, int, float, Decimal, or None.

    Returns:
        The parsed Decimal.  Never raises.
    """
    result = _interpret(value)
    return ZERO if result is None else result


def clamp_non_negative(value: object) -> Decimal:
    """Parse *value* and clamp it to ``>= 0``."""
    number = parse_number(value)
    return number if number > ZERO else ZERO


def clamp_revenue_share(value: object) -> Decimal:
    """Parse a revenue-share percentage and clamp it into ``[10, 30]``.

    Input with no numeric reading falls back to the default 15% rather than
    the lower bound, matching the calculator's initial setting.
    """
    number = _interpret(value)
    if number is None:
        return DEFAULT_REVENUE_SHARE
    return max(REVENUE_SHARE_MIN, min(REVENUE_SHARE_MAX, number))
