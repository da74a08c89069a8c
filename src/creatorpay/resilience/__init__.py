"""Resilience infrastructure for storage writes."""

from creatorpay.resilience.retry import resilient_write

__all__ = [
    "resilient_write",
]
