"""Estimation engine: funnel model, classifier, reverse solver, and benchmarks.

Re-exports key functions and types for convenient access:
    from creatorpay.pricing import evaluate, estimate, solve, classify
"""

from creatorpay.pricing.aggressiveness import OVERPRICED_RATIO, classify, is_overpriced
from creatorpay.pricing.benchmark import (
    EarningsRange,
    OfferAssessment,
    assess_offer,
    earnings_range,
)
from creatorpay.pricing.engine import Estimate, estimate
from creatorpay.pricing.funnel import AVG_LTV, PRESETS, ConversionPreset, evaluate
from creatorpay.pricing.reverse import ReverseQuote, solve

__all__ = [
    "AVG_LTV",
    "OVERPRICED_RATIO",
    "PRESETS",
    "ConversionPreset",
    "EarningsRange",
    "Estimate",
    "OfferAssessment",
    "ReverseQuote",
    "assess_offer",
    "classify",
    "earnings_range",
    "estimate",
    "evaluate",
    "is_overpriced",
    "solve",
]
