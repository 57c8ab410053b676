"""Pydantic value types for market-analysis aggregates."""

from market_analysis.schemas.primitives import (
    Bounded,
    FinancialPeriod,
    Snapshot,
    normalize_symbol,
)
from market_analysis.schemas.analysis import (
    EPSConsensus,
    PriceTarget,
    RangedRatings,
    Ratings,
    RatingType,
    TimestampedPriceTarget,
)

__all__ = [
    "Bounded",
    "FinancialPeriod",
    "Snapshot",
    "normalize_symbol",
    "EPSConsensus",
    "PriceTarget",
    "RangedRatings",
    "Ratings",
    "RatingType",
    "TimestampedPriceTarget",
]
