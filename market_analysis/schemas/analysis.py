"""Market-analysis aggregates: ratings, price targets and EPS consensus.

Constructing one of these models only parses field types. Business rules are
checked when the caller asks for them through ``validate()``, so an
inconsistent aggregate can exist in memory until it is validated.
"""

from __future__ import annotations

import enum
from datetime import date
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from market_analysis.exceptions import (
    AnalysisValidationError,
    AverageOutOfBounds,
    DateOrderInverted,
    NoAnalysts,
    NoEstimates,
    RangeInverted,
)
from market_analysis.schemas.primitives import Bounded, Counter, FinancialPeriod, Money, Snapshot
from market_analysis.services.metrics import weighted_mean


class RatingType(str, enum.Enum):
    """Analyst recommendation category, from most to least bullish."""

    BUY = "buy"
    OUTPERFORM = "outperform"
    HOLD = "hold"
    UNDERPERFORM = "underperform"
    SELL = "sell"

    @property
    def weight(self) -> int:
        return RATING_WEIGHTS[self]

    @classmethod
    def from_label(cls, label: str) -> RatingType:
        """Map a broker's rating label (e.g. "Strong Buy", "Overweight") to a category."""
        key = " ".join(label.lower().replace("-", " ").split())
        try:
            return _LABELS[key]
        except KeyError:
            raise ValueError(f"Unknown rating label '{label}'") from None


RATING_WEIGHTS: Mapping[RatingType, int] = {
    RatingType.BUY: 1,
    RatingType.OUTPERFORM: 2,
    RatingType.HOLD: 3,
    RatingType.UNDERPERFORM: 4,
    RatingType.SELL: 5,
}

_LABELS: dict[str, RatingType] = {
    "strong buy": RatingType.BUY,
    "buy": RatingType.BUY,
    "conviction buy": RatingType.BUY,
    "outperform": RatingType.OUTPERFORM,
    "overweight": RatingType.OUTPERFORM,
    "moderate buy": RatingType.OUTPERFORM,
    "accumulate": RatingType.OUTPERFORM,
    "hold": RatingType.HOLD,
    "neutral": RatingType.HOLD,
    "equal weight": RatingType.HOLD,
    "market perform": RatingType.HOLD,
    "underperform": RatingType.UNDERPERFORM,
    "underweight": RatingType.UNDERPERFORM,
    "moderate sell": RatingType.UNDERPERFORM,
    "reduce": RatingType.UNDERPERFORM,
    "sell": RatingType.SELL,
    "strong sell": RatingType.SELL,
}


class Ratings(BaseModel):
    """Recommendation counts per category over some period."""

    model_config = ConfigDict(frozen=True)

    ratings: Mapping[RatingType, Counter] = Field(default_factory=dict, validate_default=True)
    """Not every category has to be present. Read-only once parsed."""

    scale_mark: float | None = None
    """Standardized consensus score supplied by the data source, if any."""

    @field_validator("ratings", mode="after")
    @classmethod
    def freeze_ratings(cls, value: Mapping[RatingType, int]) -> Mapping[RatingType, int]:
        return MappingProxyType(dict(value))

    @field_serializer("ratings")
    def serialize_ratings(self, value: Mapping[RatingType, int]) -> dict[RatingType, int]:
        return dict(value)

    def __hash__(self) -> int:
        return hash((frozenset(self.ratings.items()), self.scale_mark))

    def total_count(self) -> int:
        return sum(self.ratings.values())

    def scaled_average(self) -> float | None:
        """Weighted average on the 1 (Buy) .. 5 (Sell) scale.

        Returns None when there are no ratings or every count is zero.
        """
        if self.total_count() == 0:
            return None
        return weighted_mean(self.ratings, RATING_WEIGHTS)


class PriceTarget(BaseModel):
    """Consensus price targets; high, low and average."""

    model_config = ConfigDict(frozen=True)

    high: Money
    low: Money
    average: Money
    number_of_analysts: Counter

    def validate(self) -> None:  # type: ignore[override]
        """Raise on the first broken rule: range, then average, then analysts."""
        if self.high < self.low:
            raise RangeInverted("High price target cannot be lower than low price target.")
        if not self.low <= self.average <= self.high:
            raise AverageOutOfBounds(
                "Average price target must be within the high and low bounds."
            )
        if self.number_of_analysts == 0:
            raise NoAnalysts("Number of analysts cannot be zero for a valid price target.")

    def is_valid(self) -> bool:
        try:
            self.validate()
        except AnalysisValidationError:
            return False
        return True


class EPSConsensus(BaseModel):
    """Consensus earnings-per-share estimate for one fiscal period."""

    model_config = ConfigDict(frozen=True)

    consensus: Money
    number_of_estimates: Counter
    fiscal_period: FinancialPeriod
    fiscal_end_date: date
    next_report_date: date

    def validate(self) -> None:  # type: ignore[override]
        if self.fiscal_end_date > self.next_report_date:
            raise DateOrderInverted("Fiscal end date should be before the next report date.")
        if self.number_of_estimates == 0:
            raise NoEstimates("Number of estimates cannot be zero for a valid EPS consensus.")

    def is_valid(self) -> bool:
        try:
            self.validate()
        except AnalysisValidationError:
            return False
        return True


TimestampedPriceTarget = Snapshot[PriceTarget]
RangedRatings = Bounded[Ratings]
