"""Opaque value types shared by the aggregates and the providers."""

from __future__ import annotations

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from market_analysis.exceptions import BadRequest

Symbol = str
Money = Decimal
Counter = NonNegativeInt

T = TypeVar("T")


def normalize_symbol(symbol: str) -> Symbol:
    """Strip and upper-case a ticker symbol."""
    if not isinstance(symbol, str) or not symbol.strip():
        raise BadRequest("symbol must be a non-empty string")
    return symbol.strip().upper()


class FinancialPeriod(str, enum.Enum):
    """Fiscal reporting period a figure refers to."""

    YEAR = "FY"
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"
    H1 = "H1"
    H2 = "H2"


class Snapshot(BaseModel, Generic[T]):
    """A value as observed at a point in time."""

    model_config = ConfigDict(frozen=True)

    value: T
    as_of: datetime


class Bounded(BaseModel, Generic[T]):
    """A value that holds over the inclusive interval ``start`` .. ``end``."""

    model_config = ConfigDict(frozen=True)

    value: T
    start: date
    end: date
