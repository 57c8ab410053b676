"""Fixture-backed provider: serves aggregates from an in-memory book.

The book is usually loaded from a JSON file shaped like::

    {
      "symbols": {
        "ALPH": {
          "peers": ["BETA", "GAMA"],
          "target_price": {"as_of": "2024-06-05T00:00:00Z",
                           "value": {"high": "185", "low": "160",
                                     "average": "170", "number_of_analysts": 5}},
          "consensus_rating": [{"start": "2024-06-01", "end": "2024-06-30",
                                "value": {"ratings": {"buy": 4, "hold": 1}}}],
          "consensus_eps": [{"consensus": "1.42", "number_of_estimates": 12,
                             "fiscal_period": "Q2", "fiscal_end_date": "2024-06-30",
                             "next_report_date": "2024-07-25"}]
        }
      }
    }
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from market_analysis.exceptions import BadRequest, BadResponse, NotFound, ProviderUnavailable
from market_analysis.schemas.analysis import EPSConsensus, RangedRatings, TimestampedPriceTarget
from market_analysis.schemas.primitives import normalize_symbol

logger = logging.getLogger("providers.fixtures")


def _book_symbol(symbol: str) -> str:
    try:
        return normalize_symbol(symbol)
    except BadRequest as exc:
        raise ValueError(str(exc)) from exc


class SymbolFixture(BaseModel):
    """Everything the book knows about one symbol."""

    model_config = ConfigDict(frozen=True)

    peers: frozenset[str] = frozenset()
    target_price: TimestampedPriceTarget | None = None
    consensus_rating: list[RangedRatings] | None = None
    consensus_eps: list[EPSConsensus] | None = None

    @field_validator("peers")
    @classmethod
    def normalize_peers(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(_book_symbol(s) for s in value)


class FixtureBook(BaseModel):
    symbols: dict[str, SymbolFixture] = Field(default_factory=dict)

    @field_validator("symbols")
    @classmethod
    def normalize_symbols(cls, value: dict[str, SymbolFixture]) -> dict[str, SymbolFixture]:
        """Upper-case the keys; case variants of one ticker are ambiguous."""
        symbols: dict[str, SymbolFixture] = {}
        for key, fixture in value.items():
            ticker = _book_symbol(key)
            if ticker in symbols:
                raise ValueError(f"duplicate entries for ticker '{ticker}'")
            symbols[ticker] = fixture
        return symbols


class FixtureProvider:
    """In-memory provider; unknown symbols raise ``NotFound``."""

    def __init__(self, book: FixtureBook | None = None) -> None:
        book = book or FixtureBook()
        self._symbols = dict(book.symbols)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FixtureProvider:
        """Build from a ``{"symbols": {...}}`` mapping."""
        try:
            book = FixtureBook.model_validate(data)
        except ValidationError as exc:
            raise BadResponse(f"Malformed fixture data: {exc.error_count()} error(s)") from exc
        return cls(book)

    @classmethod
    def from_file(cls, path: str | Path) -> FixtureProvider:
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ProviderUnavailable(f"Cannot read fixture file '{path}'") from exc
        try:
            book = FixtureBook.model_validate_json(raw)
        except ValidationError as exc:
            raise BadResponse(
                f"Malformed fixture file '{path}': {exc.error_count()} error(s)"
            ) from exc
        logger.info("loaded fixture book path=%s symbols=%d", path, len(book.symbols))
        return cls(book)

    @property
    def symbols(self) -> frozenset[str]:
        return frozenset(self._symbols)

    def _lookup(self, for_symbol: str) -> SymbolFixture:
        ticker = normalize_symbol(for_symbol)
        fixture = self._symbols.get(ticker)
        if fixture is None:
            raise NotFound(f"No fixture data for ticker '{ticker}'")
        return fixture

    def peers(self, for_symbol: str) -> frozenset[str]:
        return self._lookup(for_symbol).peers

    def target_price(self, for_symbol: str) -> TimestampedPriceTarget | None:
        return self._lookup(for_symbol).target_price

    def consensus_rating(self, for_symbol: str) -> list[RangedRatings] | None:
        ratings = self._lookup(for_symbol).consensus_rating
        return list(ratings) if ratings is not None else None

    def consensus_eps(self, for_symbol: str) -> list[EPSConsensus] | None:
        estimates = self._lookup(for_symbol).consensus_eps
        return list(estimates) if estimates is not None else None
