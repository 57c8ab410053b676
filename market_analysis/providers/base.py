"""Provider interface definitions.

These protocols describe the capabilities a data-source adapter offers to
callers. Any concrete source (remote API client, fixture loader, database)
plugs in by implementing the same methods; callers type against the
protocols, never against an adapter class. See ``fixture_provider.py`` and
``sql_provider.py`` for reference implementations.

Every method follows the same result convention: a return of ``None`` means
the source has no such data for the symbol, while a failure to obtain data
at all raises :class:`~market_analysis.exceptions.RequestError`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from market_analysis.schemas.analysis import EPSConsensus, RangedRatings, TimestampedPriceTarget


@runtime_checkable
class Peers(Protocol):
    """Supplies the set of companies considered peers of a symbol."""

    def peers(self, for_symbol: str) -> frozenset[str]:
        """Return the peer symbols of ``for_symbol``, possibly empty."""
        ...


@runtime_checkable
class AnalystRecommendations(Protocol):
    """Supplies analyst price targets, ratings and EPS consensus."""

    def target_price(self, for_symbol: str) -> TimestampedPriceTarget | None:
        """Return the consensus price target and when it was observed."""
        ...

    def consensus_rating(self, for_symbol: str) -> list[RangedRatings] | None:
        """Return rating counts per validity interval.

        The list keeps the order the source produced (usually chronological).
        """
        ...

    def consensus_eps(self, for_symbol: str) -> list[EPSConsensus] | None:
        """Return one EPS consensus per fiscal period, in source order."""
        ...


@runtime_checkable
class AnalysisProvider(Peers, AnalystRecommendations, Protocol):
    """An adapter offering both capabilities."""
