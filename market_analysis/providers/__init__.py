"""Data-source adapters and the factory that picks one from settings."""

from __future__ import annotations

from market_analysis.config import Settings, settings as default_settings
from market_analysis.db import make_engine, make_session_factory
from market_analysis.providers.base import AnalysisProvider, AnalystRecommendations, Peers
from market_analysis.providers.fixture_provider import FixtureBook, FixtureProvider
from market_analysis.providers.sql_provider import SqlProvider

__all__ = [
    "AnalysisProvider",
    "AnalystRecommendations",
    "Peers",
    "FixtureBook",
    "FixtureProvider",
    "SqlProvider",
    "build_provider",
]


def build_provider(settings: Settings | None = None) -> AnalysisProvider:
    """Return the adapter named by ``settings.provider_backend``."""
    settings = settings or default_settings
    if settings.provider_backend == "database":
        factory = make_session_factory(make_engine(settings))
        return SqlProvider(factory, peer_limit=settings.peer_limit)
    if settings.fixtures_path is None:
        return FixtureProvider()
    return FixtureProvider.from_file(settings.fixtures_path)
