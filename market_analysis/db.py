"""SQLAlchemy engine and session factory."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from market_analysis.config import Settings, settings
from market_analysis.models import Base


def make_engine(cfg: Settings) -> Engine:
    return create_engine(cfg.database_url, echo=(cfg.app_env == "development"))


def make_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind, expire_on_commit=False)


engine = make_engine(settings)
session_factory = make_session_factory(engine)


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield a session, closing it when done."""
    with session_factory() as session:
        yield session


def init_db(bind: Engine | None = None) -> None:
    """Create all tables (no migrations are shipped)."""
    Base.metadata.create_all(bind or engine)
