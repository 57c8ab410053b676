"""Database-backed provider reading the ``companies``, ``analyst_ratings``
and ``eps_estimates`` tables."""

from __future__ import annotations

import calendar
import collections
import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime, timezone
from decimal import Decimal
from itertools import groupby

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from market_analysis.exceptions import BadResponse, NotFound, ProviderUnavailable
from market_analysis.models.analyst_rating import AnalystRating
from market_analysis.models.company import Company
from market_analysis.models.eps_estimate import EpsEstimate
from market_analysis.schemas.analysis import (
    EPSConsensus,
    PriceTarget,
    RangedRatings,
    Ratings,
    RatingType,
    TimestampedPriceTarget,
)
from market_analysis.schemas.primitives import FinancialPeriod, normalize_symbol

logger = logging.getLogger("providers.sql")

_CENT = Decimal("0.01")


def _to_money(v: Decimal | float) -> Decimal:
    return Decimal(str(v)).quantize(_CENT)


def _elapsed_ms(t0: float) -> float:
    return round((time.perf_counter() - t0) * 1000, 2)


class SqlProvider:
    """Provider over a SQLAlchemy session factory.

    Unknown tickers raise ``NotFound``; a known ticker without the requested
    data yields ``None``. Each call opens and closes its own session.
    """

    def __init__(self, session_factory: sessionmaker[Session], peer_limit: int = 10) -> None:
        self._session_factory = session_factory
        self._peer_limit = peer_limit

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self._session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            raise ProviderUnavailable("Database query failed") from exc

    @staticmethod
    def _company(session: Session, ticker: str) -> Company:
        stmt = select(Company).where(func.upper(Company.ticker) == ticker)
        company = session.execute(stmt).scalar_one_or_none()
        if company is None:
            raise NotFound(f"No company found for ticker '{ticker}'")
        return company

    def peers(self, for_symbol: str) -> frozenset[str]:
        """Other companies in the same industry, largest first."""
        t0 = time.perf_counter()
        ticker = normalize_symbol(for_symbol)
        with self._session() as session:
            company = self._company(session, ticker)
            stmt = (
                select(Company.ticker)
                .where(Company.industry == company.industry, Company.id != company.id)
                .order_by(Company.market_cap.desc(), Company.ticker)
                .limit(self._peer_limit)
            )
            tickers = frozenset(t.upper() for t in session.execute(stmt).scalars())

        logger.info("peers ticker=%s results=%d ms=%.1f", ticker, len(tickers), _elapsed_ms(t0))
        return tickers

    def target_price(self, for_symbol: str) -> TimestampedPriceTarget | None:
        """High / low / average over every analyst price target on record."""
        t0 = time.perf_counter()
        ticker = normalize_symbol(for_symbol)
        with self._session() as session:
            company = self._company(session, ticker)
            stmt = select(
                func.max(AnalystRating.price_target),
                func.min(AnalystRating.price_target),
                func.avg(AnalystRating.price_target),
                func.count(AnalystRating.price_target),
                func.max(AnalystRating.rating_date),
            ).where(
                AnalystRating.company_id == company.id,
                AnalystRating.price_target.is_not(None),
            )
            high, low, avg, n, latest = session.execute(stmt).one()

        logger.info("target_price ticker=%s analysts=%d ms=%.1f", ticker, n, _elapsed_ms(t0))
        if not n:
            return None
        return TimestampedPriceTarget(
            value=PriceTarget(
                high=_to_money(high),
                low=_to_money(low),
                average=_to_money(avg),
                number_of_analysts=n,
            ),
            as_of=datetime.combine(latest, datetime.min.time(), tzinfo=timezone.utc),
        )

    def consensus_rating(self, for_symbol: str) -> list[RangedRatings] | None:
        """Rating counts bucketed per calendar month, oldest first."""
        t0 = time.perf_counter()
        ticker = normalize_symbol(for_symbol)
        with self._session() as session:
            company = self._company(session, ticker)
            stmt = (
                select(AnalystRating.rating, AnalystRating.rating_date)
                .where(AnalystRating.company_id == company.id)
                .order_by(AnalystRating.rating_date)
            )
            rows = session.execute(stmt).all()

        logger.info("consensus_rating ticker=%s rows=%d ms=%.1f", ticker, len(rows), _elapsed_ms(t0))
        if not rows:
            return None

        windows: list[RangedRatings] = []
        for (year, month), group in groupby(
            rows, key=lambda r: (r.rating_date.year, r.rating_date.month)
        ):
            counts: collections.Counter[RatingType] = collections.Counter()
            for row in group:
                try:
                    counts[RatingType.from_label(row.rating)] += 1
                except ValueError:
                    logger.warning(
                        "skipping unknown rating label ticker=%s label=%r", ticker, row.rating
                    )
            windows.append(
                RangedRatings(
                    value=Ratings(ratings=dict(counts)),
                    start=date(year, month, 1),
                    end=date(year, month, calendar.monthrange(year, month)[1]),
                )
            )
        return windows

    def consensus_eps(self, for_symbol: str) -> list[EPSConsensus] | None:
        """One consensus per stored fiscal period, ordered by fiscal end date."""
        t0 = time.perf_counter()
        ticker = normalize_symbol(for_symbol)
        with self._session() as session:
            company = self._company(session, ticker)
            stmt = (
                select(EpsEstimate)
                .where(EpsEstimate.company_id == company.id)
                .order_by(EpsEstimate.fiscal_end_date)
            )
            rows = session.execute(stmt).scalars().all()

        logger.info("consensus_eps ticker=%s rows=%d ms=%.1f", ticker, len(rows), _elapsed_ms(t0))
        if not rows:
            return None
        try:
            return [
                EPSConsensus(
                    consensus=Decimal(str(r.consensus)),
                    number_of_estimates=r.number_of_estimates,
                    fiscal_period=FinancialPeriod(r.fiscal_period),
                    fiscal_end_date=r.fiscal_end_date,
                    next_report_date=r.next_report_date,
                )
                for r in rows
            ]
        except ValueError as exc:
            raise BadResponse(f"Malformed EPS estimate row for ticker '{ticker}'") from exc
