"""Shared pytest fixtures – uses in-memory SQLite and a small fixture book."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from market_analysis.models import AnalystRating, Base, Company, EpsEstimate


def make_memory_engine():
    """A single shared connection so every session sees the same database."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture(scope="session")
def engine():
    eng = make_memory_engine()
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def seeded_factory(engine) -> sessionmaker[Session]:
    """Session factory over a database pre-loaded with a small set of test data."""
    factory = sessionmaker(engine, expire_on_commit=False)
    with factory() as sess:
        # Clean tables first
        for table in reversed(Base.metadata.sorted_tables):
            sess.execute(table.delete())
        sess.commit()

        # --- Companies ---
        alph = Company(
            id=uuid.UUID("aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"),
            ticker="ALPH",
            name="Alpha Corp",
            sector="Technology",
            industry="Software",
            market_cap=500_000_000_000,
        )
        beta = Company(
            id=uuid.UUID("bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb"),
            ticker="BETA",
            name="Beta Systems",
            sector="Technology",
            industry="Software",
            market_cap=120_000_000_000,
        )
        delt = Company(
            id=uuid.UUID("dddddddd-dddd-dddd-dddd-dddddddddddd"),
            ticker="DELT",
            name="Delta Labs",
            sector="Technology",
            industry="Software",
            market_cap=50_000_000_000,
        )
        gama = Company(
            id=uuid.UUID("cccccccc-cccc-cccc-cccc-cccccccccccc"),
            ticker="GAMA",
            name="Gamma Finance",
            sector="Finance",
            industry="Banking",
            market_cap=80_000_000_000,
        )
        empt = Company(
            id=uuid.UUID("eeeeeeee-eeee-eeee-eeee-eeeeeeeeeeee"),
            ticker="EMPT",
            name="Empty Holdings",
            sector="Healthcare",
            industry="Biotech",
            market_cap=1_000_000_000,
        )
        badd = Company(
            id=uuid.UUID("ffffffff-ffff-ffff-ffff-ffffffffffff"),
            ticker="BADD",
            name="Bad Data Inc",
            sector="Energy",
            industry="Oil & Gas",
            market_cap=2_000_000_000,
        )
        sess.add_all([alph, beta, delt, gama, empt, badd])
        sess.flush()

        # --- Analyst Ratings (ALPH: two months, one unknown label) ---
        rows = [
            ("Goldman Sachs", "Strong Buy", 160, date(2024, 6, 1)),
            ("Morgan Stanley", "Buy", 165, date(2024, 6, 2)),
            ("JP Morgan", "Hold", 170, date(2024, 6, 3)),
            ("Barclays", "Buy", 175, date(2024, 7, 1)),
            ("Citi", "Sell", 180, date(2024, 7, 2)),
            ("UBS", "Mystery", None, date(2024, 7, 3)),
        ]
        for firm, rating, target, when in rows:
            sess.add(
                AnalystRating(
                    company_id=alph.id,
                    firm_name=firm,
                    rating=rating,
                    price_target=target,
                    rating_date=when,
                )
            )
        # GAMA has a rating but no price target
        sess.add(
            AnalystRating(
                company_id=gama.id,
                firm_name="Jefferies",
                rating="Neutral",
                price_target=None,
                rating_date=date(2024, 5, 20),
            )
        )

        # --- EPS estimates (ALPH, inserted out of order) ---
        sess.add(
            EpsEstimate(
                company_id=alph.id,
                fiscal_period="Q2",
                fiscal_end_date=date(2024, 6, 30),
                next_report_date=date(2024, 7, 25),
                consensus=1.42,
                number_of_estimates=12,
            )
        )
        sess.add(
            EpsEstimate(
                company_id=alph.id,
                fiscal_period="Q1",
                fiscal_end_date=date(2024, 3, 31),
                next_report_date=date(2024, 4, 20),
                consensus=1.3,
                number_of_estimates=10,
            )
        )
        sess.add(
            EpsEstimate(
                company_id=badd.id,
                fiscal_period="ZZ",
                fiscal_end_date=date(2024, 3, 31),
                next_report_date=date(2024, 4, 20),
                consensus=0.1,
                number_of_estimates=1,
            )
        )
        sess.commit()

    return factory


@pytest.fixture
def fixture_data() -> dict:
    """Raw fixture book in the JSON-compatible shape the fixture provider reads."""
    return {
        "symbols": {
            "ALPH": {
                "peers": ["beta", "DELT"],
                "target_price": {
                    "as_of": "2024-06-05T00:00:00Z",
                    "value": {
                        "high": "185.00",
                        "low": "160.00",
                        "average": "170.50",
                        "number_of_analysts": 5,
                    },
                },
                "consensus_rating": [
                    {
                        "start": "2024-07-01",
                        "end": "2024-07-31",
                        "value": {"ratings": {"buy": 3, "hold": 1}, "scale_mark": 1.4},
                    },
                    {
                        "start": "2024-06-01",
                        "end": "2024-06-30",
                        "value": {"ratings": {"buy": 2, "sell": 2}},
                    },
                ],
                "consensus_eps": [
                    {
                        "consensus": "1.42",
                        "number_of_estimates": 12,
                        "fiscal_period": "Q2",
                        "fiscal_end_date": "2024-06-30",
                        "next_report_date": "2024-07-25",
                    },
                    {
                        "consensus": "1.30",
                        "number_of_estimates": 10,
                        "fiscal_period": "Q1",
                        "fiscal_end_date": "2024-03-31",
                        "next_report_date": "2024-04-20",
                    },
                ],
            },
            "empt": {},
        }
    }
