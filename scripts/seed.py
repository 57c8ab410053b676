#!/usr/bin/env python3
"""Seed script – populates the database with realistic dummy analyst data.

Creates the tables if needed, then:
    python -m scripts.seed
"""

from __future__ import annotations

import random
import uuid
from datetime import date, timedelta

from faker import Faker
from sqlalchemy.orm import Session

from market_analysis.config import configure_logging
from market_analysis.db import get_session, init_db
from market_analysis.models import AnalystRating, Company, EpsEstimate

fake = Faker()
Faker.seed(42)
random.seed(42)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SECTORS = [
    ("Technology", ["Software", "Semiconductors"]),
    ("Healthcare", ["Pharmaceuticals", "Biotech"]),
    ("Finance", ["Banking", "Insurance"]),
]

RATING_LABELS = ["Strong Buy", "Buy", "Outperform", "Hold", "Underperform", "Sell"]
ANALYST_FIRMS = [
    "Goldman Sachs", "Morgan Stanley", "JP Morgan", "Barclays",
    "Citi", "BofA Securities", "UBS", "Deutsche Bank",
    "Jefferies", "Raymond James", "Piper Sandler",
]

QUARTER_ENDS = [("Q1", 3, 31), ("Q2", 6, 30), ("Q3", 9, 30), ("Q4", 12, 31)]

# Generate 12 unique tickers
TICKERS: list[str] = []
_used: set[str] = set()
while len(TICKERS) < 12:
    t = fake.lexify(text="????", letters="ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    if t not in _used:
        _used.add(t)
        TICKERS.append(t)


# ---------------------------------------------------------------------------
# Seed functions
# ---------------------------------------------------------------------------


def seed_companies(session: Session) -> list[Company]:
    """Create one company per ticker, two per industry on average."""
    companies: list[Company] = []
    for ticker in TICKERS:
        sector, industries = random.choice(SECTORS)
        company = Company(
            id=uuid.uuid4(),
            ticker=ticker,
            name=fake.company(),
            sector=sector,
            industry=random.choice(industries),
            market_cap=round(random.uniform(500_000_000, 2_000_000_000_000), 2),
        )
        session.add(company)
        companies.append(company)
    session.flush()
    return companies


def seed_analyst_ratings(session: Session, companies: list[Company]) -> int:
    """Generate 4–8 ratings per company around a per-company price level."""
    count = 0
    for comp in companies:
        price_level = random.uniform(20.0, 500.0)
        for _ in range(random.randint(4, 8)):
            session.add(
                AnalystRating(
                    id=uuid.uuid4(),
                    company_id=comp.id,
                    firm_name=random.choice(ANALYST_FIRMS),
                    rating=random.choice(RATING_LABELS),
                    price_target=round(price_level * random.uniform(0.8, 1.3), 2),
                    rating_date=fake.date_between(start_date="-1y", end_date="today"),
                )
            )
            count += 1
    session.flush()
    return count


def seed_eps_estimates(session: Session, companies: list[Company], year: int = 2024) -> int:
    """One consensus row per quarter of ``year`` for every company."""
    count = 0
    for comp in companies:
        eps = random.uniform(-0.5, 4.0)
        for period, month, day in QUARTER_ENDS:
            fiscal_end = date(year, month, day)
            session.add(
                EpsEstimate(
                    id=uuid.uuid4(),
                    company_id=comp.id,
                    fiscal_period=period,
                    fiscal_end_date=fiscal_end,
                    next_report_date=fiscal_end + timedelta(days=random.randint(20, 45)),
                    consensus=round(eps, 4),
                    number_of_estimates=random.randint(3, 25),
                )
            )
            count += 1
            eps *= 1 + random.uniform(-0.05, 0.08)
    session.flush()
    return count


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> None:
    configure_logging()
    print("🌱  Seeding database …")
    init_db()

    with get_session() as session:
        # Wipe existing data
        session.execute(EpsEstimate.__table__.delete())
        session.execute(AnalystRating.__table__.delete())
        session.execute(Company.__table__.delete())
        session.commit()

        companies = seed_companies(session)
        print(f"  ✅ {len(companies)} companies")

        n_ar = seed_analyst_ratings(session, companies)
        print(f"  ✅ {n_ar} analyst ratings")

        n_eps = seed_eps_estimates(session, companies)
        print(f"  ✅ {n_eps} EPS estimates")

        session.commit()

    print("🎉  Seeding complete!")


if __name__ == "__main__":
    main()
