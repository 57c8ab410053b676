"""SQLAlchemy ORM models."""

from market_analysis.models.company import Base, Company
from market_analysis.models.analyst_rating import AnalystRating
from market_analysis.models.eps_estimate import EpsEstimate

__all__ = ["Base", "Company", "AnalystRating", "EpsEstimate"]
