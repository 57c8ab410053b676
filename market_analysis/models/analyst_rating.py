"""Analyst rating ORM model."""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from market_analysis.models.company import Base


class AnalystRating(Base):
    __tablename__ = "analyst_ratings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    firm_name: Mapped[str] = mapped_column(String(150), nullable=False)
    rating: Mapped[str] = mapped_column(String(30), nullable=False)
    price_target: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    rating_date: Mapped[date] = mapped_column(Date, nullable=False)

    company = relationship("Company", back_populates="analyst_ratings")

    __table_args__ = (
        Index("ix_analyst_ratings_company_date", "company_id", "rating_date"),
    )

    def __repr__(self) -> str:
        return f"<AnalystRating {self.firm_name} {self.rating} {self.company_id}>"
