"""Consensus EPS estimate ORM model."""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from market_analysis.models.company import Base


class EpsEstimate(Base):
    __tablename__ = "eps_estimates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    fiscal_period: Mapped[str] = mapped_column(String(2), nullable=False)
    fiscal_end_date: Mapped[date] = mapped_column(Date, nullable=False)
    next_report_date: Mapped[date] = mapped_column(Date, nullable=False)
    consensus: Mapped[float] = mapped_column(Numeric(10, 4), nullable=False)
    number_of_estimates: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    company = relationship("Company", back_populates="eps_estimates")

    __table_args__ = (
        Index("ix_eps_estimates_company_end", "company_id", "fiscal_end_date"),
    )

    def __repr__(self) -> str:
        return f"<EpsEstimate {self.company_id} {self.fiscal_period} {self.fiscal_end_date}>"
