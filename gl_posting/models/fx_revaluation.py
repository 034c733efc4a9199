"""
FX revaluation record.

One row per (bank account, as-of date). The unique constraint is
what makes a repeated revaluation for the same date impossible to
book twice, even when two requests race.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Numeric, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gl_posting.models.base import Base


class FXRevaluation(Base):
    __tablename__ = "fx_revaluations"
    __table_args__ = (
        UniqueConstraint(
            "bank_account_id", "as_of_date", name="uq_fx_revaluation_bank_date"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    bank_account_id: Mapped[int] = mapped_column(
        ForeignKey("bank_accounts.id"), nullable=False, index=True
    )
    as_of_date: Mapped[date] = mapped_column(Date, nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False)
    spot_rate: Mapped[Decimal] = mapped_column(Numeric(19, 6), nullable=False)
    net_foreign: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    booked_local: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    revalued_local: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    diff_local: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    journal_id: Mapped[int | None] = mapped_column(
        ForeignKey("gl_journals.id"), unique=True, nullable=True
    )
    remarks: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    bank_account: Mapped["BankAccount"] = relationship()
    journal: Mapped["GLJournal | None"] = relationship()

    def __repr__(self) -> str:
        return (
            f"<FXRevaluation bank={self.bank_account_id} "
            f"{self.as_of_date} diff={self.diff_local}>"
        )
