"""
Bank-to-bank transfer record.

Stores both legs of the movement as entered, plus the
functional-currency values and the FX difference the journal booked.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gl_posting.models.base import Base


class BankTransfer(Base):
    __tablename__ = "bank_transfers"

    id: Mapped[int] = mapped_column(primary_key=True)
    transfer_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    from_bank_account_id: Mapped[int] = mapped_column(
        ForeignKey("bank_accounts.id"), nullable=False, index=True
    )
    to_bank_account_id: Mapped[int] = mapped_column(
        ForeignKey("bank_accounts.id"), nullable=False, index=True
    )
    amount_from: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    currency_from: Mapped[str] = mapped_column(String(10), nullable=False)
    exchange_rate_from: Mapped[Decimal] = mapped_column(Numeric(19, 6), nullable=False)
    amount_to: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    currency_to: Mapped[str] = mapped_column(String(10), nullable=False)
    exchange_rate_to: Mapped[Decimal] = mapped_column(Numeric(19, 6), nullable=False)
    local_from: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    local_to: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    # local_to - local_from; positive is an FX gain
    diff_local: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    journal_id: Mapped[int | None] = mapped_column(
        ForeignKey("gl_journals.id"), unique=True, nullable=True
    )
    remarks: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    from_bank_account: Mapped["BankAccount"] = relationship(
        foreign_keys=[from_bank_account_id]
    )
    to_bank_account: Mapped["BankAccount"] = relationship(
        foreign_keys=[to_bank_account_id]
    )

    def __repr__(self) -> str:
        return (
            f"<BankTransfer {self.amount_from} {self.currency_from} -> "
            f"{self.amount_to} {self.currency_to}>"
        )
