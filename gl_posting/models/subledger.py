"""
AR and AP subledger transaction models.

A receipt against a sales invoice (AR) or a payment against a
purchase invoice (AP). Each row is paired 1:1 with the GL journal
created in the same unit of work, and is immutable afterwards.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Integer, Date, DateTime, Numeric, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column

from gl_posting.models.base import Base
from gl_posting.models.enums import SubledgerSourceType


class SubledgerTransactionMixin:
    """Columns shared by the AR and AP subledgers."""

    id: Mapped[int] = mapped_column(primary_key=True)
    txn_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    source_type: Mapped[SubledgerSourceType] = mapped_column(
        SAEnum(SubledgerSourceType, name="subledger_source_type_enum"),
        nullable=False,
    )
    # Invoice reference
    source_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False)
    exchange_rate: Mapped[Decimal] = mapped_column(Numeric(19, 6), nullable=False)
    local_amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    bank_account_id: Mapped[int] = mapped_column(
        ForeignKey("bank_accounts.id"), nullable=False
    )
    journal_id: Mapped[int | None] = mapped_column(
        ForeignKey("gl_journals.id"), unique=True, nullable=True
    )
    remarks: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )


class ARTransaction(SubledgerTransactionMixin, Base):
    __tablename__ = "ar_transactions"

    customer_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ARTransaction {self.id} {self.amount} {self.currency}>"


class APTransaction(SubledgerTransactionMixin, Base):
    __tablename__ = "ap_transactions"

    supplier_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<APTransaction {self.id} {self.amount} {self.currency}>"
