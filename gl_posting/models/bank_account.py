"""
Bank account (payment method) model.

Each bank account posts to exactly one leaf COA account, and no two
bank accounts share one. Bank accounts are never hard-deleted:
historical GL lines still point at the linked account, so "deleting"
means is_active=False.
"""

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gl_posting.models.base import Base
from gl_posting.models.enums import BankAccountType


class BankAccount(Base):
    __tablename__ = "bank_accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(String(60), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    account_type: Mapped[BankAccountType] = mapped_column(
        SAEnum(BankAccountType, name="bank_account_type_enum"),
        nullable=False,
        default=BankAccountType.BANK,
    )
    currency: Mapped[str] = mapped_column(String(10), nullable=False)
    ledger_account_id: Mapped[int] = mapped_column(
        ForeignKey("coa_accounts.id"), unique=True, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    ledger_account: Mapped["COAAccount"] = relationship()

    def __repr__(self) -> str:
        return f"<BankAccount {self.code} {self.currency}>"
