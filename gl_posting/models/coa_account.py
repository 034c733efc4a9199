"""
Chart of accounts model.

Accounts form a tree through parent_id. Only leaf accounts that
allow manual posting can receive GL lines; parent accounts exist
purely to roll balances up.
"""

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gl_posting.models.base import Base
from gl_posting.models.enums import AccountType, NormalBalance


class COAAccount(Base):
    """
    A node in the chart of accounts.

    Read-only from the posting engine's point of view. Once an
    account has lines it is never deleted, only deactivated.
    """

    __tablename__ = "coa_accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(
        String(40), unique=True, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(AccountType, name="account_type_enum"),
        nullable=False,
    )
    normal_balance: Mapped[NormalBalance] = mapped_column(
        SAEnum(NormalBalance, name="normal_balance_enum"),
        nullable=False,
        default=NormalBalance.DEBIT,
    )
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("coa_accounts.id"), nullable=True, index=True
    )
    is_leaf: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    allow_manual_post: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    parent: Mapped["COAAccount | None"] = relationship(
        remote_side=[id], back_populates="children"
    )
    children: Mapped[list["COAAccount"]] = relationship(
        back_populates="parent"
    )

    @property
    def is_postable(self) -> bool:
        return self.is_leaf and self.allow_manual_post and self.is_active

    def __repr__(self) -> str:
        return f"<COAAccount {self.code} ({self.account_type.value})>"
