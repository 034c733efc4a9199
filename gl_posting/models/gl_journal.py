"""
GL journal and GL line models.

A journal is the balanced aggregate: it is written once, together
with all of its lines, and never updated afterwards. Corrections are
new journals (see JournalService.reverse_journal).
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Integer, Date, DateTime, Numeric, ForeignKey, JSON,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gl_posting.models.base import Base
from gl_posting.models.enums import JournalSourceType, LineKind, SubledgerKind

# Name of the reference field each subledger link kind carries.
LINK_REF_FIELDS = {
    SubledgerKind.AR: "txn_id",
    SubledgerKind.AP: "txn_id",
    SubledgerKind.BANK_TRANSFER: "transfer_id",
    SubledgerKind.FX_REVALUATION: "revaluation_id",
}


class GLJournal(Base):
    """
    A balanced set of GL lines posted for one business event.

    sum(line.local_amount) == 0 is checked before the journal is
    flushed (see services.journal_rules); the model only stores it.
    """

    __tablename__ = "gl_journals"

    id: Mapped[int] = mapped_column(primary_key=True)
    voucher_no: Mapped[str] = mapped_column(
        String(40), unique=True, nullable=False, index=True
    )
    voucher_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    source_type: Mapped[JournalSourceType] = mapped_column(
        SAEnum(
            JournalSourceType,
            name="journal_source_type_enum",
            create_constraint=True,
        ),
        nullable=False,
    )
    source_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reversal_of_id: Mapped[int | None] = mapped_column(
        ForeignKey("gl_journals.id"), unique=True, nullable=True
    )
    remarks: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # Audit annotations, e.g. spot rate and old/new local balance on
    # revaluation journals.
    extras: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    lines: Mapped[list["GLLine"]] = relationship(
        back_populates="journal",
        cascade="all, delete-orphan",
        order_by="GLLine.line_no",
    )
    reversal_of: Mapped["GLJournal | None"] = relationship(
        remote_side=[id]
    )

    def __repr__(self) -> str:
        return f"<GLJournal {self.voucher_no} {self.source_type.value}>"


class GLLine(Base):
    """
    One debit or credit on a leaf account.

    Exactly one of debit/credit is positive on STANDARD lines.
    FX_ADJUSTMENT lines carry debit = credit = 0 and only a
    functional-currency local_amount.
    """

    __tablename__ = "gl_lines"

    id: Mapped[int] = mapped_column(primary_key=True)
    journal_id: Mapped[int] = mapped_column(
        ForeignKey("gl_journals.id"), nullable=False, index=True
    )
    line_no: Mapped[int] = mapped_column(Integer, nullable=False)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("coa_accounts.id"), nullable=False, index=True
    )
    debit: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    credit: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False)
    exchange_rate: Mapped[Decimal] = mapped_column(Numeric(19, 6), nullable=False)
    local_amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    line_kind: Mapped[LineKind] = mapped_column(
        SAEnum(LineKind, name="line_kind_enum", create_constraint=True),
        nullable=False,
        default=LineKind.STANDARD,
    )

    # Subledger back-reference, all three set or all three NULL
    link_kind: Mapped[SubledgerKind | None] = mapped_column(
        SAEnum(SubledgerKind, name="subledger_kind_enum", create_constraint=True),
        nullable=True,
    )
    link_ref_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    link_line_num: Mapped[int | None] = mapped_column(Integer, nullable=True)

    journal: Mapped["GLJournal"] = relationship(back_populates="lines")
    account: Mapped["COAAccount"] = relationship()

    @property
    def link(self) -> dict | None:
        """The subledger link in the shape of schemas.links.SubledgerLink."""
        if self.link_kind is None:
            return None
        return {
            "kind": self.link_kind.value,
            LINK_REF_FIELDS[self.link_kind]: self.link_ref_id,
            "line_num": self.link_line_num,
        }

    def __repr__(self) -> str:
        return (
            f"<GLLine {self.line_no} acct={self.account_id} "
            f"dr={self.debit} cr={self.credit} local={self.local_amount}>"
        )
