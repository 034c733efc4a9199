"""
Pydantic schemas for GL journals.

JournalCreate is the createJournal request. Its lines are always
STANDARD lines: FX adjustment lines are only generated by the
posting service and the revaluation engine.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from gl_posting.models.enums import JournalSourceType, LineKind
from gl_posting.schemas.common import CurrencyCode
from gl_posting.schemas.links import SubledgerLink


# --- Request Schemas ---

class JournalLineCreate(BaseModel):
    """
    A single debit or credit.

    account_ref is an account id or an account code. local_amount is
    derived from (debit - credit) * exchange_rate when omitted.
    """
    account_ref: int | str
    debit: Decimal = Field(default=Decimal("0"), ge=0, max_digits=15, decimal_places=4)
    credit: Decimal = Field(default=Decimal("0"), ge=0, max_digits=15, decimal_places=4)
    currency: CurrencyCode
    exchange_rate: Decimal = Field(ge=0, max_digits=13, decimal_places=6)
    local_amount: Decimal | None = Field(default=None, max_digits=19, decimal_places=4)
    link: SubledgerLink | None = None


class JournalCreate(BaseModel):
    voucher_date: date | None = None
    source_type: JournalSourceType
    source_id: int | None = None
    remarks: str | None = Field(default=None, max_length=500)
    lines: list[JournalLineCreate] = Field(min_length=1)


class JournalReverseRequest(BaseModel):
    voucher_date: date | None = None
    remarks: str | None = Field(default=None, max_length=500)


# --- Response Schemas ---

class GLLineResponse(BaseModel):
    id: int
    journal_id: int
    line_no: int
    account_id: int
    debit: Decimal
    credit: Decimal
    currency: str
    exchange_rate: Decimal
    local_amount: Decimal
    line_kind: LineKind
    link: SubledgerLink | None

    model_config = {"from_attributes": True}


class GLJournalResponse(BaseModel):
    id: int
    voucher_no: str
    voucher_date: date
    source_type: JournalSourceType
    source_id: int | None
    reversal_of_id: int | None
    remarks: str | None
    extras: dict | None
    created_at: datetime
    lines: list[GLLineResponse]

    model_config = {"from_attributes": True}


class AccountLedgerLineResponse(GLLineResponse):
    """
    A line in an account ledger. balance is the running functional
    currency balance after this line, carried forward from any lines
    before the requested range.
    """
    voucher_no: str
    voucher_date: date
    balance: Decimal
