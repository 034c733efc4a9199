"""
Pydantic schemas for bank accounts (payment methods).
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from gl_posting.models.enums import BankAccountType
from gl_posting.schemas.common import CurrencyCode


class BankAccountCreate(BaseModel):
    code: str = Field(min_length=1, max_length=60)
    name: str = Field(min_length=1, max_length=120)
    account_type: BankAccountType = BankAccountType.BANK
    currency: CurrencyCode
    ledger_account_id: int


class BankAccountResponse(BaseModel):
    id: int
    code: str
    name: str
    account_type: BankAccountType
    currency: str
    ledger_account_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BankBalanceResponse(BaseModel):
    """
    Balance of a bank account as of a date.

    foreign_balance is in the bank's own currency; local_balance is
    the booked functional-currency value, FX adjustments included.
    """
    bank_account_id: int
    currency: str
    as_of: date | None
    foreign_balance: Decimal
    local_balance: Decimal
