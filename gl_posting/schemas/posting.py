"""
Pydantic schemas for the posting service.

One request per business event. Amounts are validated here for
shape only (positive amount, non-negative rate, bounded digits); the business rules
(bank active, currency match, balance) live in the services.
"""

import enum
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from gl_posting.schemas.common import CurrencyCode
from gl_posting.schemas.journal import GLJournalResponse
from gl_posting.schemas.subledger import (
    ARTransactionResponse,
    APTransactionResponse,
    BankTransferRecordResponse,
)


# --- Request Schemas ---

class ARReceiptRequest(BaseModel):
    """A customer paid against a sales invoice."""
    bank_account_id: int
    customer_id: int
    invoice_id: int
    amount: Decimal = Field(gt=0, max_digits=15, decimal_places=4)
    currency: CurrencyCode
    exchange_rate: Decimal = Field(ge=0, max_digits=13, decimal_places=6)
    txn_date: date | None = None
    remarks: str | None = Field(default=None, max_length=500)


class APPaymentRequest(BaseModel):
    """We paid a supplier against a purchase invoice."""
    bank_account_id: int
    supplier_id: int
    invoice_id: int
    amount: Decimal = Field(gt=0, max_digits=15, decimal_places=4)
    currency: CurrencyCode
    exchange_rate: Decimal = Field(ge=0, max_digits=13, decimal_places=6)
    txn_date: date | None = None
    remarks: str | None = Field(default=None, max_length=500)


class BankTransferRequest(BaseModel):
    """Money moved between two of our own bank accounts."""
    from_bank_account_id: int
    to_bank_account_id: int
    amount_from: Decimal = Field(gt=0, max_digits=15, decimal_places=4)
    currency_from: CurrencyCode
    exchange_rate_from: Decimal = Field(ge=0, max_digits=13, decimal_places=6)
    amount_to: Decimal = Field(gt=0, max_digits=15, decimal_places=4)
    currency_to: CurrencyCode
    exchange_rate_to: Decimal = Field(ge=0, max_digits=13, decimal_places=6)
    transfer_date: date | None = None
    remarks: str | None = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def distinct_accounts(self):
        if self.from_bank_account_id == self.to_bank_account_id:
            raise ValueError("source and destination bank accounts must differ")
        return self


class FXRevaluationRequest(BaseModel):
    bank_account_id: int
    as_of_date: date
    spot_rate: Decimal = Field(ge=0, max_digits=13, decimal_places=6)
    remarks: str | None = Field(default=None, max_length=500)


# --- Response Schemas ---

class ARReceiptResponse(BaseModel):
    transaction: ARTransactionResponse
    journal: GLJournalResponse


class APPaymentResponse(BaseModel):
    transaction: APTransactionResponse
    journal: GLJournalResponse


class BankTransferResponse(BaseModel):
    transfer: BankTransferRecordResponse
    journal: GLJournalResponse


class RevaluationStatus(str, enum.Enum):
    POSTED = "POSTED"
    NO_OP = "NO_OP"
    ALREADY_POSTED = "ALREADY_POSTED"


class RevaluationFigures(BaseModel):
    """The numbers a revaluation is computed from."""
    net_foreign: Decimal
    booked_local: Decimal
    revalued_local: Decimal
    diff_local: Decimal


class FXRevaluationResponse(BaseModel):
    status: RevaluationStatus
    bank_account_id: int
    as_of_date: date
    currency: str
    spot_rate: Decimal
    net_foreign: Decimal
    booked_local: Decimal
    revalued_local: Decimal
    diff_local: Decimal
    revaluation_id: int | None = None
    journal: GLJournalResponse | None = None
