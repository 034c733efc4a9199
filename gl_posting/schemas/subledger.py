"""
Pydantic schemas for subledger records (AR, AP, bank transfers).
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel

from gl_posting.models.enums import SubledgerSourceType


class ARTransactionResponse(BaseModel):
    id: int
    txn_date: date
    source_type: SubledgerSourceType
    source_id: int
    customer_id: int
    amount: Decimal
    currency: str
    exchange_rate: Decimal
    local_amount: Decimal
    bank_account_id: int
    journal_id: int | None
    remarks: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class APTransactionResponse(BaseModel):
    id: int
    txn_date: date
    source_type: SubledgerSourceType
    source_id: int
    supplier_id: int
    amount: Decimal
    currency: str
    exchange_rate: Decimal
    local_amount: Decimal
    bank_account_id: int
    journal_id: int | None
    remarks: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class BankTransferRecordResponse(BaseModel):
    id: int
    transfer_date: date
    from_bank_account_id: int
    to_bank_account_id: int
    amount_from: Decimal
    currency_from: str
    exchange_rate_from: Decimal
    amount_to: Decimal
    currency_to: str
    exchange_rate_to: Decimal
    local_from: Decimal
    local_to: Decimal
    diff_local: Decimal
    journal_id: int | None
    remarks: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
