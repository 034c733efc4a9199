"""
Subledger query endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gl_posting.api.errors import http_error
from gl_posting.exceptions import GLError
from gl_posting.models.base import get_db
from gl_posting.services.subledger_service import SubledgerService
from gl_posting.schemas.subledger import (
    ARTransactionResponse,
    APTransactionResponse,
    BankTransferRecordResponse,
)

router = APIRouter(prefix="/subledger", tags=["Subledger"])


@router.get("/ar", response_model=list[ARTransactionResponse])
def list_ar_transactions(
    customer_id: int | None = None,
    invoice_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    """AR receipts, newest first."""
    return SubledgerService(db).list_ar_transactions(
        customer_id, invoice_id, date_from, date_to
    )


@router.get("/ar/{txn_id}", response_model=ARTransactionResponse)
def get_ar_transaction(txn_id: int, db: Session = Depends(get_db)):
    try:
        return SubledgerService(db).get_ar_transaction(txn_id)
    except GLError as e:
        raise http_error(e)


@router.get("/ap", response_model=list[APTransactionResponse])
def list_ap_transactions(
    supplier_id: int | None = None,
    invoice_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    """AP payments, newest first."""
    return SubledgerService(db).list_ap_transactions(
        supplier_id, invoice_id, date_from, date_to
    )


@router.get("/ap/{txn_id}", response_model=APTransactionResponse)
def get_ap_transaction(txn_id: int, db: Session = Depends(get_db)):
    try:
        return SubledgerService(db).get_ap_transaction(txn_id)
    except GLError as e:
        raise http_error(e)


@router.get("/bank-transfers/{transfer_id}", response_model=BankTransferRecordResponse)
def get_bank_transfer(transfer_id: int, db: Session = Depends(get_db)):
    try:
        return SubledgerService(db).get_bank_transfer(transfer_id)
    except GLError as e:
        raise http_error(e)
