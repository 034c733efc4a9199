"""
Posting API endpoints: one per business event.

Each request runs as a single unit of work. Either the subledger
record, the journal, its lines and the voucher counter all commit,
or none of them do.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from gl_posting.api.errors import http_error
from gl_posting.exceptions import GLError
from gl_posting.models.base import get_db, unit_of_work
from gl_posting.services.posting_service import PostingService
from gl_posting.services.revaluation import RevaluationService
from gl_posting.schemas.journal import GLJournalResponse
from gl_posting.schemas.subledger import (
    ARTransactionResponse,
    APTransactionResponse,
    BankTransferRecordResponse,
)
from gl_posting.schemas.posting import (
    ARReceiptRequest,
    ARReceiptResponse,
    APPaymentRequest,
    APPaymentResponse,
    BankTransferRequest,
    BankTransferResponse,
    FXRevaluationRequest,
    FXRevaluationResponse,
    RevaluationStatus,
)

router = APIRouter(prefix="/postings", tags=["Postings"])


@router.post("/ar-receipts", response_model=ARReceiptResponse, status_code=201)
def post_ar_receipt(
    request: ARReceiptRequest,
    db: Session = Depends(get_db),
):
    """Customer receipt: debit the bank's ledger account, credit AR."""
    service = PostingService(db)
    try:
        with unit_of_work(db):
            txn, journal = service.post_ar_receipt(request)
        return ARReceiptResponse(
            transaction=ARTransactionResponse.model_validate(txn),
            journal=GLJournalResponse.model_validate(journal),
        )
    except GLError as e:
        raise http_error(e)


@router.post("/ap-payments", response_model=APPaymentResponse, status_code=201)
def post_ap_payment(
    request: APPaymentRequest,
    db: Session = Depends(get_db),
):
    """Supplier payment: debit AP, credit the bank's ledger account."""
    service = PostingService(db)
    try:
        with unit_of_work(db):
            txn, journal = service.post_ap_payment(request)
        return APPaymentResponse(
            transaction=APTransactionResponse.model_validate(txn),
            journal=GLJournalResponse.model_validate(journal),
        )
    except GLError as e:
        raise http_error(e)


@router.post("/bank-transfers", response_model=BankTransferResponse, status_code=201)
def post_bank_transfer(
    request: BankTransferRequest,
    db: Session = Depends(get_db),
):
    """
    Transfer between two bank accounts, possibly across currencies.

    A difference between the two local values is booked to FX gain
    or FX loss on a third line.
    """
    service = PostingService(db)
    try:
        with unit_of_work(db):
            transfer, journal = service.post_bank_transfer(request)
        return BankTransferResponse(
            transfer=BankTransferRecordResponse.model_validate(transfer),
            journal=GLJournalResponse.model_validate(journal),
        )
    except GLError as e:
        raise http_error(e)


@router.post(
    "/fx-revaluations",
    response_model=FXRevaluationResponse,
    status_code=201,
)
def post_fx_revaluation(
    request: FXRevaluationRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Revalue a foreign-currency bank account at a spot rate.

    201 when a journal was posted. 200 when there was nothing to
    post, or when the same account and date were already revalued
    at the same rate (the stored result is returned).
    """
    service = RevaluationService(db)
    try:
        with unit_of_work(db):
            result = service.post_fx_revaluation(request)
    except GLError as e:
        raise http_error(e)

    if result.status != RevaluationStatus.POSTED:
        response.status_code = 200
    return result
