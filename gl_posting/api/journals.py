"""
GL journal API endpoints.

The API layer is thin: it opens the unit of work, delegates to
JournalService, and maps errors to status codes.
"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gl_posting.api.errors import http_error
from gl_posting.exceptions import GLError
from gl_posting.models.base import get_db, unit_of_work
from gl_posting.services.journal_service import JournalService
from gl_posting.schemas.journal import (
    JournalCreate,
    JournalReverseRequest,
    AccountLedgerLineResponse,
    GLJournalResponse,
)

router = APIRouter(prefix="/journals", tags=["Journals"])


@router.post("", response_model=GLJournalResponse, status_code=201)
def create_journal(
    request: JournalCreate,
    db: Session = Depends(get_db),
):
    """
    Post a journal from explicit lines.

    Rejected with 422 if any line is malformed or posts to a
    non-postable account, or if local amounts do not sum to zero.
    Nothing is written and no voucher number is consumed.
    """
    service = JournalService(db)
    try:
        with unit_of_work(db):
            journal = service.create_journal(request)
        return journal
    except GLError as e:
        raise http_error(e)


@router.get("/by-voucher/{voucher_no}", response_model=GLJournalResponse)
def get_journal_by_voucher(voucher_no: str, db: Session = Depends(get_db)):
    try:
        return JournalService(db).get_journal_by_voucher(voucher_no)
    except GLError as e:
        raise http_error(e)


@router.get(
    "/accounts/{account_id}/lines",
    response_model=list[AccountLedgerLineResponse],
)
def get_account_lines(
    account_id: int,
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    """
    Lines posted to one account, oldest first, each with the running
    balance in functional currency.
    """
    try:
        return JournalService(db).get_account_ledger(account_id, date_from, date_to)
    except GLError as e:
        raise http_error(e)


@router.get("/{journal_id}", response_model=GLJournalResponse)
def get_journal(journal_id: int, db: Session = Depends(get_db)):
    try:
        return JournalService(db).get_journal(journal_id)
    except GLError as e:
        raise http_error(e)


@router.post(
    "/{journal_id}/reverse",
    response_model=GLJournalResponse,
    status_code=201,
)
def reverse_journal(
    journal_id: int,
    request: JournalReverseRequest | None = None,
    db: Session = Depends(get_db),
):
    """Post a journal that cancels an existing one. Allowed once per journal."""
    request = request or JournalReverseRequest()
    service = JournalService(db)
    try:
        with unit_of_work(db):
            journal = service.reverse_journal(
                journal_id, request.voucher_date, request.remarks
            )
        return journal
    except GLError as e:
        raise http_error(e)
