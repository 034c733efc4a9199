"""
Bank account (payment method) API endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gl_posting.api.errors import http_error
from gl_posting.exceptions import GLError
from gl_posting.models.base import get_db, unit_of_work
from gl_posting.services.bank_account_service import BankAccountService
from gl_posting.schemas.bank_account import (
    BankAccountCreate,
    BankAccountResponse,
    BankBalanceResponse,
)

router = APIRouter(prefix="/bank-accounts", tags=["Bank Accounts"])


@router.post("", response_model=BankAccountResponse, status_code=201)
def create_bank_account(
    request: BankAccountCreate,
    db: Session = Depends(get_db),
):
    """Register a bank account against a leaf ledger account."""
    service = BankAccountService(db)
    try:
        with unit_of_work(db):
            bank = service.create_bank_account(request)
        return bank
    except GLError as e:
        raise http_error(e)


@router.get("", response_model=list[BankAccountResponse])
def list_bank_accounts(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
):
    return BankAccountService(db).list_bank_accounts(include_inactive)


@router.get("/{bank_account_id}", response_model=BankAccountResponse)
def get_bank_account(bank_account_id: int, db: Session = Depends(get_db)):
    try:
        return BankAccountService(db).get_bank_account(bank_account_id)
    except GLError as e:
        raise http_error(e)


@router.post("/{bank_account_id}/deactivate", response_model=BankAccountResponse)
def deactivate_bank_account(bank_account_id: int, db: Session = Depends(get_db)):
    """
    Soft-delete a bank account.

    Historical lines keep pointing at its ledger account; new
    postings against it are rejected.
    """
    service = BankAccountService(db)
    try:
        with unit_of_work(db):
            bank = service.deactivate(bank_account_id)
        return bank
    except GLError as e:
        raise http_error(e)


@router.post("/{bank_account_id}/reactivate", response_model=BankAccountResponse)
def reactivate_bank_account(bank_account_id: int, db: Session = Depends(get_db)):
    service = BankAccountService(db)
    try:
        with unit_of_work(db):
            bank = service.reactivate(bank_account_id)
        return bank
    except GLError as e:
        raise http_error(e)


@router.get("/{bank_account_id}/balance", response_model=BankBalanceResponse)
def get_bank_balance(
    bank_account_id: int,
    as_of: date | None = None,
    db: Session = Depends(get_db),
):
    """Balance derived from GL lines, in the bank's currency and in local."""
    try:
        return BankAccountService(db).get_balance(bank_account_id, as_of)
    except GLError as e:
        raise http_error(e)
