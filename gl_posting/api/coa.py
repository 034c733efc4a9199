"""
Chart of accounts API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gl_posting.api.errors import http_error
from gl_posting.exceptions import GLError
from gl_posting.models.base import get_db, unit_of_work
from gl_posting.services.coa_service import COAService
from gl_posting.schemas.coa import COAAccountCreate, COAAccountResponse

router = APIRouter(prefix="/coa", tags=["Chart of Accounts"])


@router.post("/accounts", response_model=COAAccountResponse, status_code=201)
def create_account(
    request: COAAccountCreate,
    db: Session = Depends(get_db),
):
    """
    Create a chart of accounts node.

    A parent, if given, must be an existing group (non-leaf) account.
    """
    service = COAService(db)
    try:
        with unit_of_work(db):
            account = service.create_account(request)
        return account
    except GLError as e:
        raise http_error(e)


@router.get("/accounts", response_model=list[COAAccountResponse])
def list_accounts(db: Session = Depends(get_db)):
    """List all accounts ordered by code."""
    return COAService(db).list_accounts()


@router.get("/accounts/{account_id}", response_model=COAAccountResponse)
def get_account(account_id: int, db: Session = Depends(get_db)):
    try:
        return COAService(db).get_account(account_id)
    except GLError as e:
        raise http_error(e)


@router.get("/accounts/{account_id}/children", response_model=list[COAAccountResponse])
def get_children(account_id: int, db: Session = Depends(get_db)):
    """Direct children of a group account."""
    try:
        return COAService(db).get_children(account_id)
    except GLError as e:
        raise http_error(e)
