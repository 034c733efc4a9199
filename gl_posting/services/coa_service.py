"""
Chart of accounts service.

The posting engine only reads the chart: it resolves accounts by id
or code and asks whether an account may receive GL lines. Creation
is here for administrative setup and tests.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from gl_posting.exceptions import (
    AccountNotPostableError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from gl_posting.models.coa_account import COAAccount
from gl_posting.schemas.coa import COAAccountCreate

logger = logging.getLogger(__name__)


class COAService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, request: COAAccountCreate) -> COAAccount:
        """
        Create a chart of accounts node.

        The code must be unique. A parent, when given, must already
        exist and must be a non-leaf (group) account. Because the
        parent is fixed at creation and must already exist, the tree
        can never contain a cycle.
        """
        existing = self.db.execute(
            select(COAAccount).where(COAAccount.code == request.code)
        ).scalar_one_or_none()
        if existing:
            raise ConflictError(
                f"Account with code '{request.code}' already exists"
            )

        if request.parent_id is not None:
            parent = self.db.get(COAAccount, request.parent_id)
            if parent is None:
                raise NotFoundError(
                    f"Parent account {request.parent_id} not found"
                )
            if parent.is_leaf:
                raise ValidationError(
                    f"Parent account {parent.code} is a leaf account "
                    f"and cannot have children"
                )

        account = COAAccount(
            code=request.code,
            name=request.name,
            account_type=request.account_type,
            normal_balance=request.normal_balance,
            parent_id=request.parent_id,
            is_leaf=request.is_leaf,
            allow_manual_post=request.allow_manual_post,
            is_active=request.is_active,
        )
        self.db.add(account)
        self.db.flush()
        logger.info("Created COA account %s (%s)", account.code, account.id)
        return account

    def get_account(self, account_id: int) -> COAAccount:
        account = self.db.get(COAAccount, account_id)
        if account is None:
            raise NotFoundError(f"Account {account_id} not found")
        return account

    def get_account_by_code(self, code: str) -> COAAccount:
        account = self.db.execute(
            select(COAAccount).where(COAAccount.code == code)
        ).scalar_one_or_none()
        if account is None:
            raise NotFoundError(f"Account with code '{code}' not found")
        return account

    def resolve(self, ref: int | str) -> COAAccount:
        """Look an account up by id (int) or by code (str)."""
        if isinstance(ref, int):
            return self.get_account(ref)
        return self.get_account_by_code(ref)

    def list_accounts(self) -> list[COAAccount]:
        accounts = self.db.execute(
            select(COAAccount).order_by(COAAccount.code)
        ).scalars().all()
        return list(accounts)

    def get_children(self, account_id: int) -> list[COAAccount]:
        self.get_account(account_id)
        children = self.db.execute(
            select(COAAccount)
            .where(COAAccount.parent_id == account_id)
            .order_by(COAAccount.code)
        ).scalars().all()
        return list(children)

    def require_postable(self, ref: int | str) -> COAAccount:
        """
        Resolve an account and check it may receive GL lines.

        Only an active leaf account that allows manual posting is a
        posting target.
        """
        account = self.resolve(ref)
        if not account.is_leaf:
            raise AccountNotPostableError(
                f"Account {account.code} is a group account; "
                f"only leaf accounts can be posted to"
            )
        if not account.allow_manual_post:
            raise AccountNotPostableError(
                f"Account {account.code} does not allow posting"
            )
        if not account.is_active:
            raise AccountNotPostableError(f"Account {account.code} is inactive")
        return account
