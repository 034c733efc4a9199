"""
Bank account (payment method) service.

Bank accounts are long-lived. They are deactivated, never deleted,
because historical GL lines still reference their ledger account.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from gl_posting.exceptions import (
    ConflictError,
    CurrencyMismatchError,
    InactiveBankAccountError,
    NotFoundError,
    ValidationError,
)
from gl_posting.models.bank_account import BankAccount
from gl_posting.money import ZERO, round2
from gl_posting.schemas.bank_account import BankAccountCreate, BankBalanceResponse
from gl_posting.services.coa_service import COAService
from gl_posting.services.journal_service import JournalService

logger = logging.getLogger(__name__)


class BankAccountService:

    def __init__(self, db: Session):
        self.db = db
        self.coa = COAService(db)

    def create_bank_account(self, request: BankAccountCreate) -> BankAccount:
        """
        Register a bank account against a leaf ledger account.

        Raises ConflictError on a duplicate code or a ledger account
        already linked to another bank account, NotFoundError if the
        ledger account does not exist, ValidationError if it is a group
        account.
        """
        existing = self.db.execute(
            select(BankAccount).where(BankAccount.code == request.code)
        ).scalar_one_or_none()
        if existing:
            raise ConflictError(
                f"Bank account with code '{request.code}' already exists"
            )

        ledger_account = self.coa.get_account(request.ledger_account_id)
        if not ledger_account.is_leaf:
            raise ValidationError(
                f"Bank accounts must post to a leaf account; "
                f"{ledger_account.code} is a group account"
            )

        owner = self.db.execute(
            select(BankAccount).where(BankAccount.ledger_account_id == ledger_account.id)
        ).scalar_one_or_none()
        if owner:
            raise ConflictError(
                f"Ledger account {ledger_account.code} is already linked to "
                f"bank account {owner.code}"
            )

        bank = BankAccount(
            code=request.code,
            name=request.name,
            account_type=request.account_type,
            currency=request.currency,
            ledger_account_id=ledger_account.id,
        )
        self.db.add(bank)
        self.db.flush()
        logger.info("Created bank account %s (%s)", bank.code, bank.currency)
        return bank

    def get_bank_account(self, bank_account_id: int) -> BankAccount:
        bank = self.db.get(BankAccount, bank_account_id)
        if bank is None:
            raise NotFoundError(f"Bank account {bank_account_id} not found")
        return bank

    def list_bank_accounts(self, include_inactive: bool = False) -> list[BankAccount]:
        query = select(BankAccount).order_by(BankAccount.code)
        if not include_inactive:
            query = query.where(BankAccount.is_active.is_(True))
        return list(self.db.execute(query).scalars().all())

    def deactivate(self, bank_account_id: int) -> BankAccount:
        bank = self.get_bank_account(bank_account_id)
        bank.is_active = False
        self.db.flush()
        logger.info("Deactivated bank account %s", bank.code)
        return bank

    def reactivate(self, bank_account_id: int) -> BankAccount:
        bank = self.get_bank_account(bank_account_id)
        bank.is_active = True
        self.db.flush()
        logger.info("Reactivated bank account %s", bank.code)
        return bank

    def require_usable(self, bank_account_id: int, currency: str) -> BankAccount:
        """
        Return the bank account if a transaction in `currency` may use it.

        The currency must equal the account's declared currency; a
        mismatch is rejected, never converted.
        """
        bank = self.get_bank_account(bank_account_id)
        if not bank.is_active:
            raise InactiveBankAccountError(f"Bank account {bank.code} is inactive")
        if bank.currency != currency:
            raise CurrencyMismatchError(
                f"Bank account {bank.code} is in {bank.currency}, "
                f"transaction currency is {currency}"
            )
        return bank

    def get_balance(
        self, bank_account_id: int, as_of: date | None = None
    ) -> BankBalanceResponse:
        """
        Derive the balance from GL lines on the linked ledger account.

        foreign_balance sums debit - credit over lines in the bank's own
        currency. local_balance sums local_amount over every line on
        the account, FX adjustments included.
        """
        bank = self.get_bank_account(bank_account_id)
        lines = JournalService(self.db).get_lines_by_account(
            bank.ledger_account_id, date_to=as_of
        )

        foreign = sum(
            (line.debit - line.credit for line in lines if line.currency == bank.currency),
            ZERO,
        )
        local = sum((line.local_amount for line in lines), ZERO)

        return BankBalanceResponse(
            bank_account_id=bank.id,
            currency=bank.currency,
            as_of=as_of,
            foreign_balance=round2(foreign),
            local_balance=round2(local),
        )
