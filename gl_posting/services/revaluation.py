"""
FX revaluation engine.

Restates a foreign-currency bank balance at a period-end spot rate
and books the difference as unrealized FX gain or loss.

compute_revaluation() is pure: it takes the historical lines and
returns the figures. RevaluationService does the collaborator work
around it (load the lines, enforce one revaluation per bank account
and date, post the journal).
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from gl_posting.config import get_settings
from gl_posting.exceptions import (
    DuplicateRevaluationError,
    InactiveBankAccountError,
    ValidationError,
)
from gl_posting.models.enums import JournalSourceType, LineKind
from gl_posting.models.fx_revaluation import FXRevaluation
from gl_posting.money import ZERO, round2
from gl_posting.schemas.journal import GLJournalResponse
from gl_posting.schemas.links import FXRevaluationLink
from gl_posting.schemas.posting import (
    FXRevaluationRequest,
    FXRevaluationResponse,
    RevaluationFigures,
    RevaluationStatus,
)
from gl_posting.services.bank_account_service import BankAccountService
from gl_posting.services.coa_service import COAService
from gl_posting.services.journal_rules import fx_adjustment_line
from gl_posting.services.journal_service import JournalService

logger = logging.getLogger(__name__)


def compute_revaluation(lines, currency: str, spot_rate: Decimal) -> RevaluationFigures:
    """
    Compute a revaluation from the lines posted to one ledger account.

    Lines in `currency` contribute to both the foreign balance and the
    booked local value. FX adjustment lines carry no foreign amount but
    are part of the booked local value, so a second revaluation only
    books the change since the first. Lines in any other currency are
    ignored. A ledger account backs at most one bank account, so every
    adjustment line on it comes from that bank's own revaluations.

    Each line needs debit, credit, currency, local_amount and
    line_kind attributes; ORM GLLine rows and LineDraft objects both do.
    """
    net_foreign = ZERO
    booked_local = ZERO
    for line in lines:
        if line.line_kind == LineKind.FX_ADJUSTMENT:
            booked_local += line.local_amount
        elif line.currency == currency:
            net_foreign += line.debit - line.credit
            booked_local += line.local_amount

    net_foreign = round2(net_foreign)
    booked_local = round2(booked_local)
    revalued_local = round2(net_foreign * spot_rate)

    return RevaluationFigures(
        net_foreign=net_foreign,
        booked_local=booked_local,
        revalued_local=revalued_local,
        diff_local=round2(revalued_local - booked_local),
    )


class RevaluationService:

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()
        self.coa = COAService(db)
        self.banks = BankAccountService(db)
        self.journals = JournalService(db)

    def get_revaluation(self, bank_account_id: int, as_of_date: date) -> FXRevaluation | None:
        return self.db.execute(
            select(FXRevaluation).where(
                FXRevaluation.bank_account_id == bank_account_id,
                FXRevaluation.as_of_date == as_of_date,
            )
        ).scalar_one_or_none()

    def get_latest_as_of(self, bank_account_id: int) -> date | None:
        """Date of the most recent posted revaluation of a bank account."""
        return self.db.execute(
            select(func.max(FXRevaluation.as_of_date)).where(
                FXRevaluation.bank_account_id == bank_account_id,
                FXRevaluation.journal_id.is_not(None),
            )
        ).scalar()

    def post_fx_revaluation(self, request: FXRevaluationRequest) -> FXRevaluationResponse:
        """
        Revalue one bank account as of a date.

        Returns status POSTED with the journal, NO_OP when the booked
        value already equals the revalued one (nothing is written), or
        ALREADY_POSTED when this account and date were revalued before
        at the same spot rate. A repeat at a different spot rate raises
        DuplicateRevaluationError, and a date earlier than the latest
        posted revaluation raises ValidationError.
        """
        bank = self.banks.get_bank_account(request.bank_account_id)
        if not bank.is_active:
            raise InactiveBankAccountError(f"Bank account {bank.code} is inactive")
        if bank.currency == self.settings.FUNCTIONAL_CURRENCY:
            raise ValidationError(
                f"Bank account {bank.code} is in the functional currency "
                f"{bank.currency} and has nothing to revalue"
            )

        existing = self.get_revaluation(bank.id, request.as_of_date)
        if existing:
            if existing.spot_rate != request.spot_rate:
                raise DuplicateRevaluationError(
                    f"Bank account {bank.code} was already revalued as of "
                    f"{request.as_of_date} at spot rate {existing.spot_rate}"
                )
            return self._response(RevaluationStatus.ALREADY_POSTED, existing)

        latest = self.get_latest_as_of(bank.id)
        if latest and request.as_of_date < latest:
            raise ValidationError(
                f"Bank account {bank.code} was already revalued as of {latest}; "
                f"cannot revalue as of the earlier date {request.as_of_date}"
            )

        lines = self.journals.get_lines_by_account(
            bank.ledger_account_id, date_to=request.as_of_date
        )
        figures = compute_revaluation(lines, bank.currency, request.spot_rate)
        diff = figures.diff_local

        if diff == ZERO:
            logger.info(
                "Revaluation of %s as of %s: no difference, nothing posted",
                bank.code, request.as_of_date,
            )
            return FXRevaluationResponse(
                status=RevaluationStatus.NO_OP,
                bank_account_id=bank.id,
                as_of_date=request.as_of_date,
                currency=bank.currency,
                spot_rate=request.spot_rate,
                **figures.model_dump(),
            )

        bank_ledger = self.coa.require_postable(bank.ledger_account_id)
        if diff > ZERO:
            fx_account = self.coa.require_postable(self.settings.FX_GAIN_ACCOUNT_CODE)
        else:
            fx_account = self.coa.require_postable(self.settings.FX_LOSS_ACCOUNT_CODE)

        revaluation = FXRevaluation(
            bank_account_id=bank.id,
            as_of_date=request.as_of_date,
            currency=bank.currency,
            spot_rate=request.spot_rate,
            remarks=request.remarks,
            **figures.model_dump(),
        )
        self.db.add(revaluation)
        self.db.flush()

        functional = self.settings.FUNCTIONAL_CURRENCY
        link = FXRevaluationLink(revaluation_id=revaluation.id)
        if diff > ZERO:
            lines = [
                fx_adjustment_line(bank_ledger.id, diff, functional, link=link),
                fx_adjustment_line(fx_account.id, -diff, functional, link=link),
            ]
        else:
            lines = [
                fx_adjustment_line(fx_account.id, -diff, functional, link=link),
                fx_adjustment_line(bank_ledger.id, diff, functional, link=link),
            ]

        journal = self.journals.post(
            JournalSourceType.FX_REVALUATION,
            lines,
            voucher_date=request.as_of_date,
            source_id=revaluation.id,
            remarks=request.remarks,
            extras={
                "spot_rate": str(request.spot_rate),
                "old_local_balance": str(figures.booked_local),
                "new_local_balance": str(figures.revalued_local),
            },
        )
        revaluation.journal_id = journal.id
        self.db.flush()

        logger.info(
            "Revaluation %s of %s as of %s: %s %s at %s, difference %s",
            journal.voucher_no, bank.code, request.as_of_date,
            figures.net_foreign, bank.currency, request.spot_rate, diff,
        )
        return self._response(RevaluationStatus.POSTED, revaluation, journal)

    def _response(self, status, revaluation: FXRevaluation, journal=None) -> FXRevaluationResponse:
        if journal is None:
            journal = revaluation.journal
        return FXRevaluationResponse(
            status=status,
            bank_account_id=revaluation.bank_account_id,
            as_of_date=revaluation.as_of_date,
            currency=revaluation.currency,
            spot_rate=revaluation.spot_rate,
            net_foreign=revaluation.net_foreign,
            booked_local=revaluation.booked_local,
            revalued_local=revaluation.revalued_local,
            diff_local=revaluation.diff_local,
            revaluation_id=revaluation.id,
            journal=GLJournalResponse.model_validate(journal) if journal else None,
        )
