"""
Journal service: the only writer of GL journals.

Every journal, whether a manual entry, a subledger posting, a
transfer, a revaluation or a reversal, goes through post(). It
enforces, in this order:
1. Every line's account exists and is postable
2. Every line is well-formed and carries an allowed link kind
   pointing at a record that exists
3. The lines balance in functional currency
4. Only then is a voucher number minted and the journal flushed

A failure at any step raises before anything is written. The
caller owns the transaction boundary (see models.base.unit_of_work).
"""

import logging
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from gl_posting.config import get_settings
from gl_posting.exceptions import ConflictError, NotFoundError, ValidationError
from gl_posting.models.bank_transfer import BankTransfer
from gl_posting.models.enums import JournalSourceType, LineKind, SubledgerKind
from gl_posting.models.gl_journal import GLJournal, GLLine
from gl_posting.models.fx_revaluation import FXRevaluation
from gl_posting.models.subledger import APTransaction, ARTransaction
from gl_posting.money import ZERO, round2, sum_rounded
from gl_posting.schemas.journal import (
    AccountLedgerLineResponse,
    GLLineResponse,
    JournalCreate,
)
from gl_posting.schemas.links import link_ref_id
from gl_posting.services.coa_service import COAService
from gl_posting.services.journal_rules import LineDraft, validate_lines
from gl_posting.services.sequence_service import SequenceService

logger = logging.getLogger(__name__)

LINK_MODELS = {
    SubledgerKind.AR: ARTransaction,
    SubledgerKind.AP: APTransaction,
    SubledgerKind.BANK_TRANSFER: BankTransfer,
    SubledgerKind.FX_REVALUATION: FXRevaluation,
}


class JournalService:

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()
        self.coa = COAService(db)
        self.sequences = SequenceService(db)

    def create_journal(self, request: JournalCreate) -> GLJournal:
        """
        Post a journal from caller-supplied lines.

        Lines reference accounts by id or code. REVERSAL journals
        can only be created through reverse_journal().
        """
        if request.source_type == JournalSourceType.REVERSAL:
            raise ValidationError(
                "Reversal journals are created by reversing an existing journal"
            )

        drafts = []
        for line in request.lines:
            account = self.coa.resolve(line.account_ref)
            drafts.append(LineDraft(
                account_id=account.id,
                debit=line.debit,
                credit=line.credit,
                currency=line.currency,
                exchange_rate=line.exchange_rate,
                local_amount=line.local_amount,
                link=line.link,
            ))

        return self.post(
            request.source_type,
            drafts,
            voucher_date=request.voucher_date,
            source_id=request.source_id,
            remarks=request.remarks,
        )

    def post(
        self,
        source_type: JournalSourceType,
        lines: list[LineDraft],
        voucher_date: date | None = None,
        source_id: int | None = None,
        remarks: str | None = None,
        extras: dict | None = None,
        reversal_of_id: int | None = None,
    ) -> GLJournal:
        """
        Validate lines, mint a voucher number, and flush the journal.

        Raises ValidationError (or a subclass) for any bad line or an
        unbalanced total, and NotFoundError for an unknown account or
        link target, before the voucher number is minted.
        """
        try:
            for line in lines:
                self.coa.require_postable(line.account_id)
            normalized = validate_lines(
                source_type, lines, self.settings.FUNCTIONAL_CURRENCY
            )
            for line in normalized:
                if line.link is not None:
                    self.require_link_target(line.link)
        except (ValidationError, NotFoundError) as e:
            logger.warning(
                "Rejected %s journal: %s", source_type.value, e.message
            )
            raise

        journal = GLJournal(
            voucher_no=self.sequences.next_voucher_no(),
            voucher_date=voucher_date or date.today(),
            source_type=source_type,
            source_id=source_id,
            reversal_of_id=reversal_of_id,
            remarks=remarks,
            extras=extras,
        )
        for line_no, line in enumerate(normalized, start=1):
            link = line.link
            journal.lines.append(GLLine(
                line_no=line_no,
                account_id=line.account_id,
                debit=line.debit,
                credit=line.credit,
                currency=line.currency,
                exchange_rate=line.exchange_rate,
                local_amount=line.local_amount,
                line_kind=line.line_kind,
                link_kind=SubledgerKind(link.kind) if link else None,
                link_ref_id=link_ref_id(link) if link else None,
                link_line_num=link.line_num if link else None,
            ))

        self.db.add(journal)
        self.db.flush()

        logger.info(
            "Posted journal %s (%s, %d lines)",
            journal.voucher_no, source_type.value, len(normalized),
        )
        return journal

    def require_link_target(self, link) -> None:
        """Raise NotFoundError unless the record a link points at exists."""
        model = LINK_MODELS[SubledgerKind(link.kind)]
        if self.db.get(model, link_ref_id(link)) is None:
            raise NotFoundError(
                f"{link.kind} record {link_ref_id(link)} referenced by a "
                f"journal line not found"
            )

    def get_journal(self, journal_id: int) -> GLJournal:
        journal = self.db.get(GLJournal, journal_id)
        if journal is None:
            raise NotFoundError(f"Journal {journal_id} not found")
        return journal

    def get_journal_by_voucher(self, voucher_no: str) -> GLJournal:
        journal = self.db.execute(
            select(GLJournal).where(GLJournal.voucher_no == voucher_no)
        ).scalar_one_or_none()
        if journal is None:
            raise NotFoundError(f"Journal {voucher_no} not found")
        return journal

    def get_lines_by_account(
        self,
        account_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
        currency: str | None = None,
    ) -> list[GLLine]:
        """
        Return the lines posted to an account, oldest first.

        Dates filter on the journal's voucher date, both ends inclusive.
        """
        query = (
            select(GLLine)
            .join(GLJournal, GLLine.journal_id == GLJournal.id)
            .where(GLLine.account_id == account_id)
        )
        if date_from is not None:
            query = query.where(GLJournal.voucher_date >= date_from)
        if date_to is not None:
            query = query.where(GLJournal.voucher_date <= date_to)
        if currency is not None:
            query = query.where(GLLine.currency == currency)

        lines = self.db.execute(
            query.order_by(GLJournal.voucher_date, GLJournal.id, GLLine.line_no)
        ).scalars().all()
        return list(lines)

    def get_account_ledger(
        self,
        account_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[AccountLedgerLineResponse]:
        """Lines posted to an account with a running local balance."""
        self.coa.get_account(account_id)

        balance = ZERO
        if date_from is not None:
            earlier = self.get_lines_by_account(
                account_id, date_to=date_from - timedelta(days=1)
            )
            balance = sum_rounded(line.local_amount for line in earlier)

        ledger = []
        for line in self.get_lines_by_account(account_id, date_from, date_to):
            balance = round2(balance + line.local_amount)
            ledger.append(AccountLedgerLineResponse(
                **GLLineResponse.model_validate(line).model_dump(),
                voucher_no=line.journal.voucher_no,
                voucher_date=line.journal.voucher_date,
                balance=balance,
            ))
        return ledger

    def reverse_journal(
        self,
        journal_id: int,
        voucher_date: date | None = None,
        remarks: str | None = None,
    ) -> GLJournal:
        """
        Post a journal that cancels an existing one.

        Each line's debit and credit are swapped and its local amount
        negated; subledger links are kept so drill-down still works.
        The original journal is left untouched. A journal can be
        reversed once, and a reversal cannot be reversed.
        """
        original = self.get_journal(journal_id)

        if original.source_type == JournalSourceType.REVERSAL:
            raise ValidationError(
                f"Journal {original.voucher_no} is a reversal and cannot be reversed"
            )

        already = self.db.execute(
            select(GLJournal).where(GLJournal.reversal_of_id == original.id)
        ).scalar_one_or_none()
        if already:
            raise ConflictError(
                f"Journal {original.voucher_no} was already reversed "
                f"by {already.voucher_no}"
            )

        drafts = []
        for line in original.lines:
            if line.line_kind == LineKind.FX_ADJUSTMENT:
                drafts.append(LineDraft(
                    account_id=line.account_id,
                    currency=line.currency,
                    exchange_rate=line.exchange_rate,
                    local_amount=ZERO - line.local_amount,
                    line_kind=LineKind.FX_ADJUSTMENT,
                    link=line.link,
                ))
            else:
                drafts.append(LineDraft(
                    account_id=line.account_id,
                    debit=line.credit,
                    credit=line.debit,
                    currency=line.currency,
                    exchange_rate=line.exchange_rate,
                    link=line.link,
                ))

        return self.post(
            JournalSourceType.REVERSAL,
            drafts,
            voucher_date=voucher_date,
            source_id=original.source_id,
            remarks=remarks or f"Reversal of {original.voucher_no}",
            reversal_of_id=original.id,
        )
