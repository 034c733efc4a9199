"""
Posting service: turns business events into balanced journals.

Each operation writes its subledger record and its journal in the
caller's unit of work. Nothing here commits; if any step raises,
the caller rolls back and neither record survives.

    AR receipt     Dr bank ledger   amount / +L    Cr AR             amount / -L
    AP payment     Dr AP            amount / +L    Cr bank ledger    amount / -L
    Bank transfer  Dr destination   amountTo       Cr source         amountFrom
                   plus an FX gain (Cr) or FX loss (Dr) adjustment line
                   when the two local values differ
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from gl_posting.config import get_settings
from gl_posting.exceptions import ValidationError
from gl_posting.models.bank_transfer import BankTransfer
from gl_posting.models.enums import JournalSourceType, SubledgerSourceType
from gl_posting.models.gl_journal import GLJournal
from gl_posting.models.subledger import APTransaction, ARTransaction
from gl_posting.money import ZERO, round2
from gl_posting.schemas.links import APLink, ARLink, BankTransferLink
from gl_posting.schemas.posting import (
    APPaymentRequest,
    ARReceiptRequest,
    BankTransferRequest,
)
from gl_posting.services.bank_account_service import BankAccountService
from gl_posting.services.coa_service import COAService
from gl_posting.services.journal_rules import LineDraft, fx_adjustment_line
from gl_posting.services.journal_service import JournalService

logger = logging.getLogger(__name__)


class PostingService:

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()
        self.coa = COAService(db)
        self.banks = BankAccountService(db)
        self.journals = JournalService(db)

    def post_ar_receipt(
        self, request: ARReceiptRequest
    ) -> tuple[ARTransaction, GLJournal]:
        """
        Record a customer receipt against a sales invoice.

        The bank account must be active and in the receipt currency.
        """
        bank = self.banks.require_usable(request.bank_account_id, request.currency)
        bank_ledger = self.coa.require_postable(bank.ledger_account_id)
        ar_account = self.coa.require_postable(self.settings.AR_ACCOUNT_CODE)

        amount = round2(request.amount)
        local = round2(amount * request.exchange_rate)
        txn_date = request.txn_date or date.today()

        txn = ARTransaction(
            txn_date=txn_date,
            source_type=SubledgerSourceType.SALES,
            source_id=request.invoice_id,
            customer_id=request.customer_id,
            amount=amount,
            currency=request.currency,
            exchange_rate=request.exchange_rate,
            local_amount=local,
            bank_account_id=bank.id,
            remarks=request.remarks,
        )
        self.db.add(txn)
        self.db.flush()

        link = ARLink(txn_id=txn.id)
        journal = self.journals.post(
            JournalSourceType.AR_RECEIPT,
            [
                LineDraft(
                    account_id=bank_ledger.id,
                    debit=amount,
                    currency=request.currency,
                    exchange_rate=request.exchange_rate,
                    link=link,
                ),
                LineDraft(
                    account_id=ar_account.id,
                    credit=amount,
                    currency=request.currency,
                    exchange_rate=request.exchange_rate,
                    link=link,
                ),
            ],
            voucher_date=txn_date,
            source_id=txn.id,
            remarks=request.remarks,
        )

        txn.journal_id = journal.id
        self.db.flush()
        logger.info(
            "AR receipt %s: customer %s paid %s %s on invoice %s",
            journal.voucher_no, request.customer_id, amount,
            request.currency, request.invoice_id,
        )
        return txn, journal

    def post_ap_payment(
        self, request: APPaymentRequest
    ) -> tuple[APTransaction, GLJournal]:
        """Record a supplier payment against a purchase invoice."""
        bank = self.banks.require_usable(request.bank_account_id, request.currency)
        bank_ledger = self.coa.require_postable(bank.ledger_account_id)
        ap_account = self.coa.require_postable(self.settings.AP_ACCOUNT_CODE)

        amount = round2(request.amount)
        local = round2(amount * request.exchange_rate)
        txn_date = request.txn_date or date.today()

        txn = APTransaction(
            txn_date=txn_date,
            source_type=SubledgerSourceType.PURCHASE,
            source_id=request.invoice_id,
            supplier_id=request.supplier_id,
            amount=amount,
            currency=request.currency,
            exchange_rate=request.exchange_rate,
            local_amount=local,
            bank_account_id=bank.id,
            remarks=request.remarks,
        )
        self.db.add(txn)
        self.db.flush()

        link = APLink(txn_id=txn.id)
        journal = self.journals.post(
            JournalSourceType.AP_PAYMENT,
            [
                LineDraft(
                    account_id=ap_account.id,
                    debit=amount,
                    currency=request.currency,
                    exchange_rate=request.exchange_rate,
                    link=link,
                ),
                LineDraft(
                    account_id=bank_ledger.id,
                    credit=amount,
                    currency=request.currency,
                    exchange_rate=request.exchange_rate,
                    link=link,
                ),
            ],
            voucher_date=txn_date,
            source_id=txn.id,
            remarks=request.remarks,
        )

        txn.journal_id = journal.id
        self.db.flush()
        logger.info(
            "AP payment %s: paid supplier %s %s %s on invoice %s",
            journal.voucher_no, request.supplier_id, amount,
            request.currency, request.invoice_id,
        )
        return txn, journal

    def post_bank_transfer(
        self, request: BankTransferRequest
    ) -> tuple[BankTransfer, GLJournal]:
        """
        Move money between two of our bank accounts.

        Each side is valued at its own rate. When the local values
        differ, the difference is booked to FX gain or FX loss at the
        moment of transfer. This includes same-currency transfers
        entered at two different rates.
        """
        if request.from_bank_account_id == request.to_bank_account_id:
            raise ValidationError("Source and destination bank accounts must differ")

        source = self.banks.require_usable(
            request.from_bank_account_id, request.currency_from
        )
        destination = self.banks.require_usable(
            request.to_bank_account_id, request.currency_to
        )
        source_ledger = self.coa.require_postable(source.ledger_account_id)
        destination_ledger = self.coa.require_postable(destination.ledger_account_id)

        amount_from = round2(request.amount_from)
        amount_to = round2(request.amount_to)
        local_from = round2(amount_from * request.exchange_rate_from)
        local_to = round2(amount_to * request.exchange_rate_to)
        diff = round2(local_to - local_from)

        if diff > ZERO:
            fx_account = self.coa.require_postable(self.settings.FX_GAIN_ACCOUNT_CODE)
        elif diff < ZERO:
            fx_account = self.coa.require_postable(self.settings.FX_LOSS_ACCOUNT_CODE)
        else:
            fx_account = None

        transfer_date = request.transfer_date or date.today()
        transfer = BankTransfer(
            transfer_date=transfer_date,
            from_bank_account_id=source.id,
            to_bank_account_id=destination.id,
            amount_from=amount_from,
            currency_from=request.currency_from,
            exchange_rate_from=request.exchange_rate_from,
            amount_to=amount_to,
            currency_to=request.currency_to,
            exchange_rate_to=request.exchange_rate_to,
            local_from=local_from,
            local_to=local_to,
            diff_local=diff,
            remarks=request.remarks,
        )
        self.db.add(transfer)
        self.db.flush()

        link = BankTransferLink(transfer_id=transfer.id)
        lines = [
            LineDraft(
                account_id=destination_ledger.id,
                debit=amount_to,
                currency=request.currency_to,
                exchange_rate=request.exchange_rate_to,
                link=link,
            ),
            LineDraft(
                account_id=source_ledger.id,
                credit=amount_from,
                currency=request.currency_from,
                exchange_rate=request.exchange_rate_from,
                link=link,
            ),
        ]
        if fx_account is not None:
            # Gain is credited (negative local), loss is debited (positive local)
            lines.append(fx_adjustment_line(
                fx_account.id, -diff, self.settings.FUNCTIONAL_CURRENCY, link=link
            ))

        journal = self.journals.post(
            JournalSourceType.BANK_TRANSFER,
            lines,
            voucher_date=transfer_date,
            source_id=transfer.id,
            remarks=request.remarks,
        )

        transfer.journal_id = journal.id
        self.db.flush()
        logger.info(
            "Bank transfer %s: %s %s -> %s %s, FX difference %s",
            journal.voucher_no, amount_from, request.currency_from,
            amount_to, request.currency_to, diff,
        )
        return transfer, journal
