"""
Read-side queries over the AR, AP and bank transfer subledgers.
"""

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from gl_posting.exceptions import NotFoundError
from gl_posting.models.bank_transfer import BankTransfer
from gl_posting.models.subledger import APTransaction, ARTransaction


class SubledgerService:

    def __init__(self, db: Session):
        self.db = db

    def get_ar_transaction(self, txn_id: int) -> ARTransaction:
        txn = self.db.get(ARTransaction, txn_id)
        if txn is None:
            raise NotFoundError(f"AR transaction {txn_id} not found")
        return txn

    def get_ap_transaction(self, txn_id: int) -> APTransaction:
        txn = self.db.get(APTransaction, txn_id)
        if txn is None:
            raise NotFoundError(f"AP transaction {txn_id} not found")
        return txn

    def get_bank_transfer(self, transfer_id: int) -> BankTransfer:
        transfer = self.db.get(BankTransfer, transfer_id)
        if transfer is None:
            raise NotFoundError(f"Bank transfer {transfer_id} not found")
        return transfer

    def list_ar_transactions(
        self,
        customer_id: int | None = None,
        invoice_id: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[ARTransaction]:
        """Return AR receipts, newest first."""
        query = select(ARTransaction)
        if customer_id is not None:
            query = query.where(ARTransaction.customer_id == customer_id)
        return self._list(ARTransaction, query, invoice_id, date_from, date_to)

    def list_ap_transactions(
        self,
        supplier_id: int | None = None,
        invoice_id: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[APTransaction]:
        """Return AP payments, newest first."""
        query = select(APTransaction)
        if supplier_id is not None:
            query = query.where(APTransaction.supplier_id == supplier_id)
        return self._list(APTransaction, query, invoice_id, date_from, date_to)

    def _list(self, model, query, invoice_id, date_from, date_to):
        if invoice_id is not None:
            query = query.where(model.source_id == invoice_id)
        if date_from is not None:
            query = query.where(model.txn_date >= date_from)
        if date_to is not None:
            query = query.where(model.txn_date <= date_to)
        query = query.order_by(model.txn_date.desc(), model.id.desc())
        return list(self.db.execute(query).scalars().all())
