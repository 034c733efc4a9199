"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from gl_posting.models.base import Base
from gl_posting.models.enums import (
    AccountType,
    NormalBalance,
    JournalSourceType,
    SubledgerKind,
    SubledgerSourceType,
    LineKind,
    BankAccountType,
)
from gl_posting.models.coa_account import COAAccount
from gl_posting.models.sequence_counter import SequenceCounter
from gl_posting.models.bank_account import BankAccount
from gl_posting.models.gl_journal import GLJournal, GLLine
from gl_posting.models.subledger import ARTransaction, APTransaction
from gl_posting.models.bank_transfer import BankTransfer
from gl_posting.models.fx_revaluation import FXRevaluation

__all__ = [
    "Base",
    "AccountType",
    "NormalBalance",
    "JournalSourceType",
    "SubledgerKind",
    "SubledgerSourceType",
    "LineKind",
    "BankAccountType",
    "COAAccount",
    "SequenceCounter",
    "BankAccount",
    "GLJournal",
    "GLLine",
    "ARTransaction",
    "APTransaction",
    "BankTransfer",
    "FXRevaluation",
]
