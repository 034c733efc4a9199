"""Business logic services."""

from gl_posting.services.coa_service import COAService
from gl_posting.services.sequence_service import SequenceService
from gl_posting.services.journal_service import JournalService
from gl_posting.services.bank_account_service import BankAccountService
from gl_posting.services.posting_service import PostingService
from gl_posting.services.revaluation import RevaluationService, compute_revaluation
from gl_posting.services.subledger_service import SubledgerService

__all__ = [
    "COAService",
    "SequenceService",
    "JournalService",
    "BankAccountService",
    "PostingService",
    "RevaluationService",
    "compute_revaluation",
    "SubledgerService",
]
