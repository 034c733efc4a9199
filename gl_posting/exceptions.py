"""
Typed errors raised by the posting engine.

Every failure is one of three kinds: the request is invalid
(ValidationError), something it refers to does not exist
(NotFoundError), or it collides with data already recorded
(ConflictError). Each carries a machine-readable ``code`` and the
HTTP status the API layer answers with.

    GLError
    +-- ValidationError            422
    |   +-- UnbalancedJournalError
    |   +-- CurrencyMismatchError
    |   +-- AccountNotPostableError
    |   +-- InactiveBankAccountError
    +-- NotFoundError              404
    +-- ConflictError              409
        +-- DuplicateRevaluationError
"""

from decimal import Decimal


class GLError(Exception):
    """Base class for all posting engine errors."""

    code = "GL_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(GLError):
    code = "VALIDATION_ERROR"
    status_code = 422


class UnbalancedJournalError(ValidationError):
    code = "UNBALANCED_JOURNAL"

    def __init__(self, total_local: Decimal):
        super().__init__(
            f"Journal does not balance: sum of local amounts is {total_local}"
        )
        self.total_local = total_local


class CurrencyMismatchError(ValidationError):
    code = "CURRENCY_MISMATCH"


class AccountNotPostableError(ValidationError):
    code = "ACCOUNT_NOT_POSTABLE"


class InactiveBankAccountError(ValidationError):
    code = "BANK_ACCOUNT_INACTIVE"


class NotFoundError(GLError):
    code = "NOT_FOUND"
    status_code = 404


class ConflictError(GLError):
    code = "CONFLICT"
    status_code = 409


class DuplicateRevaluationError(ConflictError):
    code = "DUPLICATE_REVALUATION"
