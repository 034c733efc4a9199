"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum


class AccountType(str, enum.Enum):
    """The five fundamental accounting categories."""
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"


class NormalBalance(str, enum.Enum):
    """Side on which an account's balance normally sits."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class JournalSourceType(str, enum.Enum):
    """The business event a GL journal was posted for."""
    AR_RECEIPT = "AR_RECEIPT"
    AP_PAYMENT = "AP_PAYMENT"
    BANK_TRANSFER = "BANK_TRANSFER"
    FX_REVALUATION = "FX_REVALUATION"
    MANUAL = "MANUAL"
    REVERSAL = "REVERSAL"


class SubledgerKind(str, enum.Enum):
    """Which subledger record a GL line points back to."""
    AR = "AR"
    AP = "AP"
    BANK_TRANSFER = "BANK_TRANSFER"
    FX_REVALUATION = "FX_REVALUATION"


class SubledgerSourceType(str, enum.Enum):
    """Kind of document a subledger transaction settles."""
    SALES = "SALES"
    PURCHASE = "PURCHASE"


class LineKind(str, enum.Enum):
    """
    STANDARD lines move an amount in the line currency.
    FX_ADJUSTMENT lines carry only a functional-currency value
    (debit = credit = 0) and are generated for FX gain/loss.
    """
    STANDARD = "STANDARD"
    FX_ADJUSTMENT = "FX_ADJUSTMENT"


class BankAccountType(str, enum.Enum):
    """Payment method behind a bank account."""
    CASH = "CASH"
    BANK = "BANK"
    UPI = "UPI"
    CRYPTO = "CRYPTO"
    WALLET = "WALLET"


# Journal source type -> the only subledger link kind its lines may carry.
# MANUAL journals carry no links; REVERSAL journals keep the links of the
# journal they reverse, whatever their kind.
SOURCE_LINK_KINDS: dict[JournalSourceType, set[SubledgerKind]] = {
    JournalSourceType.AR_RECEIPT: {SubledgerKind.AR},
    JournalSourceType.AP_PAYMENT: {SubledgerKind.AP},
    JournalSourceType.BANK_TRANSFER: {SubledgerKind.BANK_TRANSFER},
    JournalSourceType.FX_REVALUATION: {SubledgerKind.FX_REVALUATION},
    JournalSourceType.MANUAL: set(),
    JournalSourceType.REVERSAL: set(SubledgerKind),
}
