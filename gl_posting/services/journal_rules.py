"""
Pure journal rules.

Everything needed to decide whether a set of lines may become a
journal, with no database access: per-line normalization and
checks, subledger link kinds, and the balance invariant

    round2(sum(line.local_amount)) == 0

Services build LineDraft objects, call validate_lines(), and only
then mint a voucher number and persist.
"""

from decimal import Decimal

from pydantic import BaseModel

from gl_posting.exceptions import UnbalancedJournalError, ValidationError
from gl_posting.models.enums import JournalSourceType, LineKind, SOURCE_LINK_KINDS
from gl_posting.money import ZERO, round2, local_amount, sum_rounded, to_decimal
from gl_posting.schemas.links import SubledgerLink

ONE = Decimal("1")


class LineDraft(BaseModel):
    """A GL line before it is persisted. account_id is already resolved."""
    account_id: int
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    currency: str
    exchange_rate: Decimal = ONE
    local_amount: Decimal | None = None
    line_kind: LineKind = LineKind.STANDARD
    link: SubledgerLink | None = None


def fx_adjustment_line(
    account_id: int,
    amount_local: Decimal,
    functional_currency: str,
    link: SubledgerLink | None = None,
) -> LineDraft:
    """
    Build a functional-currency adjustment line.

    Positive amount_local sits on the debit side, negative on the
    credit side. Debit and credit stay zero.
    """
    return LineDraft(
        account_id=account_id,
        currency=functional_currency,
        exchange_rate=ONE,
        local_amount=round2(amount_local),
        line_kind=LineKind.FX_ADJUSTMENT,
        link=link,
    )


def normalize_line(line: LineDraft, functional_currency: str) -> LineDraft:
    """
    Round a line and derive its local amount, checking its shape.

    Returns a new LineDraft; the input is not modified.
    """
    currency = (line.currency or "").strip().upper()
    if not currency:
        raise ValidationError("Line currency must not be empty")

    rate = to_decimal(line.exchange_rate)
    if rate < 0:
        raise ValidationError(f"Exchange rate must be >= 0, got {rate}")

    debit = round2(line.debit)
    credit = round2(line.credit)
    if debit < 0 or credit < 0:
        raise ValidationError("Debit and credit must not be negative")

    if line.line_kind == LineKind.FX_ADJUSTMENT:
        local = round2(line.local_amount if line.local_amount is not None else ZERO)
        if debit != ZERO or credit != ZERO:
            raise ValidationError("FX adjustment lines carry no debit or credit")
        if local == ZERO:
            raise ValidationError("FX adjustment lines need a non-zero local amount")
        if currency != functional_currency.upper() or rate != ONE:
            raise ValidationError(
                f"FX adjustment lines must be in {functional_currency} at rate 1"
            )
    else:
        if (debit > 0) == (credit > 0):
            raise ValidationError(
                "Exactly one of debit or credit must be positive on a line "
                f"(debit={debit}, credit={credit})"
            )
        local = local_amount(debit, credit, rate)
        if line.local_amount is not None and round2(line.local_amount) != local:
            raise ValidationError(
                f"Local amount {round2(line.local_amount)} does not match "
                f"(debit - credit) * exchange_rate = {local}"
            )

    return line.model_copy(update={
        "debit": debit,
        "credit": credit,
        "currency": currency,
        "exchange_rate": rate,
        "local_amount": local,
    })


def check_links(source_type: JournalSourceType, lines: list[LineDraft]) -> None:
    """Each journal source type admits only its own subledger link kind."""
    allowed = SOURCE_LINK_KINDS[source_type]
    for number, line in enumerate(lines, start=1):
        if line.link is None:
            continue
        if line.link.kind not in {kind.value for kind in allowed}:
            raise ValidationError(
                f"Line {number}: a {line.link.kind} link is not allowed "
                f"on a {source_type.value} journal"
            )


def check_balance(lines: list[LineDraft]) -> Decimal:
    """
    Enforce the zero-sum rule on normalized lines.

    Returns the (zero) total so callers can log it; raises
    UnbalancedJournalError otherwise. Nothing is written either way.
    """
    total = sum_rounded(line.local_amount for line in lines)
    if total != ZERO:
        raise UnbalancedJournalError(total)
    return total


def validate_lines(
    source_type: JournalSourceType,
    lines: list[LineDraft],
    functional_currency: str,
) -> list[LineDraft]:
    """Normalize every line, then check links and balance."""
    if not lines:
        raise ValidationError("A journal needs at least one line")

    normalized = [normalize_line(line, functional_currency) for line in lines]
    check_links(source_type, normalized)
    check_balance(normalized)
    return normalized
