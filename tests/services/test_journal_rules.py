"""
Tests for the pure journal rules.

No database: these exercise line normalization, link kinds and
the balance invariant directly.
"""

from decimal import Decimal

import pytest

from gl_posting.exceptions import UnbalancedJournalError, ValidationError
from gl_posting.models.enums import JournalSourceType, LineKind
from gl_posting.money import ZERO
from gl_posting.schemas.links import APLink, ARLink, BankTransferLink
from gl_posting.services.journal_rules import (
    LineDraft,
    check_balance,
    check_links,
    fx_adjustment_line,
    normalize_line,
    validate_lines,
)

INR = "INR"


def debit(account_id, amount, currency="INR", rate="1", **kwargs):
    return LineDraft(
        account_id=account_id, debit=Decimal(amount), currency=currency,
        exchange_rate=Decimal(rate), **kwargs,
    )


def credit(account_id, amount, currency="INR", rate="1", **kwargs):
    return LineDraft(
        account_id=account_id, credit=Decimal(amount), currency=currency,
        exchange_rate=Decimal(rate), **kwargs,
    )


class TestNormalizeLine:

    def test_derives_local_amount(self):
        line = normalize_line(debit(1, "1000", "USD", "75"), INR)
        assert line.local_amount == Decimal("75000.00")
        assert line.debit == Decimal("1000.00")
        assert line.credit == ZERO

    def test_credit_local_is_negative(self):
        line = normalize_line(credit(1, "1000", "USD", "75"), INR)
        assert line.local_amount == Decimal("-75000.00")

    def test_supplied_local_amount_is_rounded(self):
        line = normalize_line(
            debit(1, "10", "USD", "75.0004", local_amount=Decimal("750.004")), INR
        )
        assert line.local_amount == Decimal("750.00")

    def test_supplied_local_amount_must_match(self):
        with pytest.raises(ValidationError, match="does not match"):
            normalize_line(debit(1, "10", "USD", "75", local_amount=Decimal("700")), INR)

    def test_currency_is_upper_cased(self):
        assert normalize_line(debit(1, "5", "usd", "80"), INR).currency == "USD"

    def test_blank_currency_rejected(self):
        with pytest.raises(ValidationError, match="currency"):
            normalize_line(debit(1, "5", "  "), INR)

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError, match="Exchange rate"):
            normalize_line(debit(1, "5", "USD", "-1"), INR)

    def test_both_sides_positive_rejected(self):
        line = LineDraft(
            account_id=1, debit=Decimal("5"), credit=Decimal("5"), currency=INR
        )
        with pytest.raises(ValidationError, match="Exactly one"):
            normalize_line(line, INR)

    def test_both_sides_zero_rejected(self):
        with pytest.raises(ValidationError, match="Exactly one"):
            normalize_line(LineDraft(account_id=1, currency=INR), INR)

    def test_amount_rounding_to_zero_rejected(self):
        with pytest.raises(ValidationError):
            normalize_line(debit(1, "0.004"), INR)

    def test_negative_debit_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            normalize_line(debit(1, "-5"), INR)

    def test_input_is_not_modified(self):
        original = debit(1, "10.005", "USD", "2")
        normalize_line(original, INR)
        assert original.local_amount is None
        assert original.debit == Decimal("10.005")


class TestFXAdjustmentLines:

    def test_valid_adjustment_line(self):
        line = normalize_line(fx_adjustment_line(9, Decimal("-7000"), INR), INR)
        assert line.line_kind == LineKind.FX_ADJUSTMENT
        assert line.debit == ZERO and line.credit == ZERO
        assert line.local_amount == Decimal("-7000.00")

    def test_zero_adjustment_rejected(self):
        with pytest.raises(ValidationError, match="non-zero"):
            normalize_line(fx_adjustment_line(9, ZERO, INR), INR)

    def test_adjustment_must_be_functional_currency(self):
        line = fx_adjustment_line(9, Decimal("10"), "USD")
        with pytest.raises(ValidationError, match="INR at rate 1"):
            normalize_line(line, INR)

    def test_adjustment_cannot_carry_amounts(self):
        line = fx_adjustment_line(9, Decimal("10"), INR).model_copy(
            update={"debit": Decimal("1")}
        )
        with pytest.raises(ValidationError, match="no debit or credit"):
            normalize_line(line, INR)


class TestBalance:

    def test_balanced_lines_pass(self):
        lines = validate_lines(
            JournalSourceType.MANUAL,
            [debit(1, "1000", "USD", "75"), credit(2, "75000")],
            INR,
        )
        assert sum(line.local_amount for line in lines) == ZERO

    def test_unbalanced_lines_rejected(self):
        with pytest.raises(UnbalancedJournalError) as exc_info:
            validate_lines(
                JournalSourceType.MANUAL,
                [debit(1, "100"), credit(2, "99.99")],
                INR,
            )
        assert exc_info.value.total_local == Decimal("0.01")
        assert exc_info.value.code == "UNBALANCED_JOURNAL"

    def test_cross_currency_lines_balance_in_local(self):
        lines = validate_lines(
            JournalSourceType.MANUAL,
            [
                debit(1, "800", "EUR", "85"),
                credit(2, "1000", "USD", "75"),
                fx_adjustment_line(3, Decimal("7000"), INR),
            ],
            INR,
        )
        assert [line.local_amount for line in lines] == [
            Decimal("68000.00"), Decimal("-75000.00"), Decimal("7000.00"),
        ]

    def test_rounding_drift_does_not_unbalance(self):
        # 3 x 33.333 rounds to 3 x 33.33 on one side, 99.99 on the other
        lines = [
            debit(1, "33.333"), debit(1, "33.333"), debit(1, "33.333"),
            credit(2, "99.99"),
        ]
        validate_lines(JournalSourceType.MANUAL, lines, INR)

    def test_check_balance_returns_zero(self):
        lines = [normalize_line(debit(1, "5"), INR), normalize_line(credit(2, "5"), INR)]
        assert check_balance(lines) == ZERO

    def test_empty_journal_rejected(self):
        with pytest.raises(ValidationError, match="at least one line"):
            validate_lines(JournalSourceType.MANUAL, [], INR)


class TestLinks:

    def test_matching_link_kind_allowed(self):
        link = ARLink(txn_id=4)
        check_links(
            JournalSourceType.AR_RECEIPT,
            [debit(1, "5", link=link), credit(2, "5", link=link)],
        )

    def test_wrong_link_kind_rejected(self):
        with pytest.raises(ValidationError, match="AP link is not allowed"):
            check_links(JournalSourceType.AR_RECEIPT, [debit(1, "5", link=APLink(txn_id=4))])

    def test_manual_journal_takes_no_links(self):
        with pytest.raises(ValidationError):
            check_links(JournalSourceType.MANUAL, [debit(1, "5", link=ARLink(txn_id=1))])

    def test_reversal_keeps_any_link(self):
        check_links(
            JournalSourceType.REVERSAL,
            [
                debit(1, "5", link=BankTransferLink(transfer_id=2)),
                credit(2, "5", link=ARLink(txn_id=3)),
            ],
        )

    def test_link_parsed_from_dict(self):
        line = LineDraft(
            account_id=1, debit=Decimal("1"), currency=INR,
            link={"kind": "BANK_TRANSFER", "transfer_id": 7, "line_num": 1},
        )
        assert isinstance(line.link, BankTransferLink)
        assert line.link.transfer_id == 7
