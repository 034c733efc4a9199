"""
Tests for the money utilities.

round2 is what every comparison and sum in the engine goes
through, so its rounding mode matters.
"""

from decimal import Decimal

import pytest

from gl_posting.exceptions import ValidationError
from gl_posting.money import ZERO, is_zero, local_amount, round2, sum_rounded, to_decimal


class TestRound2:

    @pytest.mark.parametrize("value, expected", [
        ("1.005", "1.01"),
        ("-1.005", "-1.01"),
        ("2.344", "2.34"),
        ("-2.345", "-2.35"),
        ("100", "100.00"),
        ("0.004", "0.00"),
    ])
    def test_rounds_half_away_from_zero(self, value, expected):
        assert round2(Decimal(value)) == Decimal(expected)

    def test_float_goes_through_its_string_form(self):
        # Decimal(2.675) is 2.67499999..., the string form is 2.675
        assert round2(2.675) == Decimal("2.68")
        assert round2(0.1 + 0.2) == Decimal("0.30")

    @pytest.mark.parametrize("value", ["1.005", "-7.125", "0", "123456.789", 2.675, 3])
    def test_idempotent(self, value):
        once = round2(value)
        assert round2(once) == once

    def test_int_and_str_inputs(self):
        assert round2(3) == Decimal("3.00")
        assert round2("4.499") == Decimal("4.50")
        assert to_decimal("1.10") == Decimal("1.10")

    def test_out_of_range_raises_validation_error(self):
        with pytest.raises(ValidationError, match="out of range"):
            round2(Decimal("1e30"))
        with pytest.raises(ValidationError):
            local_amount(Decimal("1e26"), "0", "100")


class TestLocalAmount:

    def test_debit_is_positive(self):
        assert local_amount(Decimal("1000"), ZERO, Decimal("75")) == Decimal("75000.00")

    def test_credit_is_negative(self):
        assert local_amount(ZERO, Decimal("1000"), Decimal("75")) == Decimal("-75000.00")

    def test_rounded_after_conversion(self):
        assert local_amount(Decimal("10.01"), ZERO, Decimal("0.3333")) == Decimal("3.34")

    def test_zero_rate(self):
        assert local_amount(Decimal("10"), ZERO, ZERO) == ZERO


class TestSums:

    def test_sum_rounds_each_value(self):
        values = [Decimal("0.004"), Decimal("0.004"), Decimal("0.004")]
        assert sum_rounded(values) == ZERO

    def test_empty_sum_is_zero(self):
        assert sum_rounded([]) == ZERO

    def test_is_zero(self):
        assert is_zero(Decimal("0.004"))
        assert not is_zero(Decimal("0.005"))
