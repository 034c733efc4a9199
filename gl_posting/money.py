"""
Money and amount utilities.

Every amount the engine compares or sums goes through round2() first.
Amounts are Decimal end to end; floats arriving from callers are
converted through their string form so 0.1 stays 0.1.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from gl_posting.exceptions import ValidationError

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Convert an int, float, str or Decimal into a Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value) -> Decimal:
    """
    Round to 2 decimals, halves away from zero.

    Raises ValidationError for a value too large to carry 2 decimals
    in the default decimal context.
    """
    try:
        return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"Amount {value} is out of range")


def local_amount(debit, credit, exchange_rate) -> Decimal:
    """Signed functional-currency value of a line: (debit - credit) * rate."""
    return round2((to_decimal(debit) - to_decimal(credit)) * to_decimal(exchange_rate))


def sum_rounded(values) -> Decimal:
    """Sum amounts after rounding each one, then round the total."""
    return round2(sum((round2(v) for v in values), ZERO))


def is_zero(value) -> bool:
    return round2(value) == ZERO
