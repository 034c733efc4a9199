"""
Field types shared across request schemas.
"""

from typing import Annotated

from pydantic import AfterValidator, Field


def _normalize_currency(v: str) -> str:
    v = v.strip().upper()
    if not v:
        raise ValueError("currency must not be blank")
    return v


# ISO 4217 code or a crypto ticker, stored upper-case.
CurrencyCode = Annotated[
    str, Field(min_length=1, max_length=10), AfterValidator(_normalize_currency)
]
