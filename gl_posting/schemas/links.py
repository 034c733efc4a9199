"""
Subledger link: the back-reference a GL line carries to the record
it was posted for.

A discriminated union on ``kind``, so each variant carries its own
strongly-typed reference and a link can't be half AR, half transfer.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class ARLink(BaseModel):
    kind: Literal["AR"] = "AR"
    txn_id: int
    line_num: int = Field(default=1, ge=1)


class APLink(BaseModel):
    kind: Literal["AP"] = "AP"
    txn_id: int
    line_num: int = Field(default=1, ge=1)


class BankTransferLink(BaseModel):
    kind: Literal["BANK_TRANSFER"] = "BANK_TRANSFER"
    transfer_id: int
    line_num: int = Field(default=1, ge=1)


class FXRevaluationLink(BaseModel):
    kind: Literal["FX_REVALUATION"] = "FX_REVALUATION"
    revaluation_id: int
    line_num: int = Field(default=1, ge=1)


SubledgerLink = Annotated[
    Union[ARLink, APLink, BankTransferLink, FXRevaluationLink],
    Field(discriminator="kind"),
]


def link_ref_id(link) -> int:
    """Return the record id a link points at, whatever its kind."""
    if isinstance(link, (ARLink, APLink)):
        return link.txn_id
    if isinstance(link, BankTransferLink):
        return link.transfer_id
    return link.revaluation_id
