"""
Pydantic schemas for chart of accounts administration.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from gl_posting.models.enums import AccountType, NormalBalance


class COAAccountCreate(BaseModel):
    """Request to create a chart of accounts node."""
    code: str = Field(min_length=1, max_length=40)
    name: str = Field(min_length=1, max_length=120)
    account_type: AccountType
    normal_balance: NormalBalance = NormalBalance.DEBIT
    parent_id: int | None = None
    is_leaf: bool = True
    allow_manual_post: bool = True
    is_active: bool = True


class COAAccountResponse(BaseModel):
    id: int
    code: str
    name: str
    account_type: AccountType
    normal_balance: NormalBalance
    parent_id: int | None
    is_leaf: bool
    allow_manual_post: bool
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
