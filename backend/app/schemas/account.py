"""
StickyBoard Backend — Account Schemas
======================================

What:  Request and response models for /api/accounts.

The request fields default to empty strings so that a missing field reaches
AccountService and is reported as a ValidationError naming that field,
instead of FastAPI's generic schema error.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    name: str = Field(default="", max_length=100, description="Display name")
    email: str = Field(default="", max_length=255, description="Unique email address")
    password: str = Field(default="", description="Plain password (min 6 chars); stored hashed")


class AccountResponse(BaseModel):
    """Public view of an account. The password hash is never exposed."""
    id: int
    name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AccountListResponse(BaseModel):
    accounts: List[AccountResponse] = Field(description="All accounts ordered by id")
