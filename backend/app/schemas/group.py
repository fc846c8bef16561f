"""
StickyBoard Backend — Group & Membership Schemas
=================================================

What:  Request and response models for /api/groups and /api/accounts/{id}/groups.

Naming note:
    The membership table stores `account_id`; the wire format calls the same
    value `user_id`, which is what the board front end sends and reads.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class GroupCreate(BaseModel):
    group_name: str = Field(default="", max_length=100)
    created_by: int = Field(description="Account id of the creator; becomes the owner")


class GroupResponse(BaseModel):
    id: int
    group_name: str
    created_by: int
    created_at: datetime

    model_config = {"from_attributes": True}


class GroupWithRoleResponse(GroupResponse):
    """A group as seen by one account, annotated with that account's role."""
    role: str = Field(description="owner or member")


class GroupListResponse(BaseModel):
    groups: List[GroupWithRoleResponse]


class JoinGroupRequest(BaseModel):
    user_id: int = Field(description="Account joining the group")
    role: Optional[str] = Field(default=None, description="owner or member (default member)")


class MembershipResponse(BaseModel):
    id: int
    group_id: int
    user_id: int
    role: str
    joined_at: datetime


class MemberListResponse(BaseModel):
    members: List[MembershipResponse]
