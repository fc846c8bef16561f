"""
ORM models, imported together so every table registers on Base.metadata.
"""

from app.models.account import Account
from app.models.group import Group, Membership
from app.models.note import Note
from app.models.summary import Summary

__all__ = ["Account", "Group", "Membership", "Note", "Summary"]
