"""
StickyBoard Backend — Group & Membership SQLAlchemy Models
===========================================================

What:  ORM models for the `groups` table and the `group_users` link table.
How:   A Group is the sharing boundary of a board. A Membership row links one
       account to one group with a role (owner or member).

Invariants:
    - At most one membership per (group_id, account_id); enforced by the
      `uq_group_users_group_account` unique constraint. Joining twice updates
      the role of the existing row (see GroupService.join_group).
    - The creator of a group receives an owner membership in the same
      transaction that inserts the group.
    - Deleting a group cascades to its memberships and notes.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

ROLE_OWNER = "owner"
ROLE_MEMBER = "member"
VALID_ROLES = frozenset({ROLE_OWNER, ROLE_MEMBER})


class Group(Base):
    """A named board shared by its members."""

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    group_name: Mapped[str] = mapped_column(String(100), nullable=False)

    created_by: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
        comment="Account that created the group (its first owner)",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, group_name='{self.group_name}')>"


class Membership(Base):
    """
    Link between an account and a group.

    Query Patterns:
        - Groups of an account: WHERE account_id = :id (idx_group_users_account)
        - Members of a group:   WHERE group_id = :id (leading column of the unique key)
        - Membership check:     WHERE group_id = :g AND account_id = :a
    """

    __tablename__ = "group_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )

    account_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ROLE_MEMBER,
        server_default=text("'member'"),
        comment="owner or member",
    )

    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("group_id", "account_id", name="uq_group_users_group_account"),
        Index("idx_group_users_account", "account_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Membership(group_id={self.group_id}, account_id={self.account_id}, "
            f"role='{self.role}')>"
        )
