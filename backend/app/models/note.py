"""
StickyBoard Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
How:   Each row is one sticky note on a group's board: free text, a color,
       and a 2D layout (x, y, width, height, z_index).
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design:
    - group_id: owning group; a note never moves to another group.
      ON DELETE CASCADE removes the board's notes with the group.
    - created_by: author account, nullable (notes may be posted anonymously
      and survive the removal of their author)
    - color: normalized hex string (#RRGGBB, upper case)
    - z_index: paint order on the board; lists are sorted by (z_index, id)
    - updated_at: bumped on every content or position change

    Index on (group_id, z_index):
        Serves the board query "all notes of a group in paint order".
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

DEFAULT_COLOR = "#FFFF88"
DEFAULT_WIDTH = 200.0
DEFAULT_HEIGHT = 150.0
DEFAULT_Z_INDEX = 0


class Note(Base):
    """
    A sticky note attached to exactly one group.

    Lifecycle:
        1. Created by POST /api/groups/{id}/notes
        2. Optionally updated (content via PATCH /api/notes/{id},
           layout via PATCH /api/notes/{id}/position)
        3. Deleted one at a time or together with the whole board
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    color: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
        default=DEFAULT_COLOR,
        server_default=text(f"'{DEFAULT_COLOR}'"),
    )

    # ── Layout ────────────────────────────────────────────────────────────
    x: Mapped[float] = mapped_column(Float, nullable=False)
    y: Mapped[float] = mapped_column(Float, nullable=False)
    width: Mapped[float] = mapped_column(
        Float, nullable=False, default=DEFAULT_WIDTH, server_default=text("200")
    )
    height: Mapped[float] = mapped_column(
        Float, nullable=False, default=DEFAULT_HEIGHT, server_default=text("150")
    )
    z_index: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_Z_INDEX, server_default=text("0")
    )

    created_by: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    )

    can_edit: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
        comment="Whether other members may edit this note",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_notes_group_z_index", "group_id", "z_index"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, group_id={self.group_id}, "
            f"z_index={self.z_index})>"
        )
