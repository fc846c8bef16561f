"""
StickyBoard Backend — Note Service
===================================

What:  Lifecycle of sticky notes on a group board: post, list, read, edit,
       move, delete, clear.
How:   Validates the group and author, normalizes colors, applies layout
       defaults and issues the store commands on the request's session.
Who:   Called by the note routes in app/routes/notes.py.

Posting policy:
    A note may be posted without an author. When `created_by` is given it
    must name an existing account that is a member of the target group;
    otherwise the post is rejected.

Ordering:
    Boards are listed in paint order: z_index ascending, ties broken by id.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    DatabaseError,
    NotFoundError,
    StickyBoardError,
    ValidationError,
)
from app.models.note import (
    DEFAULT_COLOR,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    DEFAULT_Z_INDEX,
    Note,
)
from app.schemas.note import (
    ClearNotesResponse,
    NoteContentUpdate,
    NoteCreate,
    NoteListResponse,
    NotePositionUpdate,
    NoteResponse,
)
from app.services.account_service import ensure_account_exists
from app.services.group_service import ensure_group_exists, is_member

logger = logging.getLogger(__name__)

NAMED_COLORS = {
    "yellow": "#FFFF88",
    "pink": "#FBCFE8",
    "green": "#BBF7D0",
    "blue": "#BFDBFE",
    "orange": "#FED7AA",
    "purple": "#E9D5FF",
}

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def normalize_color(value: Optional[str]) -> str:
    """
    Map user input to a stored #RRGGBB color.

    Examples:
        None / "" / "  "  → "#FFFF88"
        "#ff00aa"         → "#FF00AA"
        "Pink"            → "#FBCFE8"
        "#fff" / "teal"   → "#FFFF88"
    """
    if value is None:
        return DEFAULT_COLOR
    trimmed = value.strip()
    if not trimmed:
        return DEFAULT_COLOR
    if _HEX_COLOR.match(trimmed):
        return trimmed.upper()
    return NAMED_COLORS.get(trimmed.lower(), DEFAULT_COLOR)


async def _get_note_or_404(db: AsyncSession, note_id: int) -> Note:
    note = await db.get(Note, note_id)
    if note is None:
        raise NotFoundError(resource="note", resource_id=note_id)
    return note


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        Application errors (NotFoundError, ValidationError) propagate as-is.
        Unexpected store failures are logged and wrapped in DatabaseError.
    """

    async def create_note(
        self,
        db: AsyncSession,
        group_id: int,
        payload: NoteCreate,
    ) -> NoteResponse:
        """
        Post a note to a group's board.

        Raises:
            NotFoundError: unknown group, or created_by is not an account
            ValidationError: created_by is not a member of the group
            DatabaseError: insert failed
        """
        await ensure_group_exists(db, group_id)

        if payload.created_by is not None:
            await ensure_account_exists(db, payload.created_by)
            if not await is_member(db, group_id, payload.created_by):
                raise ValidationError(
                    message="This account is not a member of the group",
                    field="created_by",
                    context={"group_id": group_id, "created_by": payload.created_by},
                )

        try:
            note = Note(
                group_id=group_id,
                title=payload.title,
                content=payload.content,
                color=normalize_color(payload.color),
                x=payload.x,
                y=payload.y,
                width=payload.width if payload.width is not None else DEFAULT_WIDTH,
                height=payload.height if payload.height is not None else DEFAULT_HEIGHT,
                z_index=payload.z_index if payload.z_index is not None else DEFAULT_Z_INDEX,
                created_by=payload.created_by,
                can_edit=bool(payload.can_edit),
            )
            db.add(note)
            await db.flush()
            logger.info("Note %s posted to group %s", note.id, group_id)
            return NoteResponse.model_validate(note)

        except StickyBoardError:
            raise
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"group_id": group_id, "error_type": type(e).__name__},
            )

    async def list_notes(self, db: AsyncSession, group_id: int) -> NoteListResponse:
        """
        All notes of a group in paint order.

        Query plan:
            SELECT * FROM notes WHERE group_id = :id ORDER BY z_index, id
            → idx_notes_group_z_index
        """
        await ensure_group_exists(db, group_id)

        try:
            result = await db.execute(
                select(Note)
                .where(Note.group_id == group_id)
                .order_by(Note.z_index.asc(), Note.id.asc())
            )
            notes = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing notes of group %s: %s", group_id, str(e))
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"group_id": group_id},
            )

        return NoteListResponse(notes=[NoteResponse.model_validate(n) for n in notes])

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """Single note for the detail view; NotFoundError if missing."""
        note = await _get_note_or_404(db, note_id)
        return NoteResponse.model_validate(note)

    async def update_content(
        self,
        db: AsyncSession,
        note_id: int,
        payload: NoteContentUpdate,
    ) -> NoteResponse:
        """Replace title, content and color; the layout is untouched."""
        note = await _get_note_or_404(db, note_id)
        note.title = payload.title
        note.content = payload.content
        note.color = normalize_color(payload.color)
        note.updated_at = datetime.now(timezone.utc)
        await db.flush()
        return NoteResponse.model_validate(note)

    async def update_position(
        self,
        db: AsyncSession,
        note_id: int,
        payload: NotePositionUpdate,
    ) -> NoteResponse:
        """Move or resize a note. Omitted size/z_index keep their current values."""
        note = await _get_note_or_404(db, note_id)
        note.x = payload.x
        note.y = payload.y
        if payload.width is not None:
            note.width = payload.width
        if payload.height is not None:
            note.height = payload.height
        if payload.z_index is not None:
            note.z_index = payload.z_index
        note.updated_at = datetime.now(timezone.utc)
        await db.flush()
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        """
        Remove one note.

        Not idempotent: deleting an id that no longer exists raises NotFoundError.
        """
        note = await _get_note_or_404(db, note_id)
        await db.delete(note)
        await db.flush()
        logger.info("Note %s deleted from group %s", note_id, note.group_id)

    async def clear_group_notes(self, db: AsyncSession, group_id: int) -> ClearNotesResponse:
        """Remove every note whose group_id matches; other boards are untouched."""
        await ensure_group_exists(db, group_id)

        try:
            result = await db.execute(
                delete(Note)
                .where(Note.group_id == group_id)
                .execution_options(synchronize_session=False)
            )
        except Exception as e:
            logger.error("Database error clearing group %s: %s", group_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not clear the board. Please try again.",
                context={"group_id": group_id},
            )

        deleted_count = result.rowcount or 0
        logger.info("Cleared %d notes from group %s", deleted_count, group_id)
        return ClearNotesResponse(deleted_count=deleted_count)


note_service = NoteService()
