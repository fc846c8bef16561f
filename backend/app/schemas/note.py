"""
StickyBoard Backend — Note Schemas
===================================

What:  Pydantic models defining the note contract between board front end and backend.
How:   FastAPI validates request bodies against these models and serializes
       responses from the ORM objects (`from_attributes`).

Optional layout fields are left as None in the requests; NoteService fills
in the defaults (200 x 150, z_index 0) and normalizes the color.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/groups/{group_id}/notes."""
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    color: Optional[str] = Field(
        default=None,
        description="#RRGGBB or one of yellow, pink, green, blue, orange, purple",
    )
    x: float = Field(description="Left edge on the board, in pixels")
    y: float = Field(description="Top edge on the board, in pixels")
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    z_index: Optional[int] = None
    created_by: Optional[int] = Field(default=None, description="Author account id")
    can_edit: Optional[bool] = None


class NoteContentUpdate(BaseModel):
    """Body of PATCH /api/notes/{note_id}; replaces title, content and color."""
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    color: Optional[str] = None


class NotePositionUpdate(BaseModel):
    """Body of PATCH /api/notes/{note_id}/position."""
    x: float
    y: float
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    z_index: Optional[int] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note, used by the board and the detail view."""
    id: int
    group_id: int
    title: Optional[str] = None
    content: Optional[str] = None
    color: str
    x: float
    y: float
    width: float
    height: float
    z_index: int
    created_by: Optional[int] = None
    can_edit: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class NoteListResponse(BaseModel):
    notes: List[NoteResponse] = Field(description="Notes in paint order (z_index, then id)")


class ClearNotesResponse(BaseModel):
    deleted_count: int = Field(description="Number of notes removed from the board")
