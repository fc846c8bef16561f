"""
StickyBoard Backend — Note Route Handlers
==========================================

What:  Single-note endpoints: read, edit content, move/resize, delete.
How:   Extracts path parameters and bodies, delegates to NoteService.
Who:   Called by the note detail view and by drag/resize on the board.

Caching:
    Notes are editable, so GET /api/notes/{id} is sent with no-cache and the
    client revalidates on every view.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.note import NoteContentUpdate, NotePositionUpdate, NoteResponse
from app.services.note_service import note_service

router = APIRouter(prefix="/api", tags=["Notes"])

_NOT_FOUND = {404: {"description": "Note not found", "model": ErrorResponse}}


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses=_NOT_FOUND,
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Full note for the detail view.

    Args:
        note_id: integer path parameter; non-integers are rejected with 422.
    """
    result = await note_service.get_note(db=db, note_id=note_id)
    response.headers["Cache-Control"] = "no-cache"
    return result


@router.patch(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses=_NOT_FOUND,
    summary="Edit a note's title, content and color",
)
async def update_note_content(
    note_id: int,
    payload: NoteContentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_content(db=db, note_id=note_id, payload=payload)


@router.patch(
    "/notes/{note_id}/position",
    response_model=NoteResponse,
    responses=_NOT_FOUND,
    summary="Move or resize a note",
)
async def update_note_position(
    note_id: int,
    payload: NotePositionUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_position(db=db, note_id=note_id, payload=payload)


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    responses=_NOT_FOUND,
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=204)
