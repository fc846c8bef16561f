"""
StickyBoard Backend — Group Route Handlers
===========================================

What:  Groups, their members, and the group-scoped note board.
How:   Extracts path/body data, delegates to GroupService / NoteService.
Who:   Called by the board front end.

Board endpoints:
    GET    /api/groups/{id}/notes   paint-ordered notes + X-Total-Count
    POST   /api/groups/{id}/notes   post a note
    DELETE /api/groups/{id}/notes   clear the whole board
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.group import (
    GroupCreate,
    GroupResponse,
    JoinGroupRequest,
    MemberListResponse,
    MembershipResponse,
)
from app.schemas.note import (
    ClearNotesResponse,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
)
from app.services.group_service import group_service
from app.services.note_service import note_service

router = APIRouter(prefix="/api", tags=["Groups"])

_NOT_FOUND = {404: {"description": "Group not found", "model": ErrorResponse}}


@router.post(
    "/groups",
    response_model=GroupResponse,
    status_code=201,
    responses={
        400: {"description": "Blank group name", "model": ErrorResponse},
        404: {"description": "Creator account not found", "model": ErrorResponse},
    },
    summary="Create a group",
    description="The creating account becomes the group's owner.",
)
async def create_group(
    payload: GroupCreate,
    db: AsyncSession = Depends(get_db_session),
) -> GroupResponse:
    return await group_service.create_group(
        db=db, group_name=payload.group_name, created_by=payload.created_by
    )


@router.get(
    "/groups/{group_id}",
    response_model=GroupResponse,
    responses=_NOT_FOUND,
    summary="Get a group",
)
async def get_group(
    group_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> GroupResponse:
    return await group_service.get_group(db=db, group_id=group_id)


@router.get(
    "/groups/{group_id}/users",
    response_model=MemberListResponse,
    responses=_NOT_FOUND,
    summary="List group members",
)
async def list_members(
    group_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MemberListResponse:
    return await group_service.list_members(db=db, group_id=group_id)


@router.post(
    "/groups/{group_id}/users",
    response_model=MembershipResponse,
    responses={
        400: {"description": "Invalid role", "model": ErrorResponse},
        404: {"description": "Group or account not found", "model": ErrorResponse},
    },
    summary="Join a group",
    description=(
        "Adds the account to the group. Joining again does not create a second "
        "membership; the role is replaced by the one sent."
    ),
)
async def join_group(
    group_id: int,
    payload: JoinGroupRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MembershipResponse:
    return await group_service.join_group(
        db=db, group_id=group_id, user_id=payload.user_id, role=payload.role
    )


@router.get(
    "/groups/{group_id}/notes",
    response_model=NoteListResponse,
    responses=_NOT_FOUND,
    summary="List the notes on a group board",
    description="Notes come back in paint order: z_index ascending, then id.",
)
async def list_group_notes(
    group_id: int,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteListResponse:
    result = await note_service.list_notes(db=db, group_id=group_id)
    response.headers["X-Total-Count"] = str(len(result.notes))
    return result


@router.post(
    "/groups/{group_id}/notes",
    response_model=NoteResponse,
    status_code=201,
    responses={
        400: {"description": "Author is not a member of the group", "model": ErrorResponse},
        404: {"description": "Group or author not found", "model": ErrorResponse},
    },
    summary="Post a note to a group board",
)
async def create_group_note(
    group_id: int,
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.create_note(db=db, group_id=group_id, payload=payload)


@router.delete(
    "/groups/{group_id}/notes",
    response_model=ClearNotesResponse,
    responses=_NOT_FOUND,
    summary="Delete every note of a group",
)
async def clear_group_notes(
    group_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ClearNotesResponse:
    return await note_service.clear_group_notes(db=db, group_id=group_id)
