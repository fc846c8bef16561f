"""
StickyBoard Backend — Summary Route Handlers
=============================================

What:  The legacy summarize page: POST /api/summarize, GET /api/summaries[/{id}].
How:   POST accepts the text as a raw text/plain body; JSON bodies of the
       form {"text": "..."} are accepted too.
"""

import json

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import ValidationError
from app.schemas.common import ErrorResponse
from app.schemas.summary import (
    SummarizeRequest,
    SummarizeResponse,
    SummaryDetailResponse,
    SummaryListResponse,
)
from app.services.summary_service import summary_service

router = APIRouter(prefix="/api", tags=["Summaries"])


async def _read_text(request: Request) -> str:
    body = await request.body()
    try:
        raw = body.decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationError(message="Request body must be UTF-8 text", field="text")

    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            return SummarizeRequest.model_validate(json.loads(raw or "{}")).text
        except ValueError:
            raise ValidationError(
                message="JSON body must be an object with a 'text' string",
                field="text",
            )
    return raw


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    status_code=201,
    responses={
        400: {"description": "Empty text", "model": ErrorResponse},
        503: {"description": "Summarization service unavailable", "model": ErrorResponse},
    },
    summary="Summarize pasted text and store the result",
)
async def summarize(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> SummarizeResponse:
    text = await _read_text(request)
    return await summary_service.summarize(db=db, text=text)


@router.get(
    "/summaries",
    response_model=SummaryListResponse,
    summary="List stored summaries, newest first",
)
async def list_summaries(db: AsyncSession = Depends(get_db_session)) -> SummaryListResponse:
    return await summary_service.list_summaries(db=db)


@router.get(
    "/summaries/{summary_id}",
    response_model=SummaryDetailResponse,
    responses={404: {"description": "Summary not found", "model": ErrorResponse}},
    summary="Get one stored summary",
)
async def get_summary(
    summary_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> SummaryDetailResponse:
    return await summary_service.get_summary(db=db, summary_id=summary_id)
