"""
StickyBoard Backend — Summary Service
======================================

What:  The legacy summarize page: summarize pasted text, store it, list and
       read stored summaries.
How:   Delegates the summary itself to the LLM service, then persists the
       input and output as one Summary row.
Who:   Called by app/routes/summaries.py.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.summary import Summary
from app.schemas.summary import (
    PREVIEW_LENGTH,
    SummarizeResponse,
    SummaryDetail,
    SummaryDetailResponse,
    SummaryListItem,
    SummaryListResponse,
)
from app.services.gemini_service import gemini_service

logger = logging.getLogger(__name__)


class SummaryService:
    async def summarize(self, db: AsyncSession, text: str) -> SummarizeResponse:
        """
        Summarize `text` and store the result.

        Raises:
            ValidationError: blank input
            LLMServiceError / CircuitBreakerOpenError: from the LLM service
            DatabaseError: the summary could not be stored
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError(message="Text to summarize is required", field="text")

        summary_text = await gemini_service.summarize(text)

        try:
            summary = Summary(input_text=text, summary=summary_text)
            db.add(summary)
            await db.flush()
        except Exception as e:
            logger.error("Database error storing summary: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the summary. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Summary %s stored (%d chars input)", summary.id, len(text))
        return SummarizeResponse(id=summary.id, summary=summary.summary)

    async def list_summaries(self, db: AsyncSession) -> SummaryListResponse:
        """Newest first."""
        result = await db.execute(
            select(Summary).order_by(Summary.created_at.desc(), Summary.id.desc())
        )
        return SummaryListResponse(
            items=[
                SummaryListItem(
                    id=s.id,
                    summary_preview=s.summary[:PREVIEW_LENGTH] if s.summary else "",
                    created_at=s.created_at,
                )
                for s in result.scalars().all()
            ]
        )

    async def get_summary(self, db: AsyncSession, summary_id: int) -> SummaryDetailResponse:
        summary = await db.get(Summary, summary_id)
        if summary is None:
            raise NotFoundError(resource="summary", resource_id=summary_id)
        return SummaryDetailResponse(item=SummaryDetail.model_validate(summary))


summary_service = SummaryService()
