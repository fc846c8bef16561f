"""
StickyBoard Backend — Summary Schemas
======================================

What:  Contracts of the legacy summarize page (/api/summarize, /api/summaries).
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

PREVIEW_LENGTH = 200


class SummarizeRequest(BaseModel):
    """JSON alternative to the plain-text body of POST /api/summarize."""
    text: str = ""


class SummarizeResponse(BaseModel):
    id: int
    summary: str


class SummaryListItem(BaseModel):
    """Compact list entry; the preview is the first 200 characters of the summary."""
    id: int
    summary_preview: str
    created_at: datetime


class SummaryListResponse(BaseModel):
    items: List[SummaryListItem]


class SummaryDetail(BaseModel):
    id: int
    input_text: str
    summary: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SummaryDetailResponse(BaseModel):
    item: SummaryDetail = Field(description="The stored summary record")
