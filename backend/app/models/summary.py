"""
StickyBoard Backend — Summary SQLAlchemy Model
===============================================

What:  ORM model for the `summaries` table behind the legacy summarize page.
How:   Each row keeps the pasted input text and the summary Gemini returned.
       Rows are created once and never updated.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Summary(Base):
    __tablename__ = "summaries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    input_text: Mapped[str] = mapped_column(Text, nullable=False)

    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Summary(id={self.id}, created_at='{self.created_at}')>"
