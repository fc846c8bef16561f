"""
StickyBoard Backend — Account SQLAlchemy Model
===============================================

What:  ORM model representing the `accounts` table.
Who:   Used by AccountService (registration, listing) and as the target of
       group/membership/note foreign keys.

Table Design:
    - Integer primary key: the front end keeps the selected account id in
      local storage and sends it back as a number
    - email: unique; duplicate registration surfaces as ConflictError
    - password_hash: salted bcrypt hash (60 chars) of the submitted password; the raw
      password is never stored and never returned
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Account(Base):
    """
    A registered user of the board.

    Lifecycle:
        Created once through POST /api/accounts; never updated or deleted.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login identifier; unique across accounts",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the account password",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email='{self.email}')>"
