"""
StickyBoard Backend — Account Service
======================================

What:  Registration and listing of accounts.
How:   Validates the registration payload, hashes the password, inserts the
       row and converts store failures into application exceptions.
Who:   Called by the /api/accounts routes; `ensure_account_exists` is also
       used by GroupService and NoteService.

Validation rules (checked in this order, after trimming whitespace):
    1. name must not be blank
    2. email must not be blank and must contain '@'
    3. password must be 6 characters to 72 bytes (bcrypt input limit)
    4. email must not already be registered (→ ConflictError)
"""

import logging

import bcrypt

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    StickyBoardError,
    ValidationError,
)
from app.models.account import Account
from app.schemas.account import AccountListResponse, AccountResponse

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt ignores (bcrypt>=5: rejects) input past 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Returns the salted bcrypt hash stored in `accounts.password_hash`."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


async def ensure_account_exists(db: AsyncSession, account_id: int) -> Account:
    """
    Loads an account or raises NotFoundError.

    Shared by every service that accepts an account id from the client.
    """
    account = await db.get(Account, account_id)
    if account is None:
        raise NotFoundError(resource="account", resource_id=account_id)
    return account


class AccountService:
    """
    Business logic for accounts.

    Stateless; each call receives the request's session.
    """

    async def create_account(
        self,
        db: AsyncSession,
        name: str,
        email: str,
        password: str,
    ) -> AccountResponse:
        """
        Register a new account.

        Raises:
            ValidationError: blank field, malformed email, short password
            ConflictError: email already registered
            DatabaseError: insert failed for another reason
        """
        name = (name or "").strip()
        email = (email or "").strip()
        password = (password or "").strip()

        if not name:
            raise ValidationError(message="Name is required", field="name")
        if not email:
            raise ValidationError(message="Email is required", field="email")
        if "@" not in email:
            raise ValidationError(message="Email address is not valid", field="email")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                field="password",
            )

        try:
            existing = await db.execute(select(Account.id).where(Account.email == email))
            if existing.scalar_one_or_none() is not None:
                raise ConflictError(
                    message=f"An account with email '{email}' already exists",
                    context={"field": "email"},
                )

            account = Account(name=name, email=email, password_hash=hash_password(password))
            db.add(account)
            await db.flush()
            logger.info("Account created: %s", account.id)
            return AccountResponse.model_validate(account)

        except StickyBoardError:
            raise
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            raise ConflictError(
                message=f"An account with email '{email}' already exists",
                context={"field": "email"},
            )
        except Exception as e:
            logger.error("Database error creating account: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the account. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def list_accounts(self, db: AsyncSession) -> AccountListResponse:
        """All accounts in id order."""
        try:
            result = await db.execute(select(Account).order_by(Account.id.asc()))
            accounts = result.scalars().all()
        except Exception as e:
            logger.error("Database error listing accounts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve accounts. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return AccountListResponse(
            accounts=[AccountResponse.model_validate(a) for a in accounts]
        )


account_service = AccountService()
