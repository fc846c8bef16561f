"""
StickyBoard Backend — Account Route Handlers
=============================================

What:  POST/GET /api/accounts and GET /api/accounts/{id}/groups.
How:   Thin handlers; validation and storage live in the services.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.account import AccountCreate, AccountListResponse, AccountResponse
from app.schemas.common import ErrorResponse
from app.schemas.group import GroupListResponse
from app.services.account_service import account_service
from app.services.group_service import group_service

router = APIRouter(prefix="/api", tags=["Accounts"])


@router.post(
    "/accounts",
    response_model=AccountResponse,
    status_code=201,
    responses={
        400: {"description": "Missing or invalid field", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Register an account",
)
async def create_account(
    payload: AccountCreate,
    db: AsyncSession = Depends(get_db_session),
) -> AccountResponse:
    return await account_service.create_account(
        db=db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )


@router.get(
    "/accounts",
    response_model=AccountListResponse,
    summary="List all accounts",
)
async def list_accounts(db: AsyncSession = Depends(get_db_session)) -> AccountListResponse:
    return await account_service.list_accounts(db=db)


@router.get(
    "/accounts/{account_id}/groups",
    response_model=GroupListResponse,
    responses={404: {"description": "Account not found", "model": ErrorResponse}},
    summary="List the groups an account belongs to",
    description="Each group carries the account's role in it (owner or member).",
)
async def list_account_groups(
    account_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> GroupListResponse:
    return await group_service.list_groups_for_account(db=db, account_id=account_id)
