"""
StickyBoard Backend — Group Service
====================================

What:  Groups and memberships: creation, lookup, joining, listing.
How:   Works on the request's AsyncSession; routes commit through
       get_db_session once the service returns.
Who:   Called by the /api/groups and /api/accounts/{id}/groups routes.

Membership rules:
    - create_group inserts the group and an owner membership for its creator
      in the same transaction.
    - join_group is an upsert on (group_id, account_id). A repeated join
      keeps the row (and its joined_at) and overwrites the role with the one
      requested. The statement is a single
      INSERT ... ON CONFLICT (group_id, account_id) DO UPDATE, so two
      concurrent joins resolve on the unique constraint and the last one wins.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    DatabaseError,
    NotFoundError,
    StickyBoardError,
    ValidationError,
)
from app.models.group import ROLE_MEMBER, ROLE_OWNER, VALID_ROLES, Group, Membership
from app.schemas.group import (
    GroupListResponse,
    GroupResponse,
    GroupWithRoleResponse,
    MemberListResponse,
    MembershipResponse,
)
from app.services.account_service import ensure_account_exists

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


async def ensure_group_exists(db: AsyncSession, group_id: int) -> Group:
    """Loads a group or raises NotFoundError."""
    group = await db.get(Group, group_id)
    if group is None:
        raise NotFoundError(resource="group", resource_id=group_id)
    return group


async def is_member(db: AsyncSession, group_id: int, account_id: int) -> bool:
    result = await db.execute(
        select(Membership.id).where(
            Membership.group_id == group_id,
            Membership.account_id == account_id,
        )
    )
    return result.scalar_one_or_none() is not None


def _membership_response(membership: Membership) -> MembershipResponse:
    return MembershipResponse(
        id=membership.id,
        group_id=membership.group_id,
        user_id=membership.account_id,
        role=membership.role,
        joined_at=membership.joined_at,
    )


class GroupService:
    """Business logic for groups and memberships."""

    async def create_group(
        self,
        db: AsyncSession,
        group_name: str,
        created_by: int,
    ) -> GroupResponse:
        """
        Create a group owned by `created_by`.

        Raises:
            ValidationError: blank group name
            NotFoundError: created_by is not an existing account
        """
        group_name = (group_name or "").strip()
        if not group_name:
            raise ValidationError(message="Group name is required", field="group_name")

        try:
            await ensure_account_exists(db, created_by)

            group = Group(group_name=group_name, created_by=created_by)
            db.add(group)
            await db.flush()

            db.add(Membership(group_id=group.id, account_id=created_by, role=ROLE_OWNER))
            await db.flush()

            logger.info("Group %s created by account %s", group.id, created_by)
            return GroupResponse.model_validate(group)

        except StickyBoardError:
            raise
        except Exception as e:
            logger.error("Database error creating group: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the group. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_group(self, db: AsyncSession, group_id: int) -> GroupResponse:
        group = await ensure_group_exists(db, group_id)
        return GroupResponse.model_validate(group)

    async def list_groups_for_account(
        self, db: AsyncSession, account_id: int
    ) -> GroupListResponse:
        """
        Every group the account belongs to, annotated with its role.

        Query plan:
            SELECT g.*, gu.role FROM groups g
            JOIN group_users gu ON gu.group_id = g.id
            WHERE gu.account_id = :id ORDER BY g.created_at, g.id
        """
        await ensure_account_exists(db, account_id)

        try:
            result = await db.execute(
                select(Group, Membership.role)
                .join(Membership, Membership.group_id == Group.id)
                .where(Membership.account_id == account_id)
                .order_by(Group.created_at.asc(), Group.id.asc())
            )
            rows = result.all()
        except Exception as e:
            logger.error("Database error listing groups for %s: %s", account_id, str(e))
            raise DatabaseError(
                message="Could not retrieve groups. Please try again.",
                context={"account_id": account_id},
            )

        return GroupListResponse(
            groups=[
                GroupWithRoleResponse(
                    id=group.id,
                    group_name=group.group_name,
                    created_by=group.created_by,
                    created_at=group.created_at,
                    role=role,
                )
                for group, role in rows
            ]
        )

    async def join_group(
        self,
        db: AsyncSession,
        group_id: int,
        user_id: int,
        role: Optional[str] = None,
    ) -> MembershipResponse:
        """
        Add an account to a group, or change its role if already a member.

        Raises:
            NotFoundError: unknown group or account
            ValidationError: role is not owner/member
        """
        role = (role or ROLE_MEMBER).strip().lower()
        if role not in VALID_ROLES:
            raise ValidationError(
                message="Role must be 'owner' or 'member'",
                field="role",
                context={"allowed_roles": sorted(VALID_ROLES)},
            )

        await ensure_account_exists(db, user_id)
        await ensure_group_exists(db, group_id)

        insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
        if insert is None:
            raise DatabaseError(
                message="Membership upsert is not supported by this database.",
                context={"dialect": db.get_bind().dialect.name},
            )

        try:
            stmt = insert(Membership).values(
                group_id=group_id, account_id=user_id, role=role
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["group_id", "account_id"],
                set_={"role": stmt.excluded.role},
            )
            await db.execute(stmt)

            # populate_existing: the row may already sit in the identity map
            # with its previous role
            result = await db.execute(
                select(Membership)
                .where(
                    Membership.group_id == group_id,
                    Membership.account_id == user_id,
                )
                .execution_options(populate_existing=True)
            )
            membership = result.scalar_one()
        except Exception as e:
            logger.error(
                "Database error joining account %s to group %s: %s",
                user_id, group_id, str(e), exc_info=True,
            )
            raise DatabaseError(
                message="Could not join the group. Please try again.",
                context={"group_id": group_id, "user_id": user_id},
            )

        logger.info("Account %s joined group %s as %s", user_id, group_id, role)
        return _membership_response(membership)

    async def list_members(self, db: AsyncSession, group_id: int) -> MemberListResponse:
        await ensure_group_exists(db, group_id)
        result = await db.execute(
            select(Membership)
            .where(Membership.group_id == group_id)
            .order_by(Membership.joined_at.asc(), Membership.id.asc())
        )
        return MemberListResponse(
            members=[_membership_response(m) for m in result.scalars().all()]
        )


group_service = GroupService()
