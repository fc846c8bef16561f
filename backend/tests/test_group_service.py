"""
StickyBoard Backend — Group Service Tests
==========================================

What:  Group creation, the join upsert and role listings.
How:   Real GroupService against the in-memory SQLite database.

What we test:
    ✅ The creator becomes the owner in the same call
    ✅ Joining twice keeps a single membership and replaces the role
    ✅ Unknown group / account / role are rejected
"""

import pytest
from sqlalchemy import func, select

from app.exceptions import NotFoundError, ValidationError
from app.models.group import Membership
from app.services.group_service import group_service


async def _membership_count(db, group_id):
    result = await db.execute(
        select(func.count()).select_from(Membership).where(Membership.group_id == group_id)
    )
    return result.scalar_one()


class TestCreateGroup:

    @pytest.mark.asyncio
    async def test_creator_becomes_owner(self, db_session, make_account):
        owner = await make_account("Sato")

        group = await group_service.create_group(
            db_session, group_name="Team A", created_by=owner.id
        )

        assert group.group_name == "Team A"
        assert group.created_by == owner.id

        members = await group_service.list_members(db_session, group.id)
        assert len(members.members) == 1
        assert members.members[0].user_id == owner.id
        assert members.members[0].role == "owner"

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, db_session, make_account):
        owner = await make_account()
        with pytest.raises(ValidationError):
            await group_service.create_group(db_session, group_name="  ", created_by=owner.id)

    @pytest.mark.asyncio
    async def test_unknown_creator_rejected(self, db_session):
        with pytest.raises(NotFoundError):
            await group_service.create_group(db_session, group_name="Team A", created_by=999)

    @pytest.mark.asyncio
    async def test_get_unknown_group(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await group_service.get_group(db_session, 404)
        assert "404" in exc_info.value.message


class TestJoinGroup:

    @pytest.mark.asyncio
    async def test_join_defaults_to_member(self, db_session, make_account, make_group):
        group = await make_group()
        user = await make_account("Suzuki")

        membership = await group_service.join_group(db_session, group.id, user.id)

        assert membership.group_id == group.id
        assert membership.user_id == user.id
        assert membership.role == "member"
        assert await _membership_count(db_session, group.id) == 2

    @pytest.mark.asyncio
    async def test_rejoin_keeps_single_row_and_updates_role(
        self, db_session, make_account, make_group
    ):
        group = await make_group()
        user = await make_account("Suzuki")

        first = await group_service.join_group(db_session, group.id, user.id, role="member")
        second = await group_service.join_group(db_session, group.id, user.id, role="owner")

        assert second.id == first.id
        assert second.role == "owner"
        assert await _membership_count(db_session, group.id) == 2

        members = await group_service.list_members(db_session, group.id)
        roles = {m.user_id: m.role for m in members.members}
        assert roles[user.id] == "owner"

    @pytest.mark.asyncio
    async def test_role_is_case_insensitive(self, db_session, make_account, make_group):
        group = await make_group()
        user = await make_account("Suzuki")

        membership = await group_service.join_group(db_session, group.id, user.id, role=" OWNER ")
        assert membership.role == "owner"

    @pytest.mark.asyncio
    async def test_invalid_role_rejected(self, db_session, make_account, make_group):
        group = await make_group()
        user = await make_account("Suzuki")

        with pytest.raises(ValidationError) as exc_info:
            await group_service.join_group(db_session, group.id, user.id, role="admin")
        assert exc_info.value.context["field"] == "role"

    @pytest.mark.asyncio
    async def test_unknown_group_rejected(self, db_session, make_account):
        user = await make_account("Suzuki")
        with pytest.raises(NotFoundError):
            await group_service.join_group(db_session, 999, user.id)

    @pytest.mark.asyncio
    async def test_unknown_account_rejected(self, db_session, make_group):
        group = await make_group()
        with pytest.raises(NotFoundError):
            await group_service.join_group(db_session, group.id, 999)


class TestListGroupsForAccount:

    @pytest.mark.asyncio
    async def test_lists_groups_with_roles(self, db_session, make_account, make_group):
        user = await make_account("Sato")
        owned = await make_group("Mine", owner_id=user.id)
        other = await make_group("Theirs")
        await group_service.join_group(db_session, other.id, user.id)

        result = await group_service.list_groups_for_account(db_session, user.id)

        assert [(g.id, g.role) for g in result.groups] == [
            (owned.id, "owner"),
            (other.id, "member"),
        ]

    @pytest.mark.asyncio
    async def test_account_without_groups(self, db_session, make_account):
        user = await make_account("Sato")
        result = await group_service.list_groups_for_account(db_session, user.id)
        assert result.groups == []

    @pytest.mark.asyncio
    async def test_unknown_account(self, db_session):
        with pytest.raises(NotFoundError):
            await group_service.list_groups_for_account(db_session, 999)
