"""
StickyBoard Backend — Note Service Tests
=========================================

What:  Posting, paint order, editing, moving, deleting and clearing notes.
How:   Real NoteService against the in-memory SQLite database, plus a few
       pure unit tests with a mock session.

What we test:
    ✅ Layout and color defaults on post
    ✅ Only members may post under their own account id
    ✅ Listing is ordered by z_index then id
    ✅ Clearing one board leaves every other board untouched
    ✅ Missing notes raise NotFoundError
"""

import pytest

from app.exceptions import NotFoundError, ValidationError
from app.schemas.note import NoteContentUpdate, NoteCreate, NotePositionUpdate
from app.services.group_service import group_service
from app.services.note_service import NoteService, normalize_color, note_service


class TestNormalizeColor:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "#FFFF88"),
            ("", "#FFFF88"),
            ("   ", "#FFFF88"),
            ("#ff00aa", "#FF00AA"),
            (" #BBF7D0 ", "#BBF7D0"),
            ("pink", "#FBCFE8"),
            ("Blue", "#BFDBFE"),
            ("#fff", "#FFFF88"),
            ("teal", "#FFFF88"),
        ],
    )
    def test_normalize(self, value, expected):
        assert normalize_color(value) == expected


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_defaults_applied(self, db_session, make_group):
        group = await make_group()

        note = await note_service.create_note(
            db_session, group.id, NoteCreate(title="Plan", content="Kickoff", x=10, y=20)
        )

        assert note.group_id == group.id
        assert note.color == "#FFFF88"
        assert note.width == 200
        assert note.height == 150
        assert note.z_index == 0
        assert note.can_edit is False
        assert note.created_by is None

    @pytest.mark.asyncio
    async def test_member_can_post(self, db_session, make_group):
        group = await make_group()

        note = await note_service.create_note(
            db_session,
            group.id,
            NoteCreate(content="hi", x=0, y=0, color="green", created_by=group.created_by),
        )

        assert note.created_by == group.created_by
        assert note.color == "#BBF7D0"

    @pytest.mark.asyncio
    async def test_non_member_rejected(self, db_session, make_account, make_group):
        group = await make_group()
        outsider = await make_account("Outsider")

        with pytest.raises(ValidationError) as exc_info:
            await note_service.create_note(
                db_session, group.id, NoteCreate(x=0, y=0, created_by=outsider.id)
            )
        assert exc_info.value.context["field"] == "created_by"

    @pytest.mark.asyncio
    async def test_unknown_author_rejected(self, db_session, make_group):
        group = await make_group()
        with pytest.raises(NotFoundError):
            await note_service.create_note(
                db_session, group.id, NoteCreate(x=0, y=0, created_by=999)
            )

    @pytest.mark.asyncio
    async def test_unknown_group_rejected(self, db_session):
        with pytest.raises(NotFoundError):
            await note_service.create_note(db_session, 999, NoteCreate(x=0, y=0))

    @pytest.mark.asyncio
    async def test_joined_member_can_post(self, db_session, make_account, make_group):
        group = await make_group()
        user = await make_account("Suzuki")
        await group_service.join_group(db_session, group.id, user.id)

        note = await note_service.create_note(
            db_session, group.id, NoteCreate(x=1, y=1, created_by=user.id)
        )
        assert note.created_by == user.id


class TestListNotes:

    @pytest.mark.asyncio
    async def test_paint_order(self, db_session, make_group):
        group = await make_group()
        top = await note_service.create_note(db_session, group.id, NoteCreate(x=0, y=0, z_index=5))
        low_a = await note_service.create_note(db_session, group.id, NoteCreate(x=0, y=0, z_index=1))
        low_b = await note_service.create_note(db_session, group.id, NoteCreate(x=0, y=0, z_index=1))

        result = await note_service.list_notes(db_session, group.id)

        assert [n.id for n in result.notes] == [low_a.id, low_b.id, top.id]

    @pytest.mark.asyncio
    async def test_only_own_group(self, db_session, make_group):
        group_a = await make_group("A")
        group_b = await make_group("B")
        await note_service.create_note(db_session, group_a.id, NoteCreate(x=0, y=0))

        result = await note_service.list_notes(db_session, group_b.id)
        assert result.notes == []

    @pytest.mark.asyncio
    async def test_unknown_group(self, db_session):
        with pytest.raises(NotFoundError):
            await note_service.list_notes(db_session, 999)


class TestUpdateNote:

    @pytest.mark.asyncio
    async def test_update_content(self, db_session, make_group):
        group = await make_group()
        note = await note_service.create_note(
            db_session, group.id, NoteCreate(title="Old", content="old", x=5, y=6)
        )

        updated = await note_service.update_content(
            db_session, note.id, NoteContentUpdate(title="New", content="new", color="#00ff00")
        )

        assert updated.title == "New"
        assert updated.content == "new"
        assert updated.color == "#00FF00"
        assert (updated.x, updated.y) == (5, 6)

    @pytest.mark.asyncio
    async def test_update_position_keeps_omitted_fields(self, db_session, make_group):
        group = await make_group()
        note = await note_service.create_note(
            db_session, group.id, NoteCreate(x=0, y=0, width=300, height=100, z_index=3)
        )

        moved = await note_service.update_position(
            db_session, note.id, NotePositionUpdate(x=40, y=50)
        )

        assert (moved.x, moved.y) == (40, 50)
        assert (moved.width, moved.height, moved.z_index) == (300, 100, 3)

    @pytest.mark.asyncio
    async def test_update_position_resizes(self, db_session, make_group):
        group = await make_group()
        note = await note_service.create_note(db_session, group.id, NoteCreate(x=0, y=0))

        moved = await note_service.update_position(
            db_session, note.id, NotePositionUpdate(x=1, y=2, width=250, height=180, z_index=9)
        )
        assert (moved.width, moved.height, moved.z_index) == (250, 180, 9)

    @pytest.mark.asyncio
    async def test_update_missing_note(self, db_session):
        with pytest.raises(NotFoundError):
            await note_service.update_position(db_session, 999, NotePositionUpdate(x=0, y=0))


class TestDeleteNotes:

    @pytest.mark.asyncio
    async def test_delete_note(self, db_session, make_group):
        group = await make_group()
        note = await note_service.create_note(db_session, group.id, NoteCreate(x=0, y=0))

        await note_service.delete_note(db_session, note.id)

        with pytest.raises(NotFoundError):
            await note_service.get_note(db_session, note.id)

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, db_session):
        with pytest.raises(NotFoundError):
            await note_service.delete_note(db_session, 999)

    @pytest.mark.asyncio
    async def test_clear_group_leaves_other_groups(self, db_session, make_group):
        group_a = await make_group("A")
        group_b = await make_group("B")
        for _ in range(3):
            await note_service.create_note(db_session, group_a.id, NoteCreate(x=0, y=0))
        kept = await note_service.create_note(db_session, group_b.id, NoteCreate(x=0, y=0))

        result = await note_service.clear_group_notes(db_session, group_a.id)

        assert result.deleted_count == 3
        assert (await note_service.list_notes(db_session, group_a.id)).notes == []
        remaining = await note_service.list_notes(db_session, group_b.id)
        assert [n.id for n in remaining.notes] == [kept.id]

    @pytest.mark.asyncio
    async def test_clear_empty_group(self, db_session, make_group):
        group = await make_group()
        result = await note_service.clear_group_notes(db_session, group.id)
        assert result.deleted_count == 0


class TestNoteServiceMocked:
    """Lookups that never reach the store."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_note(mock_db_session, 42)
        assert exc_info.value.message == "note with ID '42' was not found"
