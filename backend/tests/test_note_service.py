"""
Notes API — Note Service Unit Tests
=====================================

What:  Tests for NoteService business logic against a mocked AsyncSession.
How:   The session's execute/get/flush are AsyncMocks; no database needed.

What we test:
    ✅ Missing note on get/update raises NotFoundError
    ✅ Update applies only the fields that were sent
    ✅ Delete of an unknown id never touches the session
    ✅ Create for an unknown owner raises AuthenticationError before inserting
    ✅ SQLAlchemy failures surface as DatabaseError
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import AuthenticationError, DatabaseError, NotFoundError
from app.schemas.note import NoteCreate, NoteUpdate
from app.services.note_service import NoteService


def mock_note(**overrides):
    note = MagicMock()
    note.id = overrides.get("id", uuid.uuid4())
    note.content = overrides.get("content", "HTML is easy")
    note.important = overrides.get("important", False)
    note.user_id = overrides.get("user_id", None)
    return note


def returns(session, value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    session.execute.return_value = result


class TestNoteServiceGet:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session):
        note = mock_note(important=True)
        returns(mock_db_session, note)

        result = await self.service.get_note(mock_db_session, note.id)

        assert result.id == note.id
        assert result.content == "HTML is easy"
        assert result.important is True
        assert result.user is None

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        returns(mock_db_session, None)

        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_db_session, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_get_note_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await self.service.get_note(mock_db_session, uuid.uuid4())


class TestNoteServiceUpdate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_update_applies_sent_fields_only(self, mock_db_session):
        owner = uuid.uuid4()
        note = mock_note(content="old", important=False, user_id=owner)
        returns(mock_db_session, note)

        result = await self.service.update_note(
            mock_db_session, note.id, NoteUpdate(important=True)
        )

        assert result.important is True
        assert result.content == "old"
        assert result.user == owner
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_not_found(self, mock_db_session):
        returns(mock_db_session, None)

        with pytest.raises(NotFoundError):
            await self.service.update_note(mock_db_session, uuid.uuid4(), NoteUpdate(content="x"))
        mock_db_session.flush.assert_not_awaited()

    def test_update_changes_skip_unset_and_null(self):
        assert NoteUpdate(content="x").changes() == {"content": "x"}
        assert NoteUpdate(content=None, important=True).changes() == {"important": True}
        assert NoteUpdate().changes() == {}


class TestNoteServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_unknown_is_noop(self, mock_db_session):
        returns(mock_db_session, None)

        await NoteService().delete_note(mock_db_session, uuid.uuid4())

        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_existing(self, mock_db_session):
        note = mock_note(user_id=uuid.uuid4())
        returns(mock_db_session, note)

        await NoteService().delete_note(mock_db_session, note.id)

        mock_db_session.delete.assert_awaited_once_with(note)
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_with_pruning_updates_owner(self, mock_db_session):
        note = mock_note(user_id=uuid.uuid4())
        owner = MagicMock()
        returns(mock_db_session, note)
        mock_db_session.get.return_value = owner

        await NoteService(prune_user_notes_on_delete=True).delete_note(mock_db_session, note.id)

        owner.remove_note.assert_called_once_with(note.id)
        mock_db_session.delete.assert_awaited_once_with(note)


class TestNoteServiceCreate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_for_unknown_owner(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(AuthenticationError):
            await self.service.create_note(
                mock_db_session, NoteCreate(content="x"), owner_id=uuid.uuid4()
            )
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_database_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))
        )

        with pytest.raises(DatabaseError):
            await self.service.create_note(mock_db_session, NoteCreate(content="x"))
