"""
Notes API - Note Service Unit Tests
====================================

What:  Tests for NoteService rules (validation, trimming, statements issued).
How:   Uses mock DB sessions; no real database.

What we test:
    ✅ Id parsing rejects non-integers, negatives and zero
    ✅ Create trims, stamps created_at, commits, reads back
    ✅ Blank fields are rejected before any SQL runs
    ✅ Update writes only supplied columns; empty update is rejected
    ✅ Missing rows raise NotFoundError; driver errors become StoreError
"""

import re

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import OperationalError

from notes_api.exceptions import NotFoundError, StoreError, ValidationError
from notes_api.models.note import Note
from notes_api.schemas.note import NoteCreate, NoteUpdate
from notes_api.services.note_service import (
    MAX_NOTE_ID,
    NoteService,
    parse_note_id,
    utc_now_iso,
)

ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def _result_with_note(note):
    result = MagicMock()
    result.scalar_one_or_none.return_value = note
    return result


def _result_with_rowcount(count):
    result = MagicMock()
    result.rowcount = count
    return result


class TestParseNoteId:

    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (99999, 99999)])
    def test_accepts_positive_integers(self, raw, expected):
        assert parse_note_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "1.5", "-3", "0", "", "1e3", " 5", "5\n", 0, -1, True, None])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_note_id(raw)
        assert exc_info.value.message == "invalid id"
        assert exc_info.value.field == "id"


class TestUtcNowIso:

    def test_format_is_iso_8601_utc_with_millis(self):
        assert ISO_UTC.match(utc_now_iso())

    def test_later_timestamps_sort_after_earlier_ones(self):
        first = utc_now_iso()
        second = utc_now_iso()
        assert second >= first


class TestNoteServiceList:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        assert await self.service.list_notes(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_orders_by_created_at_then_id_descending(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [
            Note(id=2, title="b", content="b", created_at="2026-01-19T12:00:00.001Z"),
            Note(id=1, title="a", content="a", created_at="2026-01-19T12:00:00.000Z"),
        ]
        mock_db_session.execute.return_value = result

        notes = await self.service.list_notes(mock_db_session)

        assert [n.id for n in notes] == [2, 1]
        statement = mock_db_session.execute.await_args.args[0]
        assert "ORDER BY notes.created_at DESC, notes.id DESC" in str(statement)

    @pytest.mark.asyncio
    async def test_list_wraps_driver_errors(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("no such table: notes")
        )

        with pytest.raises(StoreError) as exc_info:
            await self.service.list_notes(mock_db_session)
        assert exc_info.value.message == "no such table: notes"


class TestNoteServiceCreate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_trims_and_reads_back(self, mock_db_session):
        async def assign_id():
            mock_db_session.add.call_args.args[0].id = 1

        mock_db_session.flush = AsyncMock(side_effect=assign_id)
        mock_db_session.execute.side_effect = lambda stmt: _result_with_note(
            mock_db_session.add.call_args.args[0]
        )

        result = await self.service.create_note(
            mock_db_session, NoteCreate(title="  Groceries ", content="\tMilk, eggs\n")
        )

        assert result.id == 1
        assert result.title == "Groceries"
        assert result.content == "Milk, eggs"
        assert ISO_UTC.match(result.created_at)
        mock_db_session.commit.assert_awaited_once()
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title, content, field", [
        ("  ", "body", "title"),
        (None, "body", "title"),
        ("title", "", "content"),
        ("title", None, "content"),
    ])
    async def test_create_rejects_blank_fields(self, mock_db_session, title, content, field):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_note(
                mock_db_session, NoteCreate(title=title, content=content)
            )

        assert exc_info.value.field == field
        assert exc_info.value.message == f"{field} is required"
        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_wraps_driver_errors(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("database is locked"))
        )

        with pytest.raises(StoreError) as exc_info:
            await self.service.create_note(
                mock_db_session, NoteCreate(title="t", content="c")
            )
        assert exc_info.value.message == "database is locked"
        mock_db_session.commit.assert_not_awaited()


class TestNoteServiceGet:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session, sample_note_data):
        mock_db_session.execute.return_value = _result_with_note(Note(**sample_note_data))

        result = await self.service.get_note(mock_db_session, sample_note_data["id"])

        assert result.model_dump() == sample_note_data

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with_note(None)

        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_db_session, 99999)

    @pytest.mark.asyncio
    async def test_id_beyond_sqlite_range_is_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_db_session, MAX_NOTE_ID + 1)

        mock_db_session.execute.assert_not_awaited()


class TestNoteServiceUpdate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_update_content_only(self, mock_db_session, sample_note_data):
        updated = Note(**{**sample_note_data, "content": "Milk, eggs, bread"})
        mock_db_session.execute.side_effect = [
            _result_with_rowcount(1),
            _result_with_note(updated),
        ]

        result = await self.service.update_note(
            mock_db_session, 7, NoteUpdate(content=" Milk, eggs, bread ")
        )

        assert result.content == "Milk, eggs, bread"
        assert result.title == sample_note_data["title"]
        assert result.created_at == sample_note_data["created_at"]

        update_stmt = mock_db_session.execute.await_args_list[0].args[0]
        params = update_stmt.compile().params
        assert params["content"] == "Milk, eggs, bread"
        assert "title" not in params
        assert "created_at" not in params
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_with_no_fields_is_rejected(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_note(mock_db_session, 7, NoteUpdate())

        assert exc_info.value.message == "nothing to update"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_with_explicit_null_is_rejected(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_note(mock_db_session, 7, NoteUpdate(title=None))

        assert exc_info.value.message == "title must be a non-empty string"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_with_blank_field_is_rejected(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_note(
                mock_db_session, 7, NoteUpdate(title="ok", content="   ")
            )

        assert exc_info.value.field == "content"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_missing_note(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with_rowcount(0)

        with pytest.raises(NotFoundError):
            await self.service.update_note(mock_db_session, 99999, NoteUpdate(title="x"))

        mock_db_session.commit.assert_not_awaited()


class TestNoteServiceDelete:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_delete_existing_note(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with_rowcount(1)

        result = await self.service.delete_note(mock_db_session, 7)

        assert result.deleted is True
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with_rowcount(0)

        with pytest.raises(NotFoundError):
            await self.service.delete_note(mock_db_session, 99999)

        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_rejects_invalid_id(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.delete_note(mock_db_session, 0)

        mock_db_session.execute.assert_not_awaited()
