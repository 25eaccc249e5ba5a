"""
Notes API - Note Service (HTTP ↔ SQL mapping)
==============================================

What:  All business rules for notes: input normalization, timestamp
       assignment, ordering, and the SQL issued for each operation.
How:   Each method receives the request's AsyncSession, issues one statement
       (or a write followed by a read-back) and returns response schemas.
Who:   Called by the route handlers in notes_api.routes.notes.

Statement map:
    list    SELECT ... ORDER BY created_at DESC, id DESC
    get     SELECT ... WHERE id = :id
    create  INSERT, COMMIT, then SELECT by the new id
    update  UPDATE ... WHERE id = :id (only supplied columns), COMMIT, SELECT
    delete  DELETE ... WHERE id = :id

Writes are committed here, before the read-back, so that a failing commit
is reported to the same request instead of after the response is sent.

Error Handling Strategy:
    ValidationError and NotFoundError propagate untouched. Anything raised by
    SQLAlchemy is wrapped in StoreError carrying the driver's message.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import NotFoundError, StoreError, ValidationError
from notes_api.models.note import Note
from notes_api.schemas.note import DeleteResponse, NoteCreate, NoteResponse, NoteUpdate

logger = logging.getLogger(__name__)

_NOTE_ID_PATTERN = re.compile(r"[0-9]+")

# Largest value a SQLite INTEGER column can hold
MAX_NOTE_ID = 2**63 - 1

UPDATABLE_FIELDS = ("title", "content")


def utc_now_iso() -> str:
    """
    Current time as an ISO 8601 UTC string with millisecond precision.

    Example: 2026-01-19T12:34:56.789Z

    The width is fixed, so comparing two of these strings compares the instants.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_note_id(raw: Any) -> int:
    """
    Parse a note id taken from the URL.

    Accepts only plain decimal digits with a value above zero, so "abc",
    "1.5", "-3" and "0" are all rejected.
    Ids too large for SQLite still parse; no stored row can match them.

    Raises:
        ValidationError: the id is not a positive integer
    """
    if isinstance(raw, bool):
        raise ValidationError(message="invalid id", field="id")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _NOTE_ID_PATTERN.fullmatch(raw):
        value = int(raw)
    else:
        raise ValidationError(message="invalid id", field="id")
    if value <= 0:
        raise ValidationError(message="invalid id", field="id")
    return value


def _ensure_storable(note_id: int) -> None:
    if note_id > MAX_NOTE_ID:
        raise NotFoundError(resource="note", resource_id=note_id)


def _clean_text(value: Optional[str], field: str, message: str) -> str:
    # Non-strings are already rejected by the schemas; None means missing or null
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message=message, field=field)
    return value.strip()


def _store_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class NoteService:
    """
    Business logic layer for note operations.

    Stateless: the session is passed into every call, which keeps the
    service safe to share across concurrent requests.
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        Return every note, newest first.

        Ordering is created_at DESC with id DESC as the tie-break, which keeps
        the order deterministic for notes created within the same millisecond.
        No pagination: the full set is always returned.
        """
        try:
            result = await db.execute(
                select(Note).order_by(desc(Note.created_at), desc(Note.id))
            )
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", _store_message(e))
            raise StoreError(message=_store_message(e), context={"operation": "list"})

        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by id.

        Raises:
            NotFoundError: no note has this id (→ 404)
            StoreError: the query failed (→ 500)
        """
        _ensure_storable(note_id)
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, _store_message(e))
            raise StoreError(message=_store_message(e), context={"note_id": note_id})

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteResponse:
        """
        Insert a new note and return it as stored.

        Steps:
            1. Trim title and content; both must be non-empty
            2. Stamp created_at with the current UTC time
            3. INSERT and COMMIT (the store assigns the id)
            4. Read the row back by its new id

        The read-back is the authoritative echo of the server-assigned
        id and created_at.

        Raises:
            ValidationError: title or content missing or blank (→ 400)
            StoreError: the insert or read-back failed (→ 500)
        """
        title = _clean_text(payload.title, "title", "title is required")
        content = _clean_text(payload.content, "content", "content is required")

        note = Note(title=title, content=content, created_at=utc_now_iso())
        try:
            db.add(note)
            await db.flush()
            new_id = note.id
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", _store_message(e))
            raise StoreError(message=_store_message(e), context={"operation": "create"})

        logger.info("Note %d created", new_id)
        return await self.get_note(db, new_id)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Partially update a note's title and/or content.

        Only fields present in the request body are written; created_at is
        never part of the UPDATE. A body with neither field is rejected
        rather than treated as a successful no-op.

        Raises:
            ValidationError: invalid id, blank/null field, or nothing to update (→ 400)
            NotFoundError: no note has this id (→ 404)
            StoreError: the update or read-back failed (→ 500)
        """
        note_id = parse_note_id(note_id)

        changes = {}
        for field in UPDATABLE_FIELDS:
            if field in payload.model_fields_set:
                changes[field] = _clean_text(
                    getattr(payload, field),
                    field,
                    f"{field} must be a non-empty string",
                )

        if not changes:
            raise ValidationError(message="nothing to update")
        _ensure_storable(note_id)

        try:
            result = await db.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(**changes)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource="note", resource_id=note_id)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, _store_message(e))
            raise StoreError(message=_store_message(e), context={"note_id": note_id})

        logger.info("Note %d updated: %s", note_id, ", ".join(sorted(changes)))
        return await self.get_note(db, note_id)

    async def delete_note(self, db: AsyncSession, note_id: int) -> DeleteResponse:
        """
        Permanently remove a note.

        Raises:
            ValidationError: invalid id (→ 400)
            NotFoundError: no note has this id (→ 404)
            StoreError: the delete failed (→ 500)
        """
        note_id = parse_note_id(note_id)
        _ensure_storable(note_id)

        try:
            result = await db.execute(
                delete(Note)
                .where(Note.id == note_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource="note", resource_id=note_id)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, _store_message(e))
            raise StoreError(message=_store_message(e), context={"note_id": note_id})

        logger.info("Note %d deleted", note_id)
        return DeleteResponse(deleted=True)


# Stateless, so one shared instance serves every request
note_service = NoteService()
