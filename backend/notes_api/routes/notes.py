"""
Notes API - Notes Route Handlers
=================================

What:  CRUD endpoints for notes under /api/notes.
How:   Extracts path/body values, delegates to NoteService, returns JSON.
Who:   Called by the browser notes client.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.database import get_db_session
from notes_api.schemas.note import (
    DeleteResponse,
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from notes_api.services.note_service import note_service, parse_note_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


def valid_note_id(note_id: str) -> int:
    """
    Path dependency turning the raw {note_id} segment into a positive int.

    Takes a str so that every malformed id, including zero and negatives,
    is answered with 400 "invalid id".
    """
    return parse_note_id(note_id)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all notes, newest first",
)
async def list_notes(db: AsyncSession = Depends(get_db_session)) -> List[NoteResponse]:
    """Every note ordered by created_at DESC, id DESC. No pagination."""
    return await note_service.list_notes(db)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a single note by id",
)
async def get_note(
    note_id: int = Depends(valid_note_id),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing or empty title/content", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a note",
    description=(
        "Creates a note from `title` and `content` (both trimmed, both required). "
        "`id` and `created_at` are assigned by the server and echoed back."
    ),
)
async def create_note(
    payload: Optional[NoteCreate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    # A request without a body is validated as an empty object
    if payload is None:
        payload = NoteCreate()
    return await note_service.create_note(db, payload)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid id, invalid field, or nothing to update", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Update a note's title and/or content",
    description=(
        "Partial update: only the fields present in the body are changed. "
        "`created_at` is never modified. An empty body is rejected."
    ),
)
async def update_note(
    payload: Optional[NoteUpdate] = None,
    note_id: int = Depends(valid_note_id),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    if payload is None:
        payload = NoteUpdate()
    return await note_service.update_note(db, note_id, payload)


@router.delete(
    "/notes/{note_id}",
    response_model=DeleteResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int = Depends(valid_note_id),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    return await note_service.delete_note(db, note_id)
