"""
Notes API - Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract.
How:   FastAPI parses request bodies into the input models and serializes
       responses through the output models; OpenAPI docs come from both.

Design Decision:
    The input models only check *types* (a field, if sent, must be a JSON
    string). Presence and non-emptiness after trimming are business rules
    owned by NoteService, so a missing title yields "title is required"
    rather than FastAPI's generic 422 payload. Unknown keys are ignored.
"""

from typing import Optional

from pydantic import BaseModel, Field, StrictStr


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/notes. Both fields are required by NoteService."""
    title: Optional[StrictStr] = Field(default=None, description="Note title")
    content: Optional[StrictStr] = Field(default=None, description="Note body")

    model_config = {"extra": "ignore"}


class NoteUpdate(BaseModel):
    """
    Body of PUT /api/notes/{id}.

    Which fields were actually sent is read from `model_fields_set`, so an
    explicit `null` counts as supplied (and is rejected), while an omitted
    field keeps its stored value.
    """
    title: Optional[StrictStr] = Field(default=None, description="New title")
    content: Optional[StrictStr] = Field(default=None, description="New body")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Full representation of a note, as stored.

    Returned by list (as array items), get, create and update.
    """
    id: int = Field(description="Store-assigned identifier")
    title: str = Field(description="Trimmed title")
    content: str = Field(description="Trimmed content")
    created_at: str = Field(description="Creation time, ISO 8601 UTC (e.g. 2026-01-19T12:34:56.789Z)")

    model_config = {"from_attributes": True}


class DeleteResponse(BaseModel):
    """Returned by DELETE /api/notes/{id}."""
    deleted: bool = Field(default=True)


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note not found",
            "details": {"resource": "note", "resource_id": 99999},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health when the store answers."""
    ok: bool = Field(description="True when the store answered SELECT 1")
    db: str = Field(description="Absolute path of the SQLite database file")
    version: str = Field(description="Application version")
    uptime_seconds: float = Field(description="Seconds since service started")


class HealthErrorResponse(BaseModel):
    """Returned by GET /health with HTTP 500 when the store is unreachable."""
    ok: bool = Field(default=False)
    error: str = Field(description="Underlying store error message")
