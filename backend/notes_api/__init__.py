"""
Notes API - Application Package Initializer
============================================

What: Marks the `notes_api` directory as a Python package.
Who:  Used by uvicorn (`notes_api.main:app`), pytest, and `python -m notes_api`.

Architecture Note:
    The service is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     NoteService (HTTP ↔ SQL logic)  │  ← Validation, timestamps, ordering
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy over SQLite
    └─────────────────────────────────────┘

    Routes never issue SQL; the service never builds HTTP responses.
"""

__version__ = "1.0.0"
