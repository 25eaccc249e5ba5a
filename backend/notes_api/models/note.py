"""
Notes API - Note SQLAlchemy Model
==================================

What:  ORM model representing the `notes` table in SQLite.
Who:   Used by NoteService for CRUD statements and by `init_schema()` to
       bootstrap the table.

Table Design:
    - INTEGER PRIMARY KEY AUTOINCREMENT: ids increase monotonically and a
      deleted id is never handed out again
    - created_at is TEXT holding a fixed-width ISO 8601 UTC string, so
      lexicographic order is chronological order
    - idx_notes_created_at supports ORDER BY created_at DESC, id DESC
"""

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base


class Note(Base):
    """
    A user note.

    Lifecycle:
        1. Inserted with trimmed title/content and a service-assigned created_at
        2. Title and/or content may be replaced by a partial update
        3. Removed permanently by a delete
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
        # AUTOINCREMENT keeps SQLite from reusing the id of the newest deleted row
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"
