"""
Notes API — Note SQLAlchemy Model
===================================

What:  ORM model representing the `notes` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design:
    - id: UUID generated in Python at flush time (portable across PostgreSQL and SQLite)
    - content: required text body
    - important: boolean flag, false unless the client says otherwise
    - user_id: optional owner; set once at creation, never reassigned
    - created_at: UTC timestamp; gives GET /api/notes a stable order
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.user import User


class Note(Base):
    """
    A short text item with an importance flag.

    Lifecycle:
        1. Created by POST /api/notes (owner set when auth is required)
        2. Read by GET /api/notes and GET /api/notes/{id}
        3. content/important changed by PUT /api/notes/{id}
        4. Removed by DELETE /api/notes/{id}
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier assigned at creation",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body",
    )

    important: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
        comment="Importance flag",
    )

    # Deleting a user is outside this service; keep notes and clear the owner
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="Owning user, set at creation only",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    # Loaded explicitly with selectinload(); lazy loading is not available
    # on async sessions
    user: Mapped[Optional["User"]] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
        Index("idx_notes_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, important={self.important}, "
            f"user_id={self.user_id})>"
        )
