"""
Notes API — User SQLAlchemy Model
===================================

What:  ORM model representing the `users` table.
Who:   Read by NoteService when a note is created with an owner, and when
       listing notes with their owner attached.

The service never creates users; accounts are provisioned elsewhere and
authenticate with bearer tokens whose `id` claim is the user's id.

note_ids:
    Ordered JSON array of the ids of notes this user created, oldest first.
    It only grows, by appending, through the create-note flow. Deleting a
    note leaves its id here unless PRUNE_USER_NOTES_ON_DELETE is enabled.
"""

import uuid
from typing import List, Optional

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    note_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    def append_note(self, note_id: uuid.UUID) -> None:
        """Record a newly created note at the end of this user's list."""
        # Reassign instead of mutating in place so the JSON column is flagged dirty
        self.note_ids = [*(self.note_ids or []), str(note_id)]

    def remove_note(self, note_id: uuid.UUID) -> None:
        self.note_ids = [nid for nid in (self.note_ids or []) if nid != str(note_id)]

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', notes={len(self.note_ids or [])})>"
