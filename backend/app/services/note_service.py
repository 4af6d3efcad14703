"""
Notes API — Note Service (Business Logic)
===========================================

What:  The five note operations: list, get, create, delete, update.
How:   Each method takes the request's AsyncSession, runs its queries, and
       returns response schemas. Writes are flushed here and committed once
       by get_db_session at the end of the request.
Who:   Called by the route handlers in app/routes/notes.py.

Create flow (authenticated):
    ┌───────────────┐    ┌──────────────┐    ┌──────────────────┐
    │  Load owner   │───▶│ Insert note  │───▶│ Append note id   │
    │  (users)      │    │ (notes)      │    │ to owner.note_ids│
    └───────────────┘    └──────────────┘    └──────────────────┘
    All three run in the request's transaction; a failure in any step
    rolls back the others.

Missing records:
    get_note and update_note raise NotFoundError (→ 404, empty body).
    delete_note treats a missing id as a no-op.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import AuthenticationError, DatabaseError, NotFoundError
from app.models import Note, User
from app.schemas.note import (
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    NoteWithUserResponse,
    UserSummary,
)

logger = logging.getLogger(__name__)


def to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        content=note.content,
        important=note.important,
        user=note.user_id,
    )


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        SQLAlchemy errors are wrapped in DatabaseError (generic 500, details
        logged). NotFoundError and AuthenticationError propagate as-is.

    Args:
        prune_user_notes_on_delete: when True, delete_note also removes the
            note id from its owner's note_ids
    """

    def __init__(self, prune_user_notes_on_delete: bool = False):
        self.prune_user_notes_on_delete = prune_user_notes_on_delete

    async def list_notes(self, db: AsyncSession) -> List[NoteWithUserResponse]:
        """
        Fetch every note, oldest first, with its owner's username and name.

        Query plan:
            SELECT * FROM notes ORDER BY created_at
            SELECT * FROM users WHERE id IN (...)   -- selectinload
        """
        try:
            result = await db.execute(
                select(Note)
                .options(selectinload(Note.user))
                .order_by(Note.created_at, Note.id)
            )
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [
            NoteWithUserResponse(
                id=note.id,
                content=note.content,
                important=note.important,
                user=UserSummary.model_validate(note.user) if note.user else None,
            )
            for note in notes
        ]

    async def get_note(self, db: AsyncSession, note_id: uuid.UUID) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        note = await self._find(db, note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return to_response(note)

    async def create_note(
        self,
        db: AsyncSession,
        payload: NoteCreate,
        owner_id: Optional[uuid.UUID] = None,
    ) -> NoteResponse:
        """
        Persist a new note, owned by `owner_id` when given.

        Workflow Steps:
            1. Load the owner (when owner_id is given)
            2. Insert the note with user_id set
            3. Append the note id to the owner's note_ids

        Raises:
            AuthenticationError: owner_id matches no stored user (→ 401)
            DatabaseError: an insert or update failed (→ 500)
        """
        try:
            owner: Optional[User] = None
            if owner_id is not None:
                owner = await db.get(User, owner_id)
                if owner is None:
                    raise AuthenticationError(
                        "token user does not exist", context={"user_id": str(owner_id)}
                    )

            note = Note(
                content=payload.content,
                important=payload.important,
                user_id=owner.id if owner else None,
            )
            db.add(note)
            await db.flush()  # Assigns the id without committing

            if owner is not None:
                owner.append_note(note.id)
                await db.flush()

        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Note %s created (owner=%s, important=%s)",
            note.id,
            owner.id if owner else None,
            note.important,
        )
        return to_response(note)

    async def delete_note(self, db: AsyncSession, note_id: uuid.UUID) -> None:
        """
        Remove a note if it exists. Deleting an unknown id is a no-op.

        The owner's note_ids keeps the id unless prune_user_notes_on_delete
        is set.
        """
        note = await self._find(db, note_id)
        if note is None:
            logger.info("Delete of unknown note %s ignored", note_id)
            return

        try:
            if self.prune_user_notes_on_delete and note.user_id is not None:
                owner = await db.get(User, note.user_id)
                if owner is not None:
                    owner.remove_note(note.id)
            await db.delete(note)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(note_id), "error_type": type(e).__name__},
            )
        logger.info("Note %s deleted", note_id)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: uuid.UUID,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Apply the provided content/important values and return the result.

        Fields absent from the body, or sent as null, keep their stored
        value. The owner is never changed.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
        """
        note = await self._find(db, note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        changes = payload.changes()
        for field, value in changes.items():
            setattr(note, field, value)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": str(note_id), "error_type": type(e).__name__},
            )

        logger.info("Note %s updated (%s)", note_id, ", ".join(sorted(changes)) or "no changes")
        return to_response(note)

    async def _find(self, db: AsyncSession, note_id: uuid.UUID) -> Optional[Note]:
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": str(note_id)},
            )
