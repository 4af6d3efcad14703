"""
Notes API — Notes Route Handlers
==================================

What:  The five handlers mounted at /api/notes.
How:   Parse the path id and body, delegate to NoteService, set the status.

    GET    /api/notes        → 200, array of notes with owner attached
    GET    /api/notes/{id}   → 200 note | 404 empty
    POST   /api/notes        → 201 note | 401 {"error": "token invalid"}
    DELETE /api/notes/{id}   → 204 empty (also when the id is unknown)
    PUT    /api/notes/{id}   → 200 note | 404 empty
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import NoteOwnerDep, NoteServiceDep
from app.exceptions import ValidationError
from app.schemas.note import (
    AuthErrorResponse,
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    NoteWithUserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])


def parse_note_id(note_id: str) -> uuid.UUID:
    """Path ids must be UUIDs; anything else is a client error (400)."""
    try:
        return uuid.UUID(note_id)
    except ValueError:
        raise ValidationError(message="malformatted id", field="id")


@router.get(
    "",
    response_model=List[NoteWithUserResponse],
    summary="List all notes",
)
async def list_notes(
    response: Response,
    notes: NoteServiceDep,
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteWithUserResponse]:
    result = await notes.list_notes(db)
    response.headers["X-Total-Count"] = str(len(result))
    return result


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Note not found (empty body)"},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    notes: NoteServiceDep,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await notes.get_note(db, parse_note_id(note_id))


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    response_model_exclude_none=True,
    responses={
        201: {"description": "Note created", "model": NoteResponse},
        401: {"description": "Missing or invalid bearer token", "model": AuthErrorResponse},
    },
    summary="Create a note",
    description=(
        "Creates a note. Unless NOTES_REQUIRE_AUTH is disabled, requires "
        "`Authorization: Bearer <token>`; the note is owned by the token's user "
        "and appended to that user's notes."
    ),
)
async def create_note(
    payload: NoteCreate,
    owner_id: NoteOwnerDep,
    notes: NoteServiceDep,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await notes.create_note(db, payload, owner_id=owner_id)


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses={400: {"description": "Malformed id", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    notes: NoteServiceDep,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await notes.delete_note(db, parse_note_id(note_id))
    return Response(status_code=204)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Note not found (empty body)"},
    },
    summary="Update a note's content and importance",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    notes: NoteServiceDep,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await notes.update_note(db, parse_note_id(note_id), payload)
