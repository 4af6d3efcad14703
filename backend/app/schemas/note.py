"""
Notes API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the API contract for the notes resource.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.

Request bodies are validated here before the service touches storage:
    NoteCreate:  content required (non-empty), important optional; absent or
                 null is stored as false
    NoteUpdate:  content and important both optional; omitted or null fields
                 are left unchanged
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/notes."""
    content: str = Field(min_length=1, description="Note body")
    important: Optional[bool] = Field(default=False, description="Importance flag (default false)")

    @field_validator("important")
    @classmethod
    def null_important_is_false(cls, v: Optional[bool]) -> bool:
        """An explicit null is stored as false, same as leaving the field out."""
        return bool(v)


class NoteUpdate(BaseModel):
    """
    Body of PUT /api/notes/{id}.

    Only fields the client actually sends with a non-null value are applied;
    the service reads them with `model_dump(exclude_unset=True, exclude_none=True)`.
    """
    content: Optional[str] = Field(default=None, min_length=1, description="New note body")
    important: Optional[bool] = Field(default=None, description="New importance flag")

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class UserSummary(BaseModel):
    """Owner fields attached to each note in GET /api/notes."""
    id: uuid.UUID
    username: str
    name: Optional[str] = None

    model_config = {"from_attributes": True}


class NoteResponse(BaseModel):
    """
    What:  A single note.
    Who:   Returned by GET/PUT /api/notes/{id} and POST /api/notes.

    `user` is the owner's id; it is omitted from the JSON when the note
    has no owner (routes serialize with response_model_exclude_none).
    """
    id: uuid.UUID = Field(description="Unique note identifier")
    content: str = Field(description="Note body")
    important: bool = Field(description="Importance flag")
    user: Optional[uuid.UUID] = Field(default=None, description="Owning user id")


class NoteWithUserResponse(BaseModel):
    """
    What:  A note with its owner's username and name attached.
    Who:   Array items of GET /api/notes.
    """
    id: uuid.UUID
    content: str
    important: bool
    user: Optional[UserSummary] = None


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for 400/500 responses.

    Example:
        {
            "error": "validation_error",
            "message": "malformatted id",
            "details": {"field": "id"},
            "request_id": "1f0e2c3a"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class AuthErrorResponse(BaseModel):
    """Body of 401 responses: always {"error": "token invalid"}."""
    error: str = Field(default="token invalid")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
