"""
Dependency injection for FastAPI routes.

The authenticator, the note service and the auth mode are attached to
`app.state` by create_app(); these helpers hand them to route handlers.
"""

import uuid
from typing import Annotated, Optional

from fastapi import Depends, Request

from app.auth import TokenAuthenticator
from app.services.note_service import NoteService


def get_authenticator(request: Request) -> TokenAuthenticator:
    return request.app.state.authenticator


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


AuthenticatorDep = Annotated[TokenAuthenticator, Depends(get_authenticator)]
NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]


def get_note_owner(request: Request, authenticator: AuthenticatorDep) -> Optional[uuid.UUID]:
    """
    Id of the user creating a note, or None when auth is switched off.

    Raises AuthenticationError (→ 401) when auth is required and the
    request carries no valid bearer token.
    """
    if not request.app.state.notes_require_auth:
        return None
    return authenticator.authenticate(request.headers.get("Authorization"))


NoteOwnerDep = Annotated[Optional[uuid.UUID], Depends(get_note_owner)]
