"""
Notes API — Bearer Token Authentication
=========================================

What:  Extracts, verifies, and issues the signed tokens that identify a user.
How:   HMAC-signed JWTs (PyJWT). The token payload carries the user's `id`
       and `username`; `id` is the subject used to own new notes.
Who:   One TokenAuthenticator is built by create_app() from settings and
       stored on `app.state`; routes reach it through app.dependencies.

Header contract:
    Authorization: Bearer <token>
    A missing header or any other scheme counts as "no token".
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class TokenAuthenticator:
    """
    Verifies bearer tokens against a shared secret.

    Args:
        secret:     HMAC secret. An empty secret rejects every token.
        algorithm:  JWT algorithm (HS256 by default).
        expires_in: Lifetime in seconds for tokens from issue_token();
                    None or 0 issues tokens without an `exp` claim.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: Optional[int] = None,
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in or None

    @staticmethod
    def extract_token(authorization: Optional[str]) -> Optional[str]:
        """Return the token from an `Authorization` header value, or None."""
        if not authorization:
            return None
        if not authorization.lower().startswith(BEARER_PREFIX):
            return None
        token = authorization[len(BEARER_PREFIX):].strip()
        return token or None

    def decode(self, token: str) -> dict:
        """
        Verify a token's signature (and expiry, when present).

        Raises:
            AuthenticationError: signature mismatch, expired, or undecodable
        """
        if not self._secret:
            raise AuthenticationError("no secret configured")
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("token expired")
        except jwt.PyJWTError as e:
            raise AuthenticationError("token verification failed", context={"error": type(e).__name__})

    def authenticate(self, authorization: Optional[str]) -> uuid.UUID:
        """
        Resolve an `Authorization` header value to the caller's user id.

        Raises:
            AuthenticationError: no bearer token, verification failure, or a
                payload without a well-formed `id` claim
        """
        token = self.extract_token(authorization)
        if token is None:
            raise AuthenticationError("token missing")

        payload = self.decode(token)
        subject = payload.get("id")
        if not subject:
            raise AuthenticationError("token has no user id")
        try:
            return uuid.UUID(str(subject))
        except ValueError:
            raise AuthenticationError("token user id is malformed")

    def issue_token(self, user_id: uuid.UUID, username: str) -> str:
        """Sign a token for a user. Used by provisioning scripts and tests."""
        payload = {"id": str(user_id), "username": username}
        if self.expires_in:
            payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=self.expires_in)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)
