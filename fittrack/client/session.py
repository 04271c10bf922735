"""
FitTrack Client - Session Context.

Explicit session state for the workout client. Every login and logout
starts a new generation; a response is applied only if the generation it
was issued under is still current.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from jose import jwt, JWTError

from fittrack.utils.errors import AuthenticationError

logger = logging.getLogger(__name__)


def owner_id_from_token(token: str) -> Optional[str]:
    """
    Read the owner id out of a bearer token without verifying it.

    The id is for display; the API does its own verification.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None
    owner_id = claims.get("id") or claims.get("sub")
    return str(owner_id) if owner_id else None


@dataclass(frozen=True)
class SessionContext:
    """
    Identity a request is issued under.

    Attributes:
        generation: Monotonic counter, bumped on every login and logout.
        token: Bearer token, None when signed out.
        owner_id: Owner id decoded from the token, for display only.
    """

    generation: int
    token: Optional[str] = None
    owner_id: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    @property
    def headers(self) -> dict:
        """Authorization header for this session."""
        if not self.token:
            raise AuthenticationError("Not authenticated")
        return {"Authorization": f"Bearer {self.token}"}


class SessionManager:
    """Holds the current session and hands out new generations."""

    def __init__(self):
        self._current = SessionContext(generation=0)

    @property
    def current(self) -> SessionContext:
        return self._current

    def start(self, token: str) -> SessionContext:
        """
        Begin a session for ``token``.

        Raises:
            AuthenticationError: If the token carries no owner id.
        """
        owner_id = owner_id_from_token(token)
        if not owner_id:
            raise AuthenticationError(
                "Authentication successful, but no identifiable user ID found in the token."
            )
        self._current = SessionContext(
            generation=self._current.generation + 1,
            token=token,
            owner_id=owner_id,
        )
        logger.info(f"Session {self._current.generation} started for user {owner_id}")
        return self._current

    def end(self) -> SessionContext:
        """Sign out; responses from earlier generations become stale."""
        self._current = SessionContext(generation=self._current.generation + 1)
        logger.info(f"Session ended, now at generation {self._current.generation}")
        return self._current

    def is_current(self, session: SessionContext) -> bool:
        return session.generation == self._current.generation
