"""
FitTrack API - Authentication Middleware.

JWT verification for protected routes.
"""

from typing import Optional

from fastapi import Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from fittrack.services.auth import verify_token
from fittrack.utils.errors import AuthenticationError


class JWTBearer(HTTPBearer):
    """
    JWT Bearer token authentication.

    Custom HTTPBearer that validates JWT tokens on protected routes and
    resolves them to the owner id.

    Attributes:
        auto_error: Whether to raise on missing or invalid credentials.
    """

    def __init__(self, auto_error: bool = True):
        # The parent never raises; failures are reported as 401 below.
        super().__init__(auto_error=False)
        self.raise_on_failure = auto_error

    def _fail(self, message: str) -> None:
        if self.raise_on_failure:
            raise AuthenticationError(message)
        return None

    async def __call__(self, request: Request) -> Optional[str]:
        """
        Verify JWT token from Authorization header.

        Args:
            request: FastAPI request object.

        Returns:
            Optional[str]: Owner id from the token if valid.

        Raises:
            AuthenticationError: 401 if the token is missing or invalid.
        """
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)

        if not credentials:
            return self._fail("Authentication required")

        payload = verify_token(credentials.credentials)
        if not payload:
            return self._fail("Invalid or expired token")

        user_id = payload.get("id") or payload.get("sub")
        if not user_id:
            return self._fail("Invalid token payload")

        request.state.user_id = user_id
        return user_id


# Global JWT bearer instance for dependency injection
jwt_bearer = JWTBearer()
