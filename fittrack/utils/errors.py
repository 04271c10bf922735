"""
FitTrack - Custom Exception Classes.

One hierarchy shared by the workout API and the workout view client. The
API renders any of these as ``{"error": message}`` with ``status_code``;
the client raises them from HTTP responses and transport failures.
"""

from typing import Optional


class FitTrackException(Exception):
    """
    Base exception class for FitTrack.

    Subclasses set ``default_message`` and ``status_code``; callers may
    override the message per raise.

    Attributes:
        message: Human-readable error message, safe to show users.
        status_code: HTTP status code for the error.
        detail: Extra context for logs, defaults to ``message``.
    """

    default_message = "An error occurred"
    status_code = 500

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        detail: Optional[str] = None
    ):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail or self.message
        super().__init__(self.message)


class AuthenticationError(FitTrackException):
    """
    No valid identity is attached to the call.

    Raised for a missing or expired bearer token, a token without an owner
    id, and wrong login credentials.
    """

    default_message = "Authentication failed"
    status_code = 401


class ValidationError(FitTrackException):
    """A required field is missing or blank."""

    default_message = "Validation error"
    status_code = 400


class NotFoundOrForbiddenError(FitTrackException):
    """
    The record does not exist for the caller.

    A record owned by somebody else is reported exactly like a missing one,
    so non-owners cannot probe for existence.
    """

    default_message = "Workout not found or not authorized"
    status_code = 404


class InvalidIdentifierError(FitTrackException):
    default_message = "Invalid Workout ID format."
    status_code = 400


class ConflictError(FitTrackException):
    """Email already registered."""

    default_message = "Resource conflict"
    status_code = 409


class NormalizationError(FitTrackException):
    """
    A list response could not be normalized (client side).

    Distinct from an empty result: the body was undecodable or had a shape
    that carries no workout array.
    """

    default_message = "Unexpected data format from API."
    status_code = 502


class NetworkError(FitTrackException):
    """The API could not be reached (client side)."""

    default_message = "Network error or API is unreachable."
    status_code = 503
