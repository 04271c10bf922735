"""FitTrack - Utilities Package."""

from fittrack.utils.errors import (
    FitTrackException,
    AuthenticationError,
    ValidationError,
    NotFoundOrForbiddenError,
    InvalidIdentifierError,
    ConflictError,
    NormalizationError,
    NetworkError,
)

__all__ = [
    "FitTrackException",
    "AuthenticationError",
    "ValidationError",
    "NotFoundOrForbiddenError",
    "InvalidIdentifierError",
    "ConflictError",
    "NormalizationError",
    "NetworkError",
]
