"""FitTrack API - Pydantic Schemas Package."""

from fittrack.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    UserDetailsResponse,
)
from fittrack.schemas.workout import (
    WorkoutStatus,
    WorkoutCreateRequest,
    WorkoutUpdateRequest,
    WorkoutOut,
    WorkoutCreatedResponse,
    WorkoutUpdatedResponse,
    MessageResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "UserDetailsResponse",
    "WorkoutStatus",
    "WorkoutCreateRequest",
    "WorkoutUpdateRequest",
    "WorkoutOut",
    "WorkoutCreatedResponse",
    "WorkoutUpdatedResponse",
    "MessageResponse",
]
