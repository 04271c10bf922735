"""FitTrack API - Services Package."""

from .auth import (
    hash_password,
    verify_password,
    create_access_token,
    verify_token,
    get_user_id_from_token,
)
from .workout_store import WorkoutStore, parse_workout_id

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "verify_token",
    "get_user_id_from_token",
    "WorkoutStore",
    "parse_workout_id",
]
