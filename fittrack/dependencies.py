"""
FitTrack API - FastAPI Dependencies.

Dependency injection helpers for routes.
"""

from fastapi import Depends

from fittrack.middleware.auth import jwt_bearer
from fittrack.services.workout_store import WorkoutStore
from fittrack.utils.errors import AuthenticationError


async def get_current_user_id(
    user_id: str = Depends(jwt_bearer)
) -> str:
    """
    Get current authenticated user ID from JWT token.

    Raises:
        AuthenticationError: 401 if not authenticated.
    """
    if not user_id:
        raise AuthenticationError("Not authenticated")
    return user_id


async def get_workout_store(
    user_id: str = Depends(get_current_user_id)
) -> WorkoutStore:
    """
    Get a workout store scoped to the caller.

    Usage:
        @router.get("/getMyWorkouts")
        async def list_workouts(store: WorkoutStore = Depends(get_workout_store)):
            return await store.list()
    """
    return WorkoutStore(owner_id=user_id)
