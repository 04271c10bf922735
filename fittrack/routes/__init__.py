"""FitTrack API - Routes Package."""

from fittrack.routes import (
    auth,
    workout,
)

__all__ = [
    "auth",
    "workout",
]
