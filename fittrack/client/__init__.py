"""FitTrack - Workout View Client Package."""

from fittrack.client.api import WorkoutApiClient
from fittrack.client.normalize import (
    ListShape,
    Workout,
    classify_list_body,
    normalize_list_response,
    order_for_display,
)
from fittrack.client.session import SessionContext, SessionManager, owner_id_from_token
from fittrack.client.view import WorkoutView

__all__ = [
    "WorkoutApiClient",
    "ListShape",
    "Workout",
    "classify_list_body",
    "normalize_list_response",
    "order_for_display",
    "SessionContext",
    "SessionManager",
    "owner_id_from_token",
    "WorkoutView",
]
