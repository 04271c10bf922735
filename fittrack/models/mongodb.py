# fittrack/models/mongodb.py
"""
FitTrack MongoDB Document Models.

Beanie ODM models for MongoDB.
"""

from beanie import Document, Indexed
from pydantic import Field
from datetime import datetime, timezone

from fittrack.schemas.workout import DEFAULT_STATUS, StatusField


def utcnow() -> datetime:
    # BSON dates hold milliseconds; keep the in-memory value equal to the stored one
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class UserDocument(Document):
    """User model for MongoDB."""

    email: Indexed(str, unique=True)
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "users"


class WorkoutDocument(Document):
    """
    Workout record owned by a single user.

    ``id`` and ``user_id`` never change after insert; ``date_added`` is set
    once and is the only sort key.
    """

    user_id: str
    name: str
    duration: str
    status: StatusField = DEFAULT_STATUS
    date_added: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "workouts"
        indexes = [
            "user_id",
        ]

