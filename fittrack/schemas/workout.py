"""
FitTrack API - Workout Schemas.

Pydantic schemas for workout requests and responses. Field names on the
wire are camelCase (``dateAdded``, ``userId``, ``updatedWorkout``) to match
what the front end has always consumed.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, BeforeValidator, field_validator


class WorkoutStatus(str, Enum):
    """Lifecycle status of a workout."""

    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


def coerce_status(value: Any) -> Any:
    """
    Map a status string onto its canonical spelling.

    Older records were written as ``"pending"``; matching is case-insensitive
    so they load as ``WorkoutStatus.PENDING``.
    """
    if isinstance(value, str):
        for member in WorkoutStatus:
            if member.value.lower() == value.strip().lower():
                return member
    return value


StatusField = Annotated[WorkoutStatus, BeforeValidator(coerce_status)]

DEFAULT_STATUS = WorkoutStatus.PENDING


def as_stored_utc(value: datetime) -> datetime:
    """
    The form a timestamp takes once MongoDB has stored it.

    BSON dates are UTC with millisecond precision; naive values are UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def _text_or_none(value: Any) -> Any:
    # The form sends duration from a number input, so accept bare numbers.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class WorkoutCreateRequest(BaseModel):
    """
    Schema for adding a workout.

    Attributes:
        name: Workout name.
        duration: Free-form duration text, e.g. "30 mins".
        status: Optional initial status (defaults to Pending).
        date_added: Optional creation timestamp (defaults to now).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Morning Run",
                "duration": "30 mins",
                "status": "Pending"
            }
        }
    )

    name: Optional[str] = Field(None, description="Workout name (required)")
    duration: Optional[str] = Field(None, description="Workout duration (required)")
    status: Optional[StatusField] = Field(None, description="Pending/Completed/Cancelled")
    date_added: Optional[datetime] = Field(None, alias="dateAdded")

    @field_validator("name", "duration", mode="before")
    @classmethod
    def accept_numbers(cls, value: Any) -> Any:
        return _text_or_none(value)


class WorkoutUpdateRequest(BaseModel):
    """
    Schema for a partial workout update.

    Only the supplied fields are overwritten.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"status": "Cancelled"}
        }
    )

    name: Optional[str] = None
    duration: Optional[str] = None
    status: Optional[StatusField] = None

    @field_validator("name", "duration", mode="before")
    @classmethod
    def accept_numbers(cls, value: Any) -> Any:
        return _text_or_none(value)


class WorkoutOut(BaseModel):
    """Workout record as returned to clients."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    duration: str
    status: WorkoutStatus
    date_added: datetime = Field(..., alias="dateAdded")
    user_id: str = Field(..., alias="userId")

    @field_validator("date_added")
    @classmethod
    def same_as_stored(cls, value: datetime) -> datetime:
        return as_stored_utc(value)

    @classmethod
    def from_document(cls, workout) -> "WorkoutOut":
        """Build the wire representation from a ``WorkoutDocument``."""
        return cls(
            id=str(workout.id),
            name=workout.name,
            duration=workout.duration,
            status=workout.status,
            date_added=workout.date_added,
            user_id=workout.user_id,
        )


class WorkoutCreatedResponse(BaseModel):
    """Response for a created workout."""

    message: str = "Workout successfully added"
    workout: WorkoutOut


class WorkoutUpdatedResponse(BaseModel):
    """Response for an updated or completed workout."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    updated_workout: WorkoutOut = Field(..., alias="updatedWorkout")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


WorkoutList = List[WorkoutOut]
