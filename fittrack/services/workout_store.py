"""
FitTrack API - Workout Store Service.

Owner-scoped CRUD over the ``workouts`` collection. Every lookup matches on
both the record id and the owner id, so a record belonging to another user
is indistinguishable from one that does not exist.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from beanie import PydanticObjectId, UpdateResponse
from beanie.operators import Set

from fittrack.models.mongodb import WorkoutDocument
from fittrack.schemas.workout import DEFAULT_STATUS, WorkoutStatus, as_stored_utc
from fittrack.utils.errors import (
    InvalidIdentifierError,
    NotFoundOrForbiddenError,
    ValidationError,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "duration", "status")


def _require_text(field: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Workout {field} is required")
    return value


def parse_workout_id(workout_id: str) -> PydanticObjectId:
    """
    Parse a path id into an ObjectId.

    Raises:
        InvalidIdentifierError: If the id is not a 24-hex-digit ObjectId.
    """
    if not PydanticObjectId.is_valid(workout_id):
        raise InvalidIdentifierError(detail=f"'{workout_id}' is not a valid workout id")
    return PydanticObjectId(workout_id)


class WorkoutStore:
    """
    Workout operations bound to one authenticated owner.

    Attributes:
        owner_id: Id of the caller, taken from the verified bearer token.
    """

    def __init__(self, owner_id: str):
        self.owner_id = owner_id

    def _owned(self, workout_id: PydanticObjectId):
        return WorkoutDocument.find_one(
            WorkoutDocument.id == workout_id,
            WorkoutDocument.user_id == self.owner_id,
        )

    async def create(
        self,
        name: Optional[str],
        duration: Optional[str],
        status: Optional[WorkoutStatus] = None,
        date_added: Optional[datetime] = None,
    ) -> WorkoutDocument:
        """
        Insert a new workout for the owner.

        Args:
            name: Workout name (required).
            duration: Free-form duration text (required).
            status: Initial status, Pending when omitted.
            date_added: Creation timestamp, now when omitted.

        Returns:
            WorkoutDocument: The inserted record.

        Raises:
            ValidationError: If name or duration is missing or blank.
        """
        workout = WorkoutDocument(
            user_id=self.owner_id,
            name=_require_text("name", name),
            duration=_require_text("duration", duration),
            status=status or DEFAULT_STATUS,
        )
        if date_added is not None:
            workout.date_added = as_stored_utc(date_added)

        await workout.insert()
        logger.info(f"Workout {workout.id} added for user {self.owner_id}")
        return workout

    async def list(self) -> List[WorkoutDocument]:
        """Return every workout the owner has, newest first."""
        return await WorkoutDocument.find(
            WorkoutDocument.user_id == self.owner_id
        ).sort(-WorkoutDocument.date_added).to_list()

    async def update(self, workout_id: str, fields: Dict[str, Any]) -> WorkoutDocument:
        """
        Overwrite the supplied fields of one of the owner's workouts.

        Only name, duration and status can change; anything else in
        ``fields`` is ignored. The write is a single ``find_one_and_update``.

        Raises:
            InvalidIdentifierError: Malformed id.
            NotFoundOrForbiddenError: No such workout for this owner.
            ValidationError: A supplied name or duration is blank.
        """
        oid = parse_workout_id(workout_id)

        changes: Dict[str, Any] = {}
        for field in UPDATABLE_FIELDS:
            value = fields.get(field)
            if value is None:
                continue
            if field == "status":
                changes[field] = WorkoutStatus(value).value
            else:
                changes[field] = _require_text(field, value)

        if not changes:
            workout = await self._owned(oid)
        else:
            workout = await self._owned(oid).update(
                Set(changes),
                response_type=UpdateResponse.NEW_DOCUMENT,
            )

        if workout is None:
            raise NotFoundOrForbiddenError()

        logger.info(f"Workout {workout_id} updated ({', '.join(changes) or 'no changes'})")
        return workout

    async def delete(self, workout_id: str) -> None:
        """
        Remove one of the owner's workouts.

        Deleting the same id twice reports not-found the second time.
        """
        oid = parse_workout_id(workout_id)

        result = await self._owned(oid).delete()
        if result is None or result.deleted_count < 1:
            raise NotFoundOrForbiddenError("Workout not found or not authorized to delete")

        logger.info(f"Workout {workout_id} deleted for user {self.owner_id}")

    async def complete(self, workout_id: str) -> WorkoutDocument:
        """Mark a workout Completed whatever its current status."""
        return await self.update(workout_id, {"status": WorkoutStatus.COMPLETED})
