"""
FitTrack Client - List Response Normalization.

The workout list endpoint has answered with three different body shapes
over its deployments: a bare array, ``{"workouts": [...]}`` and
``{"data": [...]}``. A single classify step tags the decoded body with its
shape; normalization then either yields the workout sequence or raises
``NormalizationError``. A body that cannot be decoded is never reported as
an empty list.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Sequence, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from fittrack.utils.errors import NormalizationError

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Workout(BaseModel):
    """
    Client-side view of a workout record.

    Accepts ``id`` or ``_id`` and camelCase or snake_case names, since
    older deployments sent raw documents.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    name: Optional[str] = None
    duration: Optional[str] = None
    status: Optional[str] = None
    # kept as sent; parse_date_added reads it when ordering
    date_added: Any = Field(
        None, validation_alias=AliasChoices("dateAdded", "date_added")
    )
    user_id: Optional[str] = Field(None, validation_alias=AliasChoices("userId", "user_id"))


class ListShape(str, Enum):
    """Body shapes the list endpoint has been seen to return."""

    ARRAY = "array"
    WRAPPED_WORKOUTS = "wrapped_workouts"
    WRAPPED_DATA = "wrapped_data"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ClassifiedBody:
    """A decoded list body tagged with its shape."""

    shape: ListShape
    items: Optional[List[Any]] = None


def classify_list_body(decoded: Any) -> ClassifiedBody:
    """Tag an already decoded JSON value with its list shape."""
    if isinstance(decoded, list):
        return ClassifiedBody(ListShape.ARRAY, decoded)
    if isinstance(decoded, dict):
        if isinstance(decoded.get("workouts"), list):
            return ClassifiedBody(ListShape.WRAPPED_WORKOUTS, decoded["workouts"])
        if isinstance(decoded.get("data"), list):
            return ClassifiedBody(ListShape.WRAPPED_DATA, decoded["data"])
    return ClassifiedBody(ListShape.UNRECOGNIZED)


def coerce_record(item: Any) -> Any:
    # ObjectIds and numeric durations arrive as non-strings from some deployments
    if isinstance(item, dict):
        for key in ("id", "_id", "userId", "user_id", "name", "duration", "status"):
            value = item.get(key)
            if value is not None and not isinstance(value, str):
                item = {**item, key: str(value)}
    return item


def normalize_list_response(raw_body: Union[str, bytes, Any]) -> List[Workout]:
    """
    Reduce a list response body to a sequence of workouts.

    Args:
        raw_body: Raw response text/bytes, or an already decoded value.

    Returns:
        List[Workout]: Records in the order the server sent them.

    Raises:
        NormalizationError: Undecodable body, unexpected shape, or an array
            element that is not a workout object.
    """
    if isinstance(raw_body, (str, bytes, bytearray)):
        try:
            decoded = json.loads(raw_body)
        except (ValueError, UnicodeDecodeError) as e:
            logger.warning(f"Workout list body is not JSON: {e}")
            raise NormalizationError(detail="malformed body") from e
    else:
        decoded = raw_body

    classified = classify_list_body(decoded)
    if classified.shape is ListShape.UNRECOGNIZED:
        logger.warning(f"Workout list body has an unexpected shape: {type(decoded).__name__}")
        raise NormalizationError(detail="unexpected shape")

    try:
        return [Workout.model_validate(coerce_record(item)) for item in classified.items]
    except PydanticValidationError as e:
        raise NormalizationError(detail="unexpected element") from e


def parse_date_added(value: Any) -> datetime:
    """
    Best-effort timestamp for sorting.

    Numbers are epoch milliseconds; naive datetimes are UTC; anything
    missing or unparseable is the epoch.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return EPOCH
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return EPOCH
    else:
        return EPOCH

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def order_for_display(workouts: Sequence[Workout]) -> List[Workout]:
    """Newest first by ``date_added``; ties keep their incoming order."""
    return sorted(workouts, key=lambda w: parse_date_added(w.date_added), reverse=True)
