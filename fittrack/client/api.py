"""
FitTrack Client - Workout API Transport.

Thin async HTTP layer over the FitTrack REST API. Each call takes the
``SessionContext`` it is issued under and attaches that session's bearer
token; failures are raised as the shared ``FitTrackException`` subclasses.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from fittrack.client.config import client_settings
from fittrack.client.normalize import Workout, coerce_record, normalize_list_response
from fittrack.client.session import SessionContext
from fittrack.utils.errors import (
    AuthenticationError,
    ConflictError,
    FitTrackException,
    InvalidIdentifierError,
    NetworkError,
    NormalizationError,
    NotFoundOrForbiddenError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _optional_json(response: httpx.Response) -> Optional[Any]:
    """Decoded body, or None when the body is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def _error_message(response: httpx.Response) -> str:
    body = _optional_json(response)
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if isinstance(message, str) and message:
            return message
    return response.reason_phrase or f"HTTP {response.status_code}"


def _raise_for_status(response: httpx.Response, has_identifier: bool = False) -> None:
    """
    Map a failed response onto the error taxonomy.

    A 400 on a route with an id in the path means the id was malformed;
    elsewhere it is a validation failure.
    """
    if response.is_success:
        return

    message = _error_message(response)
    code = response.status_code

    if code in (401, 403):
        raise AuthenticationError(message)
    if code == 404:
        raise NotFoundOrForbiddenError(message)
    if code == 409:
        raise ConflictError(message)
    if code == 400:
        if has_identifier:
            raise InvalidIdentifierError(message)
        raise ValidationError(message)
    raise FitTrackException(message=message, status_code=code)


def _require_text(field: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Workout {field} is required")
    return str(value)


def _workout_from(body: Any, key: str) -> Optional[Workout]:
    """Pull an optional workout record out of a success body."""
    if isinstance(body, dict) and isinstance(body.get(key), dict):
        try:
            return Workout.model_validate(coerce_record(body[key]))
        except PydanticValidationError:
            logger.warning(f"Ignoring malformed '{key}' in response body")
    return None


class WorkoutApiClient:
    """
    HTTP client for the FitTrack API.

    Attributes:
        base_url: API root the operation paths are relative to.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or client_settings.API_BASE_URL
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or client_settings.CLIENT_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "WorkoutApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        session: Optional[SessionContext] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        headers = session.headers if session is not None else {}
        try:
            return await self.client.request(method, path, json=json_body, headers=headers)
        except httpx.TransportError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise NetworkError(detail=str(e)) from e

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    async def _authenticate(self, endpoint: str, email: str, password: str) -> str:
        response = await self._request(
            "POST", f"/users/{endpoint}", json_body={"email": email, "password": password}
        )
        _raise_for_status(response)

        body = _optional_json(response)
        if not isinstance(body, dict):
            raise NormalizationError("An unexpected response was received from the API.")
        token = body.get("access")
        if not token:
            raise AuthenticationError("Authentication succeeded but no access token was returned.")
        return token

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for a bearer token."""
        return await self._authenticate("login", email, password)

    async def register(self, email: str, password: str) -> str:
        """Create an account and return its bearer token."""
        return await self._authenticate("register", email, password)

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    async def list_workouts(self, session: SessionContext) -> List[Workout]:
        """
        Fetch the session owner's workouts in server order.

        Raises:
            NormalizationError: The body was not a recognizable workout list.
        """
        response = await self._request("GET", "/workouts/getMyWorkouts", session)
        _raise_for_status(response)
        return normalize_list_response(response.content)

    async def create_workout(
        self,
        session: SessionContext,
        name: Optional[str],
        duration: Optional[str],
        status: Optional[str] = None,
    ) -> Optional[Workout]:
        """
        Add a workout. Name and duration are checked before sending.

        Returns:
            The created record when the server echoes it back.
        """
        payload = {
            "name": _require_text("name", name),
            "duration": _require_text("duration", duration),
        }
        if status:
            payload["status"] = status

        response = await self._request("POST", "/workouts/addWorkout", session, payload)
        _raise_for_status(response)
        return _workout_from(_optional_json(response), "workout")

    async def update_workout(
        self,
        session: SessionContext,
        workout_id: str,
        fields: Dict[str, Any],
    ) -> Optional[Workout]:
        """Overwrite the given fields; returns ``updatedWorkout`` if present."""
        payload: Dict[str, Any] = {}
        for key in ("name", "duration"):
            if fields.get(key) is not None:
                payload[key] = _require_text(key, fields[key])
        if fields.get("status") is not None:
            payload["status"] = fields["status"]

        response = await self._request(
            "PATCH", f"/workouts/updateWorkout/{workout_id}", session, payload
        )
        _raise_for_status(response, has_identifier=True)
        return _workout_from(_optional_json(response), "updatedWorkout")

    async def delete_workout(self, session: SessionContext, workout_id: str) -> None:
        """Delete a workout; success is decided by status code alone."""
        response = await self._request("DELETE", f"/workouts/deleteWorkout/{workout_id}", session)
        _raise_for_status(response, has_identifier=True)

    async def complete_workout(self, session: SessionContext, workout_id: str) -> Optional[Workout]:
        """Mark a workout Completed; the body is optional."""
        response = await self._request(
            "PATCH", f"/workouts/completeWorkoutStatus/{workout_id}", session
        )
        _raise_for_status(response, has_identifier=True)
        return _workout_from(_optional_json(response), "updatedWorkout")
