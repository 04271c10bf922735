"""
FitTrack Client - Workout View State.

Holds the signed-in user's workouts and keeps them consistent with the
API. Operations never raise: failures land in ``error`` and the call
returns ``False``.

Reconciliation:
    - Create and Update re-fetch the whole list.
    - ``update_workout_optimistic`` merges the server's returned record by id
      instead, so the list does not flicker; the next re-fetch yields the
      same state.
    - Delete and Complete patch the local list by id once the server
      confirms, without a re-fetch.

Every response is checked against the session generation it was issued
under and dropped if the user has since logged out or switched accounts.
"""

import logging
from typing import Any, Dict, List, Optional

from fittrack.client.api import WorkoutApiClient
from fittrack.client.normalize import Workout, order_for_display
from fittrack.client.session import SessionContext, SessionManager
from fittrack.schemas.workout import WorkoutStatus
from fittrack.utils.errors import (
    AuthenticationError,
    FitTrackException,
    NormalizationError,
)

logger = logging.getLogger(__name__)


class WorkoutView:
    """
    Local workout list for one client.

    Attributes:
        workouts: Workouts ordered newest first.
        error: Last user-visible error message, empty when none.
        is_loading: True while a list fetch is in flight.
    """

    def __init__(self, api: WorkoutApiClient, sessions: Optional[SessionManager] = None):
        self.api = api
        self.sessions = sessions or SessionManager()
        self.workouts: List[Workout] = []
        self.error: str = ""
        self.is_loading: bool = False

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def owner_id(self) -> Optional[str]:
        """Owner id of the current session, for display."""
        return self.sessions.current.owner_id

    @property
    def authenticated(self) -> bool:
        return self.sessions.current.authenticated

    def authenticate(self, token: str) -> bool:
        """
        Adopt ``token`` as the current identity and drop any previous state.

        Returns:
            bool: False if the token carries no owner id.
        """
        self._clear()
        try:
            self.sessions.start(token)
        except AuthenticationError as e:
            self.error = e.message
            return False
        return True

    async def login(self, email: str, password: str, register: bool = False) -> bool:
        """Log in (or register) and load the new user's workouts."""
        self.error = ""
        try:
            if register:
                token = await self.api.register(email, password)
            else:
                token = await self.api.login(email, password)
        except FitTrackException as e:
            self.error = e.message
            return False

        if not self.authenticate(token):
            return False
        return await self.refresh()

    def logout(self) -> None:
        """Forget the identity and everything loaded under it."""
        self.sessions.end()
        self._clear()

    def _clear(self) -> None:
        self.workouts = []
        self.error = ""
        self.is_loading = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _session_or_fail(self) -> Optional[SessionContext]:
        session = self.sessions.current
        if not session.authenticated:
            self.error = "Not authenticated"
            return None
        return session

    def _stale(self, session: SessionContext, operation: str) -> bool:
        if self.sessions.is_current(session):
            return False
        logger.info(f"Discarding {operation} response from session {session.generation}")
        return True

    def _fail(self, session: SessionContext, prefix: str, exc: FitTrackException) -> bool:
        if not self._stale(session, prefix):
            self.error = f"{prefix}: {exc.message}"
        logger.warning(f"{prefix}: {exc.detail}")
        return False

    def _find(self, workout_id: str) -> Optional[int]:
        for index, workout in enumerate(self.workouts):
            if workout.id == workout_id:
                return index
        return None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def refresh(self) -> bool:
        """
        Replace the local list with the server's.

        A body that cannot be normalized leaves an empty list with the
        distinct "unexpected data" message, never a silent empty list.
        """
        session = self._session_or_fail()
        if session is None:
            self.workouts = []
            return False

        self.is_loading = True
        self.error = ""
        try:
            workouts = await self.api.list_workouts(session)
        except NormalizationError as e:
            if not self._stale(session, "list"):
                self.workouts = []
                self.error = e.message
            return False
        except FitTrackException as e:
            if not self._stale(session, "list"):
                self.workouts = []
            return self._fail(session, "Failed to fetch workouts", e)
        finally:
            if self.sessions.is_current(session):
                self.is_loading = False

        if self._stale(session, "list"):
            return False
        self.workouts = order_for_display(workouts)
        return True

    async def create_workout(
        self,
        name: Optional[str],
        duration: Optional[str],
        status: Optional[str] = None,
    ) -> bool:
        """Add a workout, then re-fetch."""
        session = self._session_or_fail()
        if session is None:
            return False

        try:
            await self.api.create_workout(session, name, duration, status)
        except FitTrackException as e:
            return self._fail(session, "Failed to add workout", e)

        if self._stale(session, "create"):
            return False
        return await self.refresh()

    async def update_workout(self, workout_id: str, **fields: Any) -> bool:
        """Overwrite fields of a workout, then re-fetch."""
        session = self._session_or_fail()
        if session is None:
            return False

        try:
            await self.api.update_workout(session, workout_id, fields)
        except FitTrackException as e:
            return self._fail(session, "Failed to update workout", e)

        if self._stale(session, "update"):
            return False
        return await self.refresh()

    async def update_workout_optimistic(self, workout_id: str, **fields: Any) -> bool:
        """
        Overwrite fields of a workout and merge the server's copy locally.

        Falls back to a re-fetch when the server did not send the record.
        """
        session = self._session_or_fail()
        if session is None:
            return False

        try:
            updated = await self.api.update_workout(session, workout_id, fields)
        except FitTrackException as e:
            return self._fail(session, "Failed to update workout", e)

        if self._stale(session, "update"):
            return False
        if updated is None or updated.id is None:
            return await self.refresh()

        index = self._find(updated.id)
        merged = list(self.workouts)
        if index is None:
            merged.append(updated)
        else:
            merged[index] = self.workouts[index].model_copy(update=_changed_fields(updated))
        self.workouts = order_for_display(merged)
        return True

    async def delete_workout(self, workout_id: str) -> bool:
        """Delete a workout and drop it from the local list."""
        session = self._session_or_fail()
        if session is None:
            return False

        try:
            await self.api.delete_workout(session, workout_id)
        except FitTrackException as e:
            return self._fail(session, "Failed to delete workout", e)

        if self._stale(session, "delete"):
            return False
        self.workouts = [w for w in self.workouts if w.id != workout_id]
        return True

    async def complete_workout(self, workout_id: str) -> bool:
        """Mark a workout Completed and flip its local status."""
        session = self._session_or_fail()
        if session is None:
            return False

        try:
            await self.api.complete_workout(session, workout_id)
        except FitTrackException as e:
            return self._fail(session, "Failed to complete workout status", e)

        if self._stale(session, "complete"):
            return False
        index = self._find(workout_id)
        if index is not None:
            workouts = list(self.workouts)
            workouts[index] = workouts[index].model_copy(
                update={"status": WorkoutStatus.COMPLETED.value}
            )
            self.workouts = workouts
        return True


def _changed_fields(workout: Workout) -> Dict[str, Any]:
    # dateAdded is immutable; keep whatever the list already has
    return {
        key: value
        for key, value in workout.model_dump(include={"name", "duration", "status"}).items()
        if value is not None
    }
