import asyncio
import os
import subprocess
import sys
from pathlib import Path

import pytest
import httpx
from httpx import ASGITransport

from main import app
from fittrack.client import SessionManager, WorkoutApiClient, WorkoutView, owner_id_from_token
from fittrack.services.auth import create_access_token

RUN = {"id": "a1", "name": "Run", "duration": "30 mins", "status": "Pending",
       "dateAdded": "2024-03-01T10:00:00Z", "userId": "user-1"}
SWIM = {"id": "b2", "name": "Swim", "duration": "45 mins", "status": "Pending",
        "dateAdded": "2024-04-01T10:00:00Z", "userId": "user-1"}


def _view(handler) -> WorkoutView:
    api = WorkoutApiClient(base_url="http://api.test", transport=httpx.MockTransport(handler))
    return WorkoutView(api)


def _signed_in(handler, user_id: str = "user-1") -> WorkoutView:
    view = _view(handler)
    assert view.authenticate(create_access_token(user_id))
    return view


def test_owner_id_is_read_from_token_for_display():
    token = create_access_token("user-42")
    assert owner_id_from_token(token) == "user-42"
    assert owner_id_from_token("not.a.token") is None

    sessions = SessionManager()
    first = sessions.start(token)
    assert first.owner_id == "user-42"
    assert first.headers == {"Authorization": f"Bearer {token}"}
    sessions.end()
    assert not sessions.is_current(first)


@pytest.mark.asyncio
async def test_nothing_is_sent_while_signed_out():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=[])

    view = _view(handler)
    assert await view.refresh() is False
    assert await view.create_workout("Run", "30 mins") is False
    assert await view.delete_workout("a1") is False
    assert await view.complete_workout("a1") is False
    assert calls == []
    assert view.error == "Not authenticated"


@pytest.mark.asyncio
async def test_refresh_orders_newest_first_and_sends_bearer_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": [RUN, SWIM]})

    view = _signed_in(handler)
    assert await view.refresh()
    assert [w.id for w in view.workouts] == ["b2", "a1"]
    assert seen["auth"].startswith("Bearer ")
    assert view.owner_id == "user-1"


@pytest.mark.asyncio
async def test_unexpected_body_shows_distinct_message():
    view = _signed_in(lambda request: httpx.Response(200, text="<html>oops</html>"))

    assert await view.refresh() is False
    assert view.workouts == []
    assert view.error == "Unexpected data format from API."


@pytest.mark.asyncio
async def test_server_and_network_failures_become_messages():
    view = _signed_in(lambda request: httpx.Response(500, json={"error": "Error finding workouts."}))
    assert await view.refresh() is False
    assert view.error == "Failed to fetch workouts: Error finding workouts."

    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    view = _signed_in(unreachable)
    assert await view.refresh() is False
    assert view.error == "Failed to fetch workouts: Network error or API is unreachable."


@pytest.mark.asyncio
async def test_logout_discards_in_flight_list_response():
    started = asyncio.Event()
    release = asyncio.Event()

    async def handler(request):
        started.set()
        await release.wait()
        return httpx.Response(200, json=[RUN])

    view = _signed_in(handler)
    pending = asyncio.create_task(view.refresh())
    await started.wait()

    view.logout()
    assert view.workouts == []

    release.set()
    assert await pending is False
    assert view.workouts == []
    assert view.error == ""
    assert view.is_loading is False


@pytest.mark.asyncio
async def test_response_for_previous_user_is_not_applied_to_next_user():
    started = asyncio.Event()
    release = asyncio.Event()

    async def handler(request):
        started.set()
        await release.wait()
        return httpx.Response(200, json=[RUN])

    view = _signed_in(handler, "user-1")
    pending = asyncio.create_task(view.refresh())
    await started.wait()

    view.logout()
    assert view.authenticate(create_access_token("user-2"))
    release.set()
    await pending

    assert view.owner_id == "user-2"
    assert view.workouts == []


@pytest.mark.asyncio
async def test_delete_and_complete_patch_locally_without_refetch():
    gets = []

    def handler(request):
        if request.method == "GET":
            gets.append(request)
            return httpx.Response(200, json=[RUN, SWIM])
        # bodiless success: status code alone decides
        return httpx.Response(200)

    view = _signed_in(handler)
    await view.refresh()

    assert await view.complete_workout("a1")
    assert {w.id: w.status for w in view.workouts} == {"b2": "Pending", "a1": "Completed"}

    assert await view.delete_workout("b2")
    assert [w.id for w in view.workouts] == ["a1"]
    assert len(gets) == 1


@pytest.mark.asyncio
async def test_failed_delete_keeps_the_record():
    def handler(request):
        if request.method == "GET":
            return httpx.Response(200, json=[RUN])
        return httpx.Response(404, json={"error": "Workout not found or not authorized to delete"})

    view = _signed_in(handler)
    await view.refresh()

    assert await view.delete_workout("a1") is False
    assert [w.id for w in view.workouts] == ["a1"]
    assert view.error == "Failed to delete workout: Workout not found or not authorized to delete"


@pytest.mark.asyncio
async def test_optimistic_update_merges_by_id():
    gets = []

    def handler(request):
        if request.method == "GET":
            gets.append(request)
            return httpx.Response(200, json=[RUN, SWIM])
        return httpx.Response(200, json={
            "message": "Workout updated successfully",
            "updatedWorkout": {**RUN, "name": "Long Run", "status": "Cancelled"},
        })

    view = _signed_in(handler)
    await view.refresh()

    assert await view.update_workout_optimistic("a1", name="Long Run", status="Cancelled")
    updated = [w for w in view.workouts if w.id == "a1"][0]
    assert updated.name == "Long Run"
    assert updated.status == "Cancelled"
    assert updated.date_added == RUN["dateAdded"]
    assert len(gets) == 1


@pytest.mark.asyncio
async def test_blank_fields_are_rejected_before_sending():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201, json={})

    view = _signed_in(handler)
    assert await view.create_workout("", "30 mins") is False
    assert view.error == "Failed to add workout: Workout name is required"
    assert calls == []


@pytest.mark.asyncio
async def test_full_session_against_the_api(mongo_db):
    api = WorkoutApiClient(base_url="http://test", transport=ASGITransport(app=app))
    view = WorkoutView(api)
    try:
        assert await view.login("e2e@test.com", "pw123456", register=True)
        assert view.owner_id
        assert view.workouts == []

        assert await view.create_workout("Morning Run", "30 mins")
        assert [(w.name, w.status) for w in view.workouts] == [("Morning Run", "Pending")]
        workout_id = view.workouts[0].id

        # optimistic merge and full re-fetch must agree
        assert await view.update_workout_optimistic(workout_id, name="Evening Run")
        optimistic = list(view.workouts)
        assert await view.refresh()
        assert view.workouts == optimistic

        assert await view.update_workout(workout_id, status="Cancelled")
        assert view.workouts[0].status == "Cancelled"

        assert await view.complete_workout(workout_id)
        assert view.workouts[0].status == "Completed"
        completed = list(view.workouts)
        assert await view.refresh()
        assert view.workouts == completed

        assert await view.delete_workout(workout_id)
        assert view.workouts == []
        assert await view.refresh()
        assert view.workouts == []

        assert await view.delete_workout(workout_id) is False
        assert "not found" in view.error

        view.logout()
        assert view.owner_id is None
        assert await view.refresh() is False
    finally:
        await api.close()


def test_client_imports_without_server_configuration():
    env = {key: value for key, value in os.environ.items() if key != "SECRET_KEY"}
    result = subprocess.run(
        [sys.executable, "-c",
         "import sys, fittrack.client; assert 'settings' not in sys.modules"],
        cwd=Path(__file__).resolve().parents[1],
        env=env,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr


def _held_mutations(gets, started, release, status_code=200):
    async def handler(request):
        if request.method == "GET":
            gets.append(request)
            return httpx.Response(200, json=[RUN, SWIM])
        started.set()
        await release.wait()
        return httpx.Response(status_code)
    return handler


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", [
    lambda view: view.create_workout("Yoga", "20 mins"),
    lambda view: view.update_workout("a1", name="Long Run"),
    lambda view: view.update_workout_optimistic("a1", name="Long Run"),
    lambda view: view.delete_workout("a1"),
    lambda view: view.complete_workout("a1"),
], ids=["create", "update", "update-optimistic", "delete", "complete"])
async def test_logout_discards_in_flight_mutation_response(operation):
    gets, started, release = [], asyncio.Event(), asyncio.Event()
    view = _signed_in(_held_mutations(gets, started, release))
    await view.refresh()
    assert len(gets) == 1

    pending = asyncio.create_task(operation(view))
    await started.wait()
    view.logout()
    release.set()

    assert await pending is False
    assert view.workouts == []
    assert view.error == ""
    assert len(gets) == 1


@pytest.mark.asyncio
async def test_failure_from_previous_session_shows_no_error():
    gets, started, release = [], asyncio.Event(), asyncio.Event()
    view = _signed_in(_held_mutations(gets, started, release, status_code=404))
    await view.refresh()

    pending = asyncio.create_task(view.delete_workout("a1"))
    await started.wait()
    view.logout()
    assert view.authenticate(create_access_token("user-2"))
    release.set()

    assert await pending is False
    assert view.owner_id == "user-2"
    assert view.workouts == []
    assert view.error == ""
