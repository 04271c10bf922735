import pytest
from httpx import AsyncClient

from fittrack.models.mongodb import WorkoutDocument


async def _add(client: AsyncClient, headers: dict, **payload) -> dict:
    body = {"name": "Morning Run", "duration": "30 mins", **payload}
    response = await client.post("/workouts/addWorkout", json=body, headers=headers)
    assert response.status_code == 201
    return response.json()["workout"]


@pytest.mark.asyncio
async def test_create_defaults_to_pending_and_lists(client: AsyncClient, user_headers):
    created = await _add(client, user_headers)

    assert created["name"] == "Morning Run"
    assert created["duration"] == "30 mins"
    assert created["status"] == "Pending"
    assert created["dateAdded"]
    assert created["userId"]

    listed = await client.get("/workouts/getMyWorkouts", headers=user_headers)
    assert listed.status_code == 200
    body = listed.json()
    assert isinstance(body, list)
    assert [w["id"] for w in body] == [created["id"]]


@pytest.mark.asyncio
async def test_list_is_empty_array_for_new_user(client: AsyncClient, user_headers):
    response = await client.get("/workouts/getMyWorkouts", headers=user_headers)
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_create_requires_name_and_duration(client: AsyncClient, user_headers):
    missing = await client.post("/workouts/addWorkout", json={"name": "Swim"}, headers=user_headers)
    assert missing.status_code == 400

    blank = await client.post(
        "/workouts/addWorkout", json={"name": "  ", "duration": "20 mins"}, headers=user_headers
    )
    assert blank.status_code == 400
    assert "name" in blank.json()["error"]


@pytest.mark.asyncio
async def test_create_accepts_status_in_any_case_and_numeric_duration(client: AsyncClient, user_headers):
    created = await _add(client, user_headers, duration=45, status="completed")
    assert created["duration"] == "45"
    assert created["status"] == "Completed"


@pytest.mark.asyncio
async def test_operations_require_token(client: AsyncClient, mongo_db):
    response = await client.get("/workouts/getMyWorkouts")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"

    bad = await client.get("/workouts/getMyWorkouts", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad.status_code == 401


@pytest.mark.asyncio
async def test_update_overwrites_only_supplied_fields(client: AsyncClient, user_headers):
    created = await _add(client, user_headers)
    stored = (await client.get("/workouts/getMyWorkouts", headers=user_headers)).json()[0]

    response = await client.patch(
        f"/workouts/updateWorkout/{created['id']}",
        json={"status": "Cancelled"},
        headers=user_headers,
    )
    assert response.status_code == 200
    updated = response.json()["updatedWorkout"]
    assert updated["status"] == "Cancelled"
    assert updated["name"] == created["name"]
    assert updated["duration"] == created["duration"]
    assert updated["dateAdded"] == stored["dateAdded"]


@pytest.mark.asyncio
async def test_update_of_other_users_workout_is_not_found(
    client: AsyncClient, user_headers, other_user_headers
):
    created = await _add(client, user_headers)

    response = await client.patch(
        f"/workouts/updateWorkout/{created['id']}",
        json={"status": "Cancelled"},
        headers=other_user_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Workout not found or not authorized"

    own = await client.get("/workouts/getMyWorkouts", headers=user_headers)
    assert own.json()[0]["status"] == "Pending"


@pytest.mark.asyncio
async def test_not_owned_and_missing_ids_look_the_same(
    client: AsyncClient, user_headers, other_user_headers
):
    created = await _add(client, user_headers)

    foreign = await client.delete(f"/workouts/deleteWorkout/{created['id']}", headers=other_user_headers)
    missing = await client.delete(
        "/workouts/deleteWorkout/0123456789abcdef01234567", headers=other_user_headers
    )
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()


@pytest.mark.asyncio
async def test_malformed_id_is_rejected(client: AsyncClient, user_headers):
    for method, path in (
        ("PATCH", "/workouts/updateWorkout/not-an-id"),
        ("DELETE", "/workouts/deleteWorkout/not-an-id"),
        ("PATCH", "/workouts/completeWorkoutStatus/not-an-id"),
    ):
        response = await client.request(method, path, json={}, headers=user_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid Workout ID format."


@pytest.mark.asyncio
async def test_delete_then_relist_and_delete_again(client: AsyncClient, user_headers):
    keep = await _add(client, user_headers, name="Yoga")
    gone = await _add(client, user_headers, name="Sprints")

    first = await client.delete(f"/workouts/deleteWorkout/{gone['id']}", headers=user_headers)
    assert first.status_code == 200
    assert first.json()["message"] == "Workout deleted successfully"

    listed = await client.get("/workouts/getMyWorkouts", headers=user_headers)
    assert [w["id"] for w in listed.json()] == [keep["id"]]

    second = await client.delete(f"/workouts/deleteWorkout/{gone['id']}", headers=user_headers)
    assert second.status_code == 404


@pytest.mark.asyncio
async def test_complete_is_idempotent(client: AsyncClient, user_headers):
    created = await _add(client, user_headers)
    path = f"/workouts/completeWorkoutStatus/{created['id']}"

    first = await client.patch(path, headers=user_headers)
    assert first.status_code == 200
    assert first.json()["updatedWorkout"]["status"] == "Completed"

    second = await client.patch(path, headers=user_headers)
    assert second.status_code == 200
    assert second.json()["updatedWorkout"] == first.json()["updatedWorkout"]


@pytest.mark.asyncio
async def test_list_is_newest_first(client: AsyncClient, user_headers):
    await _add(client, user_headers, name="Old", dateAdded="2023-01-01T08:00:00Z")
    await _add(client, user_headers, name="New", dateAdded="2024-06-01T08:00:00Z")
    await _add(client, user_headers, name="Middle", dateAdded="2023-09-01T08:00:00Z")

    listed = await client.get("/workouts/getMyWorkouts", headers=user_headers)
    assert [w["name"] for w in listed.json()] == ["New", "Middle", "Old"]


@pytest.mark.asyncio
async def test_legacy_lowercase_status_loads(client: AsyncClient, user_headers, mongo_db):
    created = await _add(client, user_headers)
    await mongo_db["workouts"].update_one(
        {"name": "Morning Run"}, {"$set": {"status": "pending"}}
    )

    listed = await client.get("/workouts/getMyWorkouts", headers=user_headers)
    assert listed.json()[0]["id"] == created["id"]
    assert listed.json()[0]["status"] == "Pending"
    assert await WorkoutDocument.find_all().count() == 1


@pytest.mark.asyncio
async def test_date_added_is_identical_across_responses(client: AsyncClient, user_headers):
    created = await _add(client, user_headers)
    assert created["dateAdded"].endswith("Z")

    listed = (await client.get("/workouts/getMyWorkouts", headers=user_headers)).json()[0]
    completed = await client.patch(
        f"/workouts/completeWorkoutStatus/{created['id']}", headers=user_headers
    )

    assert listed["dateAdded"] == created["dateAdded"]
    assert completed.json()["updatedWorkout"]["dateAdded"] == created["dateAdded"]


@pytest.mark.asyncio
async def test_supplied_date_added_is_reported_in_utc(client: AsyncClient, user_headers):
    created = await _add(client, user_headers, dateAdded="2024-06-01T10:00:00.123456+02:00")
    assert created["dateAdded"] == "2024-06-01T08:00:00.123000Z"

    listed = (await client.get("/workouts/getMyWorkouts", headers=user_headers)).json()[0]
    assert listed["dateAdded"] == created["dateAdded"]
