import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-fittrack-suite")
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DEBUG", "false")

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from database import Database
from main import app
from fittrack.services.auth import create_access_token


@pytest.fixture(scope="function")
async def mongo_db():
    client = AsyncMongoMockClient()
    database = client["fittrack_test"]
    await Database.init_models(database)
    yield database
    Database.reset()


@pytest.fixture(scope="function")
async def client(mongo_db) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def _register(client: AsyncClient, email: str) -> dict:
    response = await client.post(
        "/users/register",
        json={"email": email, "password": "password123"}
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access']}"}


@pytest.fixture
async def user_headers(client):
    return await _register(client, "runner@test.com")


@pytest.fixture
async def other_user_headers(client):
    return await _register(client, "lifter@test.com")


@pytest.fixture
def token_for():
    def _token(user_id: str) -> str:
        return create_access_token(user_id)
    return _token
