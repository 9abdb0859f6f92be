"""API test fixtures — fresh app per test + httpx async client.

Invariants:
    - Every test gets its own app instance, hence empty collections
    - Tokens are real JWTs signed with the test settings' secret

Design Decisions:
    - ASGITransport does not run the lifespan: create_app() builds all state eagerly,
      so nothing here depends on startup hooks
"""

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from taskhub.config import Settings
from taskhub.main import create_app

TEST_SECRET = "api-test-secret"


def _settings(**overrides) -> Settings:
    return Settings(jwt_secret_key=TEST_SECRET, auth_backend="jwt", **overrides)


@pytest.fixture
def app():
    return create_app(_settings())


@pytest.fixture
def positional_app():
    return create_app(_settings(id_strategy="positional"))


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def positional_client(positional_app):
    async with AsyncClient(
        transport=ASGITransport(app=positional_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def auth_headers():
    token = jwt.encode(
        {"sub": "1", "name": "John Doe", "email": "john.doe@example.com"},
        TEST_SECRET, algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}
