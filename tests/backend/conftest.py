import os
import uuid

# Must be set before the blog package reads its configuration
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["APP_DEBUG"] = "false"
os.environ["LOGIN_RATE_LIMIT"] = "20/minute"
os.environ["REGISTER_RATE_LIMIT"] = "20/minute"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from blog.core import db as db_module
from blog.core.limiter import limiter
from blog.core.security import hash_password
from blog.main import app
from blog.models.user import User


TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """Fresh database without an HTTP client, for service-level tests."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    Unhandled exceptions must be answered by the app; one escaping it fails the test.
    """
    await _init_test_db()
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


def make_username() -> str:
    """A username that satisfies the username policy (14 chars, upper, lower, special)."""
    return f"User_{uuid.uuid4().hex[:8]}!"


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture to create users directly via ORM.
    """

    async def _create_user(password: str = "UserPass!23") -> tuple[User, str]:
        user = await User.create(
            username=make_username(),
            name="Test User",
            email=f"{uuid.uuid4().hex[:8]}@example.com",
            password_hash=hash_password(password),
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(username: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/v1/login",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers


@pytest_asyncio.fixture
async def user_headers(create_user, auth_header_factory):
    """Factory: create a user and log it in, returning (user, headers)."""

    async def _make() -> tuple[User, dict[str, str]]:
        user, password = await create_user()
        headers = await auth_header_factory(user.username, password)
        return user, headers

    return _make
