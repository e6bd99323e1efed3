"""Shared test fixtures for pytest"""
import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.database import session_scope
from app.main import create_app
from app.models.user import Role
from app.services.users import UserStore

TEST_SECRET = "test-secret-key"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def test_settings():
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        SECRET_KEY=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        ADMIN_USERNAME=ADMIN_USERNAME,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        VIEWERS_START=1240,
        STATIC_DIR=None,
    )


@pytest.fixture
async def app(test_settings):
    """Fresh application with its own in-memory database, lifespan entered"""
    application = create_app(test_settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app):
    """HTTP client for API testing"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db(app):
    async with session_scope(app.state) as session:
        yield session


@pytest.fixture
def user_store(app, db):
    return UserStore(db, app.state.passwords)


@pytest.fixture
def admin_headers(app):
    token = app.state.tokens.issue(ADMIN_USERNAME, Role.ADMIN)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def user_headers(client):
    """Register a regular user and log in through the API"""
    await client.post("/api/register", json={"username": "alice", "password": "wonderland"})
    response = await client.post("/api/login", json={"username": "alice", "password": "wonderland"})
    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}
