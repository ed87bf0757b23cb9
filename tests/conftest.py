import fakeredis
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from studydeck.core.config import SESSION_COOKIE_NAME
from studydeck.core.database import ensure_indexes, get_db, get_redis
from studydeck.main import app
from studydeck.models.user import ProviderProfile
from studydeck.repositories.user_repository import UserRepository
from studydeck.services.identity_provider import IdentityProviderError, get_identity_provider
from studydeck.services.session_manager import SessionManager, encode_session_cookie


class FakeIdentityProvider:
    """Stands in for Google: fixed state, profile chosen by the test."""

    def __init__(self):
        self.state = "state-123"
        self.profile = ProviderProfile(
            provider_id="google-new-user",
            email="ana@example.com",
            display_name="Ana Lopez",
        )
        self.fail = False
        self.codes = []

    def create_authorization_url(self):
        return f"https://accounts.example.com/auth?state={self.state}", self.state

    async def fetch_profile(self, code):
        self.codes.append(code)
        if self.fail:
            raise IdentityProviderError("access_denied")
        return self.profile


@pytest_asyncio.fixture
async def db():
    database = AsyncMongoMockClient()["studydeck_test"]
    await ensure_indexes(database)
    return database


@pytest.fixture
def redis_client():
    return fakeredis.FakeAsyncRedis(decode_responses=True)


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest_asyncio.fixture
async def client(db, redis_client, identity_provider):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_redis] = lambda: redis_client
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def login(client, db, redis_client):
    """Log the test client in as the user with the given provider id."""

    async def _login(google_id="google-1", email="user@example.com", name="Test User"):
        user = await UserRepository(db).find_or_create(
            ProviderProfile(provider_id=google_id, email=email, display_name=name)
        )
        token = await SessionManager(redis_client).create_session(user.id)
        client.cookies.clear()
        client.cookies.set(SESSION_COOKIE_NAME, encode_session_cookie(token))
        return user

    return _login
