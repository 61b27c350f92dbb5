"""
Shared fixtures. MongoDB is replaced by mongomock-motor; nothing here needs
a running database or Redis.
"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient
from config import Settings
from devconnector.main import create_app
from devconnector.repositories.post_repository import PostRepository
from devconnector.repositories.profile_repository import ProfileRepository
from devconnector.repositories.user_repository import UserRepository
from devconnector.services.auth_service import AuthService
from devconnector.services.post_service import PostService
from devconnector.services.profile_service import ProfileService
from devconnector.services.token_service import TokenVerifier


@pytest.fixture
def settings():
    return Settings(
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        redis_url="redis://127.0.0.1:1",
        github_retry_delay=0,
        debug=False
    )


@pytest.fixture
def database():
    return AsyncMongoMockClient()["devconnector_test"]


@pytest.fixture
def users(database):
    return UserRepository(lambda: database)


@pytest.fixture
def profiles(database):
    return ProfileRepository(lambda: database)


@pytest.fixture
def posts(database):
    return PostRepository(lambda: database)


@pytest.fixture
def token_verifier(settings):
    return TokenVerifier.from_settings(settings)


@pytest.fixture
def auth_service(users, token_verifier, settings):
    return AuthService(users, token_verifier, bcrypt_rounds=settings.bcrypt_rounds)


@pytest.fixture
def profile_service(profiles, users, posts):
    return ProfileService(profiles, users, posts)


@pytest.fixture
def post_service(posts, users):
    return PostService(posts, users)


@pytest.fixture
def register(auth_service, token_verifier):
    """Register an account and return ``(token, user_id)``."""
    async def _register(name: str, email: str, password: str = "secret1"):
        token = await auth_service.register(name, email, password)
        return token, token_verifier.verify(token)
    return _register


@pytest.fixture
def app(settings, database):
    return create_app(settings, database_provider=lambda: database)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
