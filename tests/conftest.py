"""
Pytest configuration and fixtures for account service testing.
Provides settings, an in-memory database, wired services and an HTTP client.
"""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from account_service.container.container import Container
from account_service.core.config import Settings
from account_service.core.database import (
    create_engine_from_settings,
    create_session_factory,
    init_models,
)
from account_service.core.security import OTPGenerator, PasswordHasher
from account_service.events.event_bus import InMemoryEventBus
from account_service.main import create_app
from account_service.repositories.user_repository import UserRepository
from account_service.services.auth.authentication_service import AuthService
from account_service.services.auth.credential_service import CredentialService
from account_service.services.auth.token_service import TokenService
from account_service.services.user_service import UserService
from tests.factories import RecordingNotifier

TEST_SECRET_KEY = "test-signing-key-a7f3c9e1b5d2846f0e9c3b7a"
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: in-memory SQLite, cheap hashing, no SMTP."""
    return Settings(
        SECRET_KEY=TEST_SECRET_KEY,
        ENVIRONMENT="test",
        DEBUG=False,
        LOG_LEVEL="WARNING",
        DATABASE_URL=TEST_DATABASE_URL,
        PASSWORD_HASH_ROUNDS=4,
        SMTP_HOST=None
    )


@pytest_asyncio.fixture
async def test_engine(test_settings):
    """Create test database engine with all tables."""
    engine = create_engine_from_settings(test_settings)
    await init_models(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
def user_repository(session_factory) -> UserRepository:
    return UserRepository(session_factory)


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service(test_settings) -> TokenService:
    return TokenService(
        secret_key=test_settings.SECRET_KEY,
        algorithm=test_settings.ALGORITHM,
        expire_minutes=test_settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )


@pytest.fixture
def recording_notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def auth_service(
    user_repository,
    password_hasher,
    token_service,
    recording_notifier,
    event_bus
) -> AuthService:
    """AuthService wired to the in-memory database."""
    return AuthService(
        user_repository=user_repository,
        password_hasher=password_hasher,
        otp_generator=OTPGenerator(length=6),
        token_service=token_service,
        notifier=recording_notifier,
        event_bus=event_bus
    )


@pytest.fixture
def credential_service(user_repository, password_hasher, event_bus) -> CredentialService:
    return CredentialService(
        user_repository=user_repository,
        password_hasher=password_hasher,
        event_bus=event_bus
    )


@pytest.fixture
def user_service(user_repository) -> UserService:
    return UserService(user_repository)


@pytest.fixture
def client(test_settings, recording_notifier):
    """Create FastAPI test client backed by a fresh in-memory database."""
    container = Container(test_settings, notifier=recording_notifier)
    app = create_app(settings=test_settings, container=container)

    with TestClient(app) as test_client:
        yield test_client
