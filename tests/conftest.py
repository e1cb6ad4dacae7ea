"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Callable
from typing import Any
from uuid import UUID, uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from domain.entities.principal import Principal
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()


class FakeBlobStore:
    """In-memory IBlobStore."""

    def __init__(self) -> None:
        self.uploads: dict[str, bytes] = {}

    async def upload(self, data: bytes, path: str, content_type: str | None = None) -> str:
        self.uploads[path] = data
        return f"https://storage.test/avatars/{path}"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, foreign keys enforced."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
        # ON UPDATE CASCADE (profile re-keying) needs this on SQLite.
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """A UoW factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def test_principal() -> Principal:
    """A confirmed principal with a fixed ID."""
    return Principal(
        principal_id=TEST_USER_ID,
        email="test@example.com",
        email_confirmed=True,
        metadata={"name": "Test User", "username": "tester"},
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def make_headers(auth_provider: JWTAuthProvider) -> Callable[[Principal], dict[str, str]]:
    """Build Authorization headers for any principal."""

    def _make(principal: Principal) -> dict[str, str]:
        return {"Authorization": f"Bearer {auth_provider.create_token(principal)}"}

    return _make


@pytest.fixture
def auth_headers(
    make_headers: Callable[[Principal], dict[str, str]], test_principal: Principal
) -> dict[str, str]:
    """Create authorization headers."""
    return make_headers(test_principal)


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no database overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def app(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    blob_store: FakeBlobStore,
) -> Any:
    """
    Application wired to the test database.

    - Uses an in-memory SQLite database
    - Validates tokens signed with the test secret
    - Stores avatars in memory
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_bookmark_service,
        get_follow_service,
        get_notification_service,
        get_profile_reconciler,
        get_profile_service,
        get_thought_service,
        get_uow_factory,
    )
    from domain.services.bookmark_service import BookmarkService
    from domain.services.follow_service import FollowService
    from domain.services.notification_service import NotificationService
    from domain.services.profile_reconciler import ProfileReconciler
    from domain.services.profile_service import ProfileService
    from domain.services.thought_service import ThoughtService
    from main import create_app

    app = create_app()
    notification_service = NotificationService(uow_factory)

    app.dependency_overrides[get_uow_factory] = lambda: uow_factory
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_reconciler] = lambda: ProfileReconciler(
        uow_factory, require_confirmed_email=True
    )
    app.dependency_overrides[get_notification_service] = lambda: notification_service
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(
        uow_factory, blob_store=blob_store
    )
    app.dependency_overrides[get_thought_service] = lambda: ThoughtService(uow_factory)
    app.dependency_overrides[get_follow_service] = lambda: FollowService(
        uow_factory, notification_service=notification_service
    )
    app.dependency_overrides[get_bookmark_service] = lambda: BookmarkService(
        uow_factory, notification_service=notification_service
    )
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def anon_client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Client for the test app without credentials."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    app: Any, auth_headers: dict[str, str]
) -> AsyncGenerator[AsyncClient, None]:
    """Client for the test app acting as ``test_principal``."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as c:
        yield c


@pytest.fixture
def make_principal() -> Callable[..., Principal]:
    """Factory for additional confirmed principals in multi-user tests."""

    def _make(
        name: str = "Other User",
        email: str | None = None,
        principal_id: UUID | None = None,
    ) -> Principal:
        principal_id = principal_id or uuid4()
        return Principal(
            principal_id=principal_id,
            email=email or f"{principal_id.hex[:8]}@example.com",
            email_confirmed=True,
            metadata={"name": name},
        )

    return _make
