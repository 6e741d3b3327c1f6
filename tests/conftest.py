"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

# Test configuration, set before any application module reads settings
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ADMIN_PASSWORD"] = "test-admin-password"
os.environ["SESSION_SECRET_KEY"] = "test-session-secret"
os.environ["CRYPTO_SECRET_KEY"] = "test-crypto-secret"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.database.models import Base
from infrastructure.database.session import enable_sqlite_foreign_keys
from infrastructure.security.fernet_vault import FernetCredentialVault

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_ADMIN_PASSWORD = "test-admin-password"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, shared by all sessions of that test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
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
def vault() -> FernetCredentialVault:
    return FernetCredentialVault("test-crypto-secret")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        admin_password=TEST_ADMIN_PASSWORD,
        secret_key="test-session-secret",
        algorithm="HS256",
        max_age_days=7,
    )


@pytest.fixture
def auth_headers(auth_provider: JWTAuthProvider) -> dict[str, str]:
    """Authorization header carrying a valid admin session."""
    return {"Authorization": f"Bearer {auth_provider.create_token()}"}


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    vault: FernetCredentialVault,
    auth_provider: JWTAuthProvider,
) -> FastAPI:
    """
    Application wired to the test database.

    - Services run on a UoW bound to the in-memory SQLite engine
    - Passwords are encrypted with a test vault
    - Admin sessions are signed with the test auth provider
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import (
        get_access_service,
        get_account_service,
        get_assignment_service,
        get_client_service,
        get_dashboard_service,
    )
    from domain.services.access_service import AccessService
    from domain.services.account_service import ServiceAccountService
    from domain.services.assignment_service import AssignmentService
    from domain.services.client_service import ClientService
    from domain.services.dashboard_service import DashboardService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_client_service] = lambda: ClientService(test_uow_factory)
    app.dependency_overrides[get_account_service] = lambda: ServiceAccountService(
        test_uow_factory, vault
    )
    app.dependency_overrides[get_assignment_service] = lambda: AssignmentService(
        test_uow_factory
    )
    app.dependency_overrides[get_dashboard_service] = lambda: DashboardService(
        test_uow_factory
    )
    app.dependency_overrides[get_access_service] = lambda: AccessService(
        test_uow_factory, vault
    )
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no admin session)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(
    app: FastAPI, auth_headers: dict[str, str]
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client logged in as admin."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as c:
        yield c
    app.dependency_overrides.clear()
