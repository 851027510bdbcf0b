"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

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
from infrastructure.auth.password import PasswordHasher
from infrastructure.database.models import Base

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh in-memory database per test, schema created up front."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
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
        autoflush=False,
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
def password_hasher() -> PasswordHasher:
    """Cheap bcrypt cost keeps the suite fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def github_repos() -> list[dict[str, Any]]:
    """Canned GitHub API payload served by the fake GitHub client."""
    return [
        {"id": 1, "name": "first-repo", "html_url": "https://github.com/octocat/first-repo"},
        {"id": 2, "name": "second-repo", "html_url": "https://github.com/octocat/second-repo"},
    ]


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    password_hasher: PasswordHasher,
    github_repos: list[dict[str, Any]],
) -> FastAPI:
    """
    Create the application wired to the test database.

    - Services use a Unit of Work bound to the in-memory SQLite database
    - Tokens are signed with the test secret
    - The GitHub client talks to an httpx mock transport
    """
    import httpx

    from api.dependencies.auth import get_auth_provider
    from api.rest.dependencies import (
        get_auth_service,
        get_github_client,
        get_post_service,
        get_profile_service,
    )
    from domain.services.auth_service import AuthService
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from infrastructure.github.client import GitHubClient
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    def github_handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/users/octocat/repos":
            return httpx.Response(200, json=github_repos)
        return httpx.Response(404, json={"message": "Not Found"})

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    auth_service = AuthService(
        test_uow_factory,
        auth_provider=auth_provider,
        password_hasher=password_hasher,
    )
    profile_service = ProfileService(test_uow_factory)
    post_service = PostService(test_uow_factory)
    github_client = GitHubClient(
        base_url="https://api.github.test",
        client_id="",
        client_secret="",
        transport=httpx.MockTransport(github_handler),
    )

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_post_service] = lambda: post_service
    app.dependency_overrides[get_github_client] = lambda: github_client
    app.dependency_overrides[get_async_session] = override_get_async_session

    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def register(
    client: AsyncClient,
    name: str = "Ada Lovelace",
    email: str = "ada@x.com",
    password: str = "secret123",
) -> dict[str, str]:
    """Register a user and return auth headers for them."""
    response = await client.post(
        "/api/users",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Auth headers for a freshly registered user."""
    return await register(client)


@pytest.fixture
async def other_headers(client: AsyncClient) -> dict[str, str]:
    """Auth headers for a second registered user."""
    return await register(client, name="Grace Hopper", email="grace@x.com")
