"""Pytest configuration and fixtures"""
from typing import AsyncGenerator, Callable, Optional

import httpx
import pytest
from httpx import AsyncClient

from breadmade.api.deps import get_current_user
from breadmade.core.auth import AuthClient
from breadmade.core.cache import LocalCache
from breadmade.core.config import Settings
from breadmade.core.database import RemoteStore
from breadmade.main import create_app
from breadmade.models.user import User, UserRole
from breadmade.services.payment_service import PaymentService
from tests.helpers import ANON_KEY, BACKEND_URL, CREATED_AT, UPDATED_AT, FakeBackend


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def http_client(backend: FakeBackend) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client wired to the fake backend"""
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend)) as client:
        yield client


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        SUPABASE_URL=BACKEND_URL,
        SUPABASE_ANON_KEY=ANON_KEY,
        AUTH_CACHE_PATH=str(tmp_path / "auth_cache.json"),
        COUNTDOWN_INTERVAL_SECONDS=0.01,
    )


@pytest.fixture
def cache(test_settings: Settings) -> LocalCache:
    return LocalCache(test_settings.AUTH_CACHE_PATH)


@pytest.fixture
def store(test_settings: Settings, http_client: httpx.AsyncClient) -> RemoteStore:
    return RemoteStore(test_settings, client=http_client)


@pytest.fixture
def auth_client(test_settings: Settings, http_client: httpx.AsyncClient, cache: LocalCache) -> AuthClient:
    return AuthClient(test_settings, client=http_client, cache=cache)


@pytest.fixture
def payment_service(test_settings: Settings, http_client: httpx.AsyncClient) -> PaymentService:
    return PaymentService(test_settings, client=http_client)


@pytest.fixture
def app(test_settings, store, auth_client, cache, payment_service):
    """Application built around the fake backend (startup hooks are not run)"""
    return create_app(
        test_settings,
        store=store,
        auth_client=auth_client,
        cache=cache,
        payment_service=payment_service,
    )


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client"""
    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_user() -> User:
    return User(
        id="admin-1",
        email="admin@breadmade.test",
        name="Admin",
        role=UserRole.ADMIN,
        created_at=CREATED_AT,
        updated_at=UPDATED_AT,
    )


@pytest.fixture
def regular_user() -> User:
    return User(
        id="user-1",
        email="buyer@breadmade.test",
        name="Buyer",
        role=UserRole.USER,
        created_at=CREATED_AT,
        updated_at=UPDATED_AT,
    )


@pytest.fixture
def sign_in(app) -> Callable[[Optional[User]], None]:
    """Answer every request as the given user (or as nobody)"""
    def _sign_in(user: Optional[User]) -> None:
        if user is None:
            app.dependency_overrides.pop(get_current_user, None)
        else:
            app.dependency_overrides[get_current_user] = lambda: user
    return _sign_in
