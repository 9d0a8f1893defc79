"""Unit tests for the application auth context"""
import pytest

from breadmade.core.auth import SESSION_CACHE_KEY, AuthClient, AuthEvent
from breadmade.models.user import UserRole
from breadmade.services.auth_context import AuthContext
from breadmade.services.auth_service import USER_CACHE_KEY, AuthService
from tests.helpers import CREATED_AT, UPDATED_AT

TOKEN = "/auth/v1/token"
LOGOUT = "/auth/v1/logout"
PROFILES = "/rest/v1/profiles"

SESSION = {
    "access_token": "access-token",
    "user": {"id": "user-1", "email": "jane@example.com"},
}
PROFILE = {
    "id": "user-1",
    "email": "jane@example.com",
    "name": "Jane",
    "role": "admin",
    "created_at": CREATED_AT,
    "updated_at": UPDATED_AT,
}
CACHED_USER = {
    "id": "user-1",
    "email": "jane@example.com",
    "name": "Jane",
    "role": "user",
    "created_at": CREATED_AT,
    "updated_at": UPDATED_AT,
}


@pytest.fixture
def auth_service(auth_client, store, cache):
    return AuthService(auth_client, store, cache)


@pytest.mark.asyncio
async def test_start_without_session_clears_user(auth_service, auth_client, cache):
    """Test a start with no session clears any cached identity"""
    cache.set(USER_CACHE_KEY, CACHED_USER)
    context = AuthContext(auth_service)

    await context.start()

    assert context.loading is False
    assert context.user is None
    assert context.is_authenticated is False
    assert cache.get(USER_CACHE_KEY) is None
    assert auth_client.listener_count == 1


@pytest.mark.asyncio
async def test_start_replays_cached_session(test_settings, http_client, cache, store, backend):
    """Test a cached session is re-validated against the profile row"""
    cache.set(SESSION_CACHE_KEY, SESSION)
    cache.set(USER_CACHE_KEY, CACHED_USER)
    backend.add("GET", PROFILES, PROFILE)
    context = AuthContext(AuthService(AuthClient(test_settings, client=http_client, cache=cache), store, cache))

    await context.start()

    assert context.user.role == UserRole.ADMIN
    assert cache.get(USER_CACHE_KEY)["role"] == "admin"
    assert backend.last("GET", PROFILES).url.params["id"] == "eq.user-1"


@pytest.mark.asyncio
async def test_missing_profile_clears_user(auth_service, auth_client, backend, cache):
    """Test a session whose profile cannot be read signs the identity out"""
    context = AuthContext(auth_service)
    await context.start()
    backend.add("POST", TOKEN, SESSION)
    backend.fail("GET", PROFILES, "no rows", status_code=406)

    await auth_client.sign_in_with_password("jane@example.com", "secret")

    assert context.user is None
    assert cache.get(USER_CACHE_KEY) is None


@pytest.mark.asyncio
async def test_sign_in_event_sets_user(auth_service, auth_client, backend):
    """Test a sign-in on the provider updates the context"""
    context = AuthContext(auth_service)
    await context.start()
    backend.add("POST", TOKEN, SESSION)
    backend.add("GET", PROFILES, PROFILE)

    response = await context.login("jane@example.com", "secret")

    assert response.success is True
    assert context.user.email == "jane@example.com"
    assert context.is_authenticated is True


@pytest.mark.asyncio
async def test_sign_out_event_clears_user(auth_service, auth_client, backend, cache):
    """Test a signed-out event clears the identity whatever it was"""
    context = AuthContext(auth_service)
    await context.start()
    backend.add("POST", TOKEN, SESSION)
    backend.add("GET", PROFILES, PROFILE)
    backend.add("POST", LOGOUT, None, status_code=204)
    await context.login("jane@example.com", "secret")

    await context._on_auth_change(AuthEvent.SIGNED_OUT, None)

    assert context.user is None
    assert cache.get(USER_CACHE_KEY) is None


@pytest.mark.asyncio
async def test_failed_login_keeps_user_empty(auth_service, backend):
    """Test a failed login leaves the context signed out"""
    context = AuthContext(auth_service)
    await context.start()
    backend.add("POST", TOKEN, {"error_description": "Invalid login credentials"}, status_code=400)

    response = await context.login("jane@example.com", "wrong")

    assert response.success is False
    assert context.user is None


@pytest.mark.asyncio
async def test_logout_and_stop(auth_service, auth_client, backend):
    """Test logout clears the user and stop unsubscribes"""
    context = AuthContext(auth_service)
    await context.start()
    backend.add("POST", TOKEN, SESSION)
    backend.add("GET", PROFILES, PROFILE)
    backend.add("POST", LOGOUT, None, status_code=204)
    await context.login("jane@example.com", "secret")

    await context.logout()
    context.stop()

    assert context.user is None
    assert auth_client.listener_count == 0
