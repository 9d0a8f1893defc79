"""Unit tests for user service"""
import pytest

from breadmade.core.exceptions import ServiceError
from breadmade.models.user import UserRole
from breadmade.schemas.admin import ProfileUpdate
from breadmade.services.user_service import UserService
from tests.helpers import request_json

PROFILES = "/rest/v1/profiles"
ALL_USERS = "/rest/v1/rpc/get_all_users"
SEARCH = "/rest/v1/rpc/search_users"
UPDATE_ROLE = "/rest/v1/rpc/update_user_role"


@pytest.mark.asyncio
async def test_get_all_users(store, backend):
    """Test users come from the listing procedure"""
    backend.add("POST", ALL_USERS, [
        {"id": "user-1", "email": "jane@example.com", "role": "user"},
        {"id": "admin-1", "email": "admin@example.com", "role": "admin"},
    ])

    users = await UserService(store).get_all_users()

    assert [u.id for u in users] == ["user-1", "admin-1"]


@pytest.mark.asyncio
async def test_get_user_by_id(store, backend):
    """Test single user lookup filters the full listing"""
    backend.add("POST", ALL_USERS, [{"id": "user-1", "email": "jane@example.com"}])
    service = UserService(store)

    assert (await service.get_user_by_id("user-1")).email == "jane@example.com"
    assert await service.get_user_by_id("user-2") is None


@pytest.mark.asyncio
async def test_search_users(store, backend):
    """Test search passes the query to the procedure"""
    backend.add("POST", SEARCH, [{"id": "user-1", "email": "jane@example.com"}])

    users = await UserService(store).search_users("jane")

    assert len(users) == 1
    assert request_json(backend.last("POST", SEARCH)) == {"search_query": "jane"}


@pytest.mark.asyncio
async def test_search_users_empty_on_failure(store, backend):
    """Test a failed search returns an empty list"""
    backend.fail("POST", SEARCH)

    assert await UserService(store).search_users("jane") == []


@pytest.mark.asyncio
async def test_update_user_role_requires_true(store, backend):
    """Test only a literal true result counts as success"""
    service = UserService(store)

    backend.add("POST", UPDATE_ROLE, True)
    assert await service.update_user_role("user-1", UserRole.ADMIN) is True
    assert request_json(backend.last("POST", UPDATE_ROLE)) == {
        "target_user_id": "user-1",
        "new_role": "admin",
    }

    backend.add("POST", UPDATE_ROLE, False)
    assert await service.update_user_role("user-1", UserRole.ADMIN) is False

    backend.add("POST", UPDATE_ROLE, {"updated": True})
    assert await service.update_user_role("user-1", UserRole.ADMIN) is False

    backend.fail("POST", UPDATE_ROLE, "only admins can change roles", status_code=403)
    assert await service.update_user_role("user-1", UserRole.ADMIN) is False


@pytest.mark.asyncio
async def test_get_profile_missing(store, backend):
    """Test a missing profile returns None"""
    backend.fail("GET", PROFILES, "no rows", status_code=406)

    assert await UserService(store).get_profile("user-1") is None


@pytest.mark.asyncio
async def test_update_profile(store, backend):
    """Test profile updates send only set fields"""
    backend.add("PATCH", PROFILES, {"id": "user-1", "display_name": "Janie"})

    profile = await UserService(store).update_profile("user-1", ProfileUpdate(display_name="Janie"))

    assert profile.display_name == "Janie"
    assert set(request_json(backend.last("PATCH", PROFILES))) == {"display_name", "updated_at"}


@pytest.mark.asyncio
async def test_update_profile_failure_raises(store, backend):
    """Test a failed profile update raises ServiceError"""
    backend.fail("PATCH", PROFILES, "permission denied")

    with pytest.raises(ServiceError, match="Failed to update profile"):
        await UserService(store).update_profile("user-1", ProfileUpdate(name="Jane"))
