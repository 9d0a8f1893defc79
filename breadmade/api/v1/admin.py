"""Admin API endpoints"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from breadmade.api.deps import get_admin_service, get_user_service, require_admin_user
from breadmade.models.user import Profile
from breadmade.schemas.admin import AdminStats, ProfileUpdate, RoleUpdate
from breadmade.services.admin_service import AdminService
from breadmade.services.user_service import UserService

router = APIRouter(dependencies=[Depends(require_admin_user)])


@router.get("/admin/stats", response_model=AdminStats)
async def get_stats(service: AdminService = Depends(get_admin_service)):
    """Dashboard counters; all zeros when the backend is unreachable"""
    return await service.get_stats()


@router.get("/admin/users", response_model=List[Profile])
async def list_users(q: Optional[str] = None, service: UserService = Depends(get_user_service)):
    """All users, or those matching ``q``"""
    if q:
        return await service.search_users(q)
    return await service.get_all_users()


@router.get("/admin/users/{user_id}", response_model=Profile)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    user = await service.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.patch("/admin/users/{user_id}/profile", response_model=Profile)
async def update_profile(
    user_id: str,
    updates: ProfileUpdate,
    service: UserService = Depends(get_user_service),
):
    return await service.update_profile(user_id, updates)


@router.put("/admin/users/{user_id}/role")
async def update_role(
    user_id: str,
    role_update: RoleUpdate,
    service: UserService = Depends(get_user_service),
):
    """Change a user's role"""
    if not await service.update_user_role(user_id, role_update.role):
        raise HTTPException(status_code=400, detail="Failed to update user role")
    return {"success": True, "user_id": user_id, "role": role_update.role.value}
