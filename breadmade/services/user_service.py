"""User and profile service"""
from typing import List, Optional

from pydantic import ValidationError

from breadmade.core.exceptions import RemoteStoreError, ServiceError
from breadmade.models.user import Profile, UserRole
from breadmade.schemas.admin import ProfileUpdate
from breadmade.services.base import BaseService, parse_row, parse_rows, utc_now_iso
from breadmade.utils.logger import logger


class UserService(BaseService):
    """Profiles table plus the user-management remote procedures"""

    TABLE = "profiles"

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("id", user_id)
                .single()
                .execute()
            )
            return parse_row(Profile, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching profile {user_id}: {e}")
            return None

    async def update_profile(self, user_id: str, updates: ProfileUpdate) -> Profile:
        """
        Update a profile row

        Raises:
            ServiceError: If the remote update fails
        """
        values = updates.model_dump(exclude_unset=True)
        values["updated_at"] = utc_now_iso()
        try:
            result = await (
                self.store.table(self.TABLE)
                .update(values)
                .eq("id", user_id)
                .select()
                .single()
                .execute()
            )
            updated = parse_row(Profile, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error updating profile {user_id}: {e}")
            raise ServiceError(f"Failed to update profile: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected profile row after update: {e}")
            raise ServiceError(f"Failed to update profile: {e}", e) from e

        logger.info(f"Profile updated: {user_id}")
        return updated

    async def get_all_users(self) -> List[Profile]:
        """Every user with email and role, via the ``get_all_users`` procedure"""
        try:
            return parse_rows(Profile, await self.store.rpc("get_all_users"))
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching users: {e}")
            return []

    async def search_users(self, query: str) -> List[Profile]:
        try:
            rows = await self.store.rpc("search_users", {"search_query": query})
            return parse_rows(Profile, rows)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error searching users: {e}")
            return []

    async def get_user_by_id(self, user_id: str) -> Optional[Profile]:
        for user in await self.get_all_users():
            if user.id == user_id:
                return user
        return None

    async def update_user_role(self, user_id: str, role: UserRole) -> bool:
        """
        Change a user's role via the ``update_user_role`` procedure

        Returns:
            True only when the procedure reports success
        """
        try:
            result = await self.store.rpc(
                "update_user_role",
                {"target_user_id": user_id, "new_role": UserRole(role).value},
            )
        except RemoteStoreError as e:
            logger.error(f"Error updating role for {user_id}: {e}")
            return False

        if result is True:
            logger.info(f"Role for {user_id} set to {UserRole(role).value}")
            return True
        return False
