"""Funnel and category service"""
import re
import time
import uuid
from typing import List, Optional

from pydantic import ValidationError

from breadmade.core.exceptions import RemoteStoreError, ServiceError
from breadmade.models.funnel import Category, Funnel
from breadmade.schemas.funnel import FunnelCreate, FunnelUpdate
from breadmade.services.base import BaseService, parse_row, parse_rows, utc_now_iso
from breadmade.utils.logger import logger

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
FUNNEL_WITH_CATEGORY = "*, category:categories(*)"


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_funnel_id(title: str, timestamp_ms: Optional[int] = None) -> str:
    """
    Build the public funnel identifier from its title

    The title is lowercased, stripped of anything but letters, digits and
    spaces, hyphenated and cut to 30 characters, then suffixed with the
    base-36 millisecond timestamp.
    """
    base_id = re.sub(r"[^a-z0-9 ]", "", title.lower())
    base_id = re.sub(r"\s+", "-", base_id)[:30]
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{base_id}-{to_base36(timestamp_ms)}"


class FunnelService(BaseService):
    """Service for the ``funnels`` and ``categories`` tables"""

    TABLE = "funnels"

    def __init__(self, store, image_bucket: str = "funnels", image_folder: str = "funnel-images"):
        super().__init__(store)
        self.image_bucket = image_bucket
        self.image_folder = image_folder

    async def _fetch_active(self, columns: str) -> List[Funnel]:
        result = await (
            self.store.table(self.TABLE)
            .select(columns)
            .eq("active", True)
            .order("created_at", desc=True)
            .execute()
        )
        return parse_rows(Funnel, result.data)

    async def get_funnels(self) -> List[Funnel]:
        """Active funnels, newest first; empty on failure"""
        try:
            return await self._fetch_active("*")
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching funnels: {e}")
            return []

    async def get_funnels_with_categories(self) -> List[Funnel]:
        try:
            return await self._fetch_active(FUNNEL_WITH_CATEGORY)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching funnels with categories: {e}")
            return []

    async def _fetch_one(self, column: str, value: str, columns: str = "*") -> Optional[Funnel]:
        try:
            result = await (
                self.store.table(self.TABLE)
                .select(columns)
                .eq(column, value)
                .single()
                .execute()
            )
            return parse_row(Funnel, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching funnel {column}={value}: {e}")
            return None

    async def get_funnel_by_id(self, funnel_id: str) -> Optional[Funnel]:
        return await self._fetch_one("id", funnel_id)

    async def get_funnel_by_id_with_category(self, funnel_id: str) -> Optional[Funnel]:
        return await self._fetch_one("id", funnel_id, FUNNEL_WITH_CATEGORY)

    async def get_funnel_by_funnel_id(self, public_id: str) -> Optional[Funnel]:
        """Look up a funnel by its public identifier"""
        return await self._fetch_one("funnel_id", public_id)

    async def get_categories(self) -> List[Category]:
        """Categories sorted by name; empty on failure"""
        try:
            result = await (
                self.store.table("categories")
                .select("*")
                .order("name")
                .execute()
            )
            return parse_rows(Category, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching categories: {e}")
            return []

    async def create_category(self, name: str) -> Category:
        """
        Create a category

        Raises:
            ServiceError: If the remote insert fails
        """
        try:
            result = await (
                self.store.table("categories")
                .insert({"name": name})
                .select()
                .single()
                .execute()
            )
            return parse_row(Category, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error creating category: {e}")
            raise ServiceError(f"Failed to create category: {getattr(e, 'message', e)}", e) from e

    async def create_funnel(self, funnel: FunnelCreate) -> Funnel:
        """
        Create an active funnel with a generated public identifier

        Raises:
            ServiceError: If the remote insert fails
        """
        row = {
            "funnel_id": generate_funnel_id(funnel.title),
            "title": funnel.title,
            "description": funnel.description or None,
            "image_url": funnel.image_url or None,
            "category_id": funnel.category_id or None,
            "is_available_for_lease": bool(funnel.is_available_for_lease),
            "active": True,
        }
        try:
            result = await self.store.table(self.TABLE).insert(row).select().single().execute()
            created = parse_row(Funnel, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error creating funnel: {e}")
            raise ServiceError(f"Failed to create funnel: {getattr(e, 'message', e)}", e) from e

        logger.info(f"Funnel created: {created.funnel_id}")
        return created

    async def update_funnel(self, funnel_id: str, updates: FunnelUpdate) -> Funnel:
        """
        Update a funnel

        Raises:
            ServiceError: If the remote update fails
        """
        values = updates.model_dump(exclude_unset=True)
        values["updated_at"] = utc_now_iso()
        try:
            result = await (
                self.store.table(self.TABLE)
                .update(values)
                .eq("id", funnel_id)
                .select()
                .single()
                .execute()
            )
            updated = parse_row(Funnel, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error updating funnel {funnel_id}: {e}")
            raise ServiceError(f"Failed to update funnel: {getattr(e, 'message', e)}", e) from e

        logger.info(f"Funnel updated: {funnel_id}")
        return updated

    async def delete_funnel(self, funnel_id: str) -> bool:
        """
        Soft-delete a funnel by clearing its active flag

        Raises:
            ServiceError: If the remote update fails
        """
        try:
            await (
                self.store.table(self.TABLE)
                .update({"active": False, "updated_at": utc_now_iso()})
                .eq("id", funnel_id)
                .execute()
            )
        except RemoteStoreError as e:
            logger.error(f"Error deleting funnel {funnel_id}: {e}")
            raise ServiceError(f"Failed to delete funnel: {e.message}", e) from e

        logger.info(f"Funnel deactivated: {funnel_id}")
        return True

    async def upload_funnel_image(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> Optional[str]:
        """
        Upload a funnel image under a random name

        Returns:
            Public URL of the stored image, or None if the upload fails
        """
        extension = filename.rsplit(".", 1)[-1] if "." in filename else "bin"
        path = f"{self.image_folder}/{uuid.uuid4().hex}.{extension}"
        bucket = self.store.storage(self.image_bucket)
        try:
            await bucket.upload(path, content, content_type)
        except RemoteStoreError as e:
            logger.error(f"Error uploading funnel image: {e}")
            return None
        return bucket.get_public_url(path)
