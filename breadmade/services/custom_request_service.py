"""Custom funnel request service"""
from typing import List, Optional

from pydantic import ValidationError

from breadmade.core.exceptions import RemoteStoreError, ServiceError
from breadmade.models.request import CustomRequest
from breadmade.schemas.request import CustomRequestCreate
from breadmade.services.base import BaseService, current_quarter, parse_row, parse_rows, utc_now_iso
from breadmade.utils.logger import logger


class CustomRequestService(BaseService):
    """Service for the ``custom_requests`` table"""

    TABLE = "custom_requests"

    async def create_custom_request(self, request: CustomRequestCreate) -> CustomRequest:
        """
        Submit a custom funnel request

        The request starts as ``pending``, stamped with the submission time
        and the current quarter.

        Raises:
            ServiceError: If the remote insert fails
        """
        row = {
            "name": request.name,
            "email": request.email,
            "company": request.company or None,
            "phone": request.phone or None,
            "projecttype": request.projecttype,
            "industry": request.industry,
            "targetaudience": request.targetaudience or None,
            "primarygoal": request.primarygoal,
            "pages": request.pages or [],
            "features": request.features or [],
            "timeline": request.timeline or None,
            "budget": request.budget or None,
            "inspiration": request.inspiration or None,
            "additionalnotes": request.additionalnotes or None,
            "preferredcontact": request.preferredcontact or "email",
            "status": "pending",
            "submitted_at": utc_now_iso(),
            "quarter": current_quarter(),
        }
        try:
            result = await self.store.table(self.TABLE).insert(row).select().single().execute()
            created = parse_row(CustomRequest, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error creating custom request: {e}")
            raise ServiceError(f"Failed to create custom request: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected custom request row after insert: {e}")
            raise ServiceError(f"Failed to create custom request: {e}", e) from e

        logger.info(f"Custom request submitted: {created.id} by {created.email}")
        return created

    async def get_custom_requests(self) -> List[CustomRequest]:
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            return parse_rows(CustomRequest, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching custom requests: {e}")
            return []

    async def get_custom_requests_by_email(self, email: str) -> List[CustomRequest]:
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("email", email)
                .order("created_at", desc=True)
                .execute()
            )
            return parse_rows(CustomRequest, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching custom requests for {email}: {e}")
            return []

    async def update_custom_request_status(
        self,
        request_id: str,
        status: str,
        assigned_team_member: Optional[str] = None,
    ) -> CustomRequest:
        """
        Change a request's status, optionally assigning a team member

        Raises:
            ServiceError: If the remote update fails
        """
        values = {"status": status, "updated_at": utc_now_iso()}
        if assigned_team_member:
            values["assigned_team_member"] = assigned_team_member
        try:
            result = await (
                self.store.table(self.TABLE)
                .update(values)
                .eq("id", request_id)
                .select()
                .single()
                .execute()
            )
            updated = parse_row(CustomRequest, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error updating custom request {request_id}: {e}")
            raise ServiceError(f"Failed to update custom request: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected custom request row after update: {e}")
            raise ServiceError(f"Failed to update custom request: {e}", e) from e

        logger.info(f"Custom request {request_id} set to {status}")
        return updated

    async def delete_custom_request(self, request_id: str) -> bool:
        try:
            await self.store.table(self.TABLE).delete().eq("id", request_id).execute()
        except RemoteStoreError as e:
            logger.error(f"Error deleting custom request {request_id}: {e}")
            raise ServiceError(f"Failed to delete custom request: {e.message}", e) from e

        logger.info(f"Custom request deleted: {request_id}")
        return True
