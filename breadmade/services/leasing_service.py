"""Funnel lease request service"""
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from breadmade.core.exceptions import RemoteStoreError, ServiceError
from breadmade.models.request import LeaseRequest
from breadmade.schemas.request import LeaseDraftCreate, LeaseRequestCreate, LeaseRequestUpdate
from breadmade.services.base import BaseService, current_quarter, parse_row, parse_rows, utc_now_iso
from breadmade.utils.logger import logger

# Stand-ins for required columns until the full form is submitted
DRAFT_PLACEHOLDER = "TBD"


class LeasingService(BaseService):
    """Service for the ``lease_requests`` table"""

    TABLE = "lease_requests"

    async def _insert(self, row: Dict[str, Any], action: str) -> LeaseRequest:
        try:
            result = await self.store.table(self.TABLE).insert(row).select().single().execute()
            created = parse_row(LeaseRequest, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error creating {action}: {e}")
            raise ServiceError(f"Failed to create {action}: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected lease request row after insert: {e}")
            raise ServiceError(f"Failed to create {action}: {e}", e) from e

        logger.info(f"Lease request created: {created.id} by {created.email}")
        return created

    async def create_lease_request(self, request: LeaseRequestCreate) -> LeaseRequest:
        """
        Submit a complete lease request

        Raises:
            ServiceError: If the remote insert fails
        """
        row = {
            "name": request.name,
            "email": request.email,
            "company": request.company or None,
            "phone": request.phone or None,
            "project_type": request.project_type,
            "industry": request.industry,
            "target_audience": request.target_audience or None,
            "primary_goal": request.primary_goal,
            "pages": request.pages or [],
            "features": request.features or [],
            "integrations": request.integrations or [],
            "inspiration": request.inspiration or None,
            "additional_notes": request.additional_notes or None,
            "preferred_contact": request.preferred_contact or "email",
            "lease_type": request.lease_type or "performance_based",
            "estimated_revenue": request.estimated_revenue or None,
            "status": "pending",
            "submitted_at": utc_now_iso(),
            "quarter": current_quarter(),
        }
        return await self._insert(row, "lease request")

    async def create_draft_lease_request(self, draft: LeaseDraftCreate) -> LeaseRequest:
        """
        Save the contact step of the lease form as a pending draft

        Required project fields are filled with placeholders until the
        request is completed with :meth:`update_lease_request`.
        """
        row = {
            "name": draft.name or "Anonymous",
            "email": draft.email,
            "company": draft.company,
            "phone": draft.phone,
            "project_type": DRAFT_PLACEHOLDER,
            "industry": DRAFT_PLACEHOLDER,
            "primary_goal": DRAFT_PLACEHOLDER,
            "pages": [],
            "features": [],
            "integrations": [],
            "preferred_contact": "email",
            "lease_type": "performance_based",
            "estimated_revenue": None,
            "status": "pending",
            "submitted_at": utc_now_iso(),
            "quarter": current_quarter(),
        }
        return await self._insert(row, "draft lease request")

    async def _list(self, column: Optional[str] = None, value: Optional[str] = None) -> List[LeaseRequest]:
        query = self.store.table(self.TABLE).select("*")
        if column:
            query = query.eq(column, value)
        result = await query.order("created_at", desc=True).execute()
        return parse_rows(LeaseRequest, result.data)

    async def get_lease_requests(self) -> List[LeaseRequest]:
        try:
            return await self._list()
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching lease requests: {e}")
            return []

    async def get_lease_requests_by_email(self, email: str) -> List[LeaseRequest]:
        try:
            return await self._list("email", email)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching lease requests for {email}: {e}")
            return []

    async def get_lease_requests_by_status(self, status: str) -> List[LeaseRequest]:
        try:
            return await self._list("status", status)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching {status} lease requests: {e}")
            return []

    async def get_lease_request_by_id(self, request_id: str) -> Optional[LeaseRequest]:
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("id", request_id)
                .single()
                .execute()
            )
            return parse_row(LeaseRequest, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching lease request {request_id}: {e}")
            return None

    async def _update(self, request_id: str, values: Dict[str, Any], action: str) -> LeaseRequest:
        values["updated_at"] = utc_now_iso()
        try:
            result = await (
                self.store.table(self.TABLE)
                .update(values)
                .eq("id", request_id)
                .select()
                .single()
                .execute()
            )
            updated = parse_row(LeaseRequest, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error updating {action} {request_id}: {e}")
            raise ServiceError(f"Failed to update {action}: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected lease request row after update: {e}")
            raise ServiceError(f"Failed to update {action}: {e}", e) from e

        logger.info(f"Lease request updated: {request_id}")
        return updated

    async def update_lease_request(self, request_id: str, updates: LeaseRequestUpdate) -> LeaseRequest:
        """
        Update lease request fields

        Raises:
            ServiceError: If the remote update fails
        """
        return await self._update(request_id, updates.model_dump(exclude_unset=True), "lease request")

    async def update_lease_request_status(
        self,
        request_id: str,
        status: str,
        assigned_team_member: Optional[str] = None,
    ) -> LeaseRequest:
        values: Dict[str, Any] = {"status": status}
        if assigned_team_member:
            values["assigned_team_member"] = assigned_team_member
        return await self._update(request_id, values, "lease request")

    async def update_lease_request_revenue(self, request_id: str, estimated_revenue: float) -> LeaseRequest:
        return await self._update(
            request_id, {"estimated_revenue": estimated_revenue}, "lease request revenue"
        )

    async def delete_lease_request(self, request_id: str) -> bool:
        try:
            await self.store.table(self.TABLE).delete().eq("id", request_id).execute()
        except RemoteStoreError as e:
            logger.error(f"Error deleting lease request {request_id}: {e}")
            raise ServiceError(f"Failed to delete lease request: {e.message}", e) from e

        logger.info(f"Lease request deleted: {request_id}")
        return True
