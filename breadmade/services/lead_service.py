"""Lead service: captured contacts and the combined prospect list"""
from typing import Dict, List, Optional

from pydantic import ValidationError

from breadmade.core.exceptions import RemoteStoreError, ServiceError
from breadmade.models.lead import Lead, LeadSource
from breadmade.schemas.lead import LeadCreate, LeadUpdate
from breadmade.services.base import BaseService, parse_row, parse_rows, utc_now_iso
from breadmade.utils.logger import logger


class LeadService(BaseService):
    """Service for the ``leads`` table"""

    TABLE = "leads"

    async def get_leads(self) -> List[Lead]:
        """
        Get all leads, newest first

        Returns:
            List of leads, empty if the remote read fails
        """
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            return parse_rows(Lead, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching leads: {e}")
            return []

    async def get_lead_by_id(self, lead_id: str) -> Optional[Lead]:
        """Get a single lead, or None if it is missing or the read fails"""
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("id", lead_id)
                .single()
                .execute()
            )
            return parse_row(Lead, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching lead {lead_id}: {e}")
            return None

    async def create_lead(self, lead: LeadCreate) -> Lead:
        """
        Capture a new lead

        Args:
            lead: Contact fields

        Returns:
            The persisted lead with server-assigned id and timestamps

        Raises:
            ServiceError: If the remote insert fails
        """
        try:
            result = await (
                self.store.table(self.TABLE)
                .insert(lead.model_dump(exclude_none=True))
                .select()
                .single()
                .execute()
            )
            created = parse_row(Lead, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error creating lead: {e}")
            raise ServiceError(f"Failed to create lead: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected lead row after insert: {e}")
            raise ServiceError(f"Failed to create lead: {e}", e) from e

        logger.info(f"Lead created: {created.id} ({created.email})")
        return created

    async def update_lead(self, lead_id: str, updates: LeadUpdate) -> Lead:
        """
        Update a lead

        Raises:
            ServiceError: If the remote update fails
        """
        values: Dict[str, object] = updates.model_dump(exclude_unset=True)
        values["updated_at"] = utc_now_iso()
        try:
            result = await (
                self.store.table(self.TABLE)
                .update(values)
                .eq("id", lead_id)
                .select()
                .single()
                .execute()
            )
            updated = parse_row(Lead, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error updating lead {lead_id}: {e}")
            raise ServiceError(f"Failed to update lead: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected lead row after update: {e}")
            raise ServiceError(f"Failed to update lead: {e}", e) from e

        logger.info(f"Lead updated: {lead_id}")
        return updated

    async def delete_lead(self, lead_id: str) -> bool:
        """
        Delete a lead

        Raises:
            RemoteStoreError: The remote error is propagated unchanged
        """
        try:
            await self.store.table(self.TABLE).delete().eq("id", lead_id).execute()
        except RemoteStoreError as e:
            logger.error(f"Error deleting lead {lead_id}: {e}")
            raise

        logger.info(f"Lead deleted: {lead_id}")
        return True

    async def get_lead_sources(self) -> List[LeadSource]:
        """
        Build the prospect list from custom requests and bid offers

        Bidder emails come from the ``get_user_emails`` function and names
        from ``profiles``; a failure of either lookup only loses that detail.

        Returns:
            Prospects sorted newest first, empty if the main reads fail
        """
        leads: List[LeadSource] = []

        try:
            requests_result = await (
                self.store.table("custom_requests")
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            for request in requests_result.data or []:
                leads.append(LeadSource(
                    id=request["id"],
                    email=request["email"],
                    name=request.get("name"),
                    phone=request.get("phone"),
                    company=request.get("company"),
                    source="custom_request",
                    project_type=request.get("projecttype"),
                    budget=request.get("budget"),
                    status=request.get("status"),
                    industry=request.get("industry"),
                    targetaudience=request.get("targetaudience"),
                    primarygoal=request.get("primarygoal"),
                    pages=request.get("pages"),
                    features=request.get("features"),
                    timeline=request.get("timeline"),
                    inspiration=request.get("inspiration"),
                    additionalnotes=request.get("additionalnotes"),
                    preferredcontact=request.get("preferredcontact"),
                    created_at=request["created_at"],
                ))

            bids_result = await (
                self.store.table("bids")
                .select("*")
                .not_("offer_amount", "is", None)
                .order("created_at", desc=True)
                .execute()
            )
            bids = bids_result.data or []
            if bids:
                bidder_ids = list(dict.fromkeys(bid["bidder_id"] for bid in bids))
                user_map = await self._get_user_contacts(bidder_ids)
                profile_map = await self._get_display_names(bidder_ids)

                for bid in bids:
                    contact = user_map.get(bid["bidder_id"], {})
                    leads.append(LeadSource(
                        id=bid["id"],
                        email=contact.get("email") or "Unknown",
                        name=profile_map.get(bid["bidder_id"]) or "Unknown",
                        phone=contact.get("phone"),
                        source="bid_offer",
                        offer_amount=bid.get("offer_amount"),
                        auction_id=bid.get("auction_id"),
                        bidder_id=bid.get("bidder_id"),
                        created_at=bid["created_at"],
                    ))
        except (RemoteStoreError, ValidationError, KeyError) as e:
            logger.error(f"Error fetching lead sources: {e}")
            return []

        leads.sort(key=lambda lead: lead.created_at, reverse=True)
        return leads

    async def _get_user_contacts(self, user_ids: List[str]) -> Dict[str, dict]:
        try:
            users = await self.store.rpc("get_user_emails", {"user_ids": user_ids})
        except RemoteStoreError as e:
            logger.error(f"Error fetching users via RPC: {e}")
            return {}
        return {
            user["id"]: {"email": user.get("email"), "phone": user.get("phone")}
            for user in users or []
        }

    async def _get_display_names(self, user_ids: List[str]) -> Dict[str, Optional[str]]:
        try:
            result = await (
                self.store.table("profiles")
                .select("id, display_name")
                .in_("id", user_ids)
                .execute()
            )
        except RemoteStoreError as e:
            logger.error(f"Error fetching profiles: {e}")
            return {}
        return {profile["id"]: profile.get("display_name") for profile in result.data or []}
