"""Purchase service"""
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from breadmade.core.exceptions import RemoteStoreError, ServiceError
from breadmade.models.purchase import Purchase, PurchaseWithDetails
from breadmade.schemas.purchase import (
    PurchaseCreate,
    PurchaseFilters,
    PurchaseStats,
    PurchaseUpdate,
)
from breadmade.services.base import BaseService, parse_row, parse_rows, utc_now_iso
from breadmade.utils.logger import logger


class PurchaseService(BaseService):
    """Service for the ``purchases`` table"""

    TABLE = "purchases"

    async def _lookup(self, table: str, column: str, ids: List[str]) -> Dict[str, Any]:
        if not ids:
            return {}
        result = await (
            self.store.table(table)
            .select(f"id, {column}")
            .in_("id", ids)
            .execute()
        )
        return {row["id"]: row.get(column) for row in result.data or []}

    async def _with_details(self, rows: List[dict], include_buyer: bool = True) -> List[PurchaseWithDetails]:
        """
        Attach funnel titles and buyer names to purchase rows

        A failed lookup leaves the details empty; the buyer name falls back to
        the buyer id.
        """
        titles: Dict[str, Any] = {}
        names: Dict[str, Any] = {}
        try:
            titles = await self._lookup(
                "funnels", "title", sorted({r["funnel_id"] for r in rows if r.get("funnel_id")})
            )
            if include_buyer:
                names = await self._lookup(
                    "profiles", "display_name", sorted({r["buyer_id"] for r in rows if r.get("buyer_id")})
                )
        except RemoteStoreError as e:
            logger.error(f"Error fetching purchase details: {e}")

        detailed = []
        for row in rows:
            purchase = PurchaseWithDetails.model_validate(row)
            purchase.funnel_title = titles.get(purchase.funnel_id) or ""
            if include_buyer:
                purchase.buyer_name = names.get(purchase.buyer_id) or purchase.buyer_id
            detailed.append(purchase)
        return detailed

    async def get_purchases(self, filters: Optional[PurchaseFilters] = None) -> List[PurchaseWithDetails]:
        """
        List purchases newest first, optionally filtered

        Args:
            filters: Payment status, type, note, creation date range and amount range

        Returns:
            Purchases with funnel title and buyer name; empty on failure
        """
        filters = filters or PurchaseFilters()
        query = self.store.table(self.TABLE).select("*").order("created_at", desc=True)
        if filters.status:
            query = query.eq("payment_status", filters.status)
        if filters.type:
            query = query.eq("type", filters.type)
        if filters.note:
            query = query.eq("note", filters.note)
        if filters.start_date:
            query = query.gte("created_at", filters.start_date)
        if filters.end_date:
            query = query.lte("created_at", filters.end_date)
        if filters.min_amount is not None:
            query = query.gte("amount", filters.min_amount)
        if filters.max_amount is not None:
            query = query.lte("amount", filters.max_amount)

        try:
            result = await query.execute()
            return await self._with_details(result.data or [])
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching purchases: {e}")
            return []

    async def get_purchase_by_id(self, purchase_id: str) -> Optional[PurchaseWithDetails]:
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("id", purchase_id)
                .single()
                .execute()
            )
            detailed = await self._with_details([result.data])
            return detailed[0]
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching purchase {purchase_id}: {e}")
            return None

    async def get_purchase_by_payment_intent(self, payment_intent_id: str) -> Optional[Purchase]:
        """Find the purchase recorded for a card payment"""
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("stripe_payment_intent_id", payment_intent_id)
                .single()
                .execute()
            )
            return parse_row(Purchase, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching purchase for payment intent {payment_intent_id}: {e}")
            return None

    async def get_purchases_by_user_id(self, user_id: str) -> List[PurchaseWithDetails]:
        """A buyer's purchases with funnel titles, newest first"""
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("buyer_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
            return await self._with_details(result.data or [], include_buyer=False)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching purchases for user {user_id}: {e}")
            return []

    async def get_purchases_by_funnel_id(self, funnel_id: str) -> List[Purchase]:
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("funnel_id", funnel_id)
                .order("created_at", desc=True)
                .execute()
            )
            return parse_rows(Purchase, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching purchases for funnel {funnel_id}: {e}")
            return []

    async def get_recent_purchases(self, limit: int = 10) -> List[PurchaseWithDetails]:
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            return await self._with_details(result.data or [])
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching recent purchases: {e}")
            return []

    async def search_purchases(self, term: str) -> List[PurchaseWithDetails]:
        """Match the term against card and wallet payment references"""
        pattern = f"*{term}*"
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .or_(
                    f"stripe_payment_intent_id.ilike.{pattern},"
                    f"paypal_order_id.ilike.{pattern},"
                    f"paypal_transaction_id.ilike.{pattern}"
                )
                .order("created_at", desc=True)
                .execute()
            )
            return await self._with_details(result.data or [])
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error searching purchases: {e}")
            return []

    async def create_purchase(self, purchase: PurchaseCreate) -> Purchase:
        """
        Record a purchase

        Raises:
            ServiceError: If the remote insert fails
        """
        row = purchase.model_dump(mode="json")
        try:
            result = await self.store.table(self.TABLE).insert(row).select().single().execute()
            created = parse_row(Purchase, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error creating purchase: {e}")
            raise ServiceError(f"Failed to create purchase: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected purchase row after insert: {e}")
            raise ServiceError(f"Failed to create purchase: {e}", e) from e

        logger.info(f"Purchase recorded: {created.id} ({created.amount} {created.payment_status})")
        return created

    async def _update(self, purchase_id: str, values: Dict[str, Any]) -> Purchase:
        values["updated_at"] = utc_now_iso()
        try:
            result = await (
                self.store.table(self.TABLE)
                .update(values)
                .eq("id", purchase_id)
                .select()
                .single()
                .execute()
            )
            updated = parse_row(Purchase, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error updating purchase {purchase_id}: {e}")
            raise ServiceError(f"Failed to update purchase: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected purchase row after update: {e}")
            raise ServiceError(f"Failed to update purchase: {e}", e) from e

        logger.info(f"Purchase updated: {purchase_id}")
        return updated

    async def update_purchase(self, purchase_id: str, updates: PurchaseUpdate) -> Purchase:
        """
        Update purchase details

        Raises:
            ServiceError: If the remote update fails
        """
        return await self._update(purchase_id, updates.model_dump(exclude_unset=True, mode="json"))

    async def update_purchase_status(self, purchase_id: str, payment_status: str) -> Purchase:
        return await self._update(purchase_id, {"payment_status": payment_status})

    async def delete_purchase(self, purchase_id: str) -> bool:
        try:
            await self.store.table(self.TABLE).delete().eq("id", purchase_id).execute()
        except RemoteStoreError as e:
            logger.error(f"Error deleting purchase {purchase_id}: {e}")
            raise ServiceError(f"Failed to delete purchase: {e.message}", e) from e

        logger.info(f"Purchase deleted: {purchase_id}")
        return True

    async def get_purchase_stats(self) -> PurchaseStats:
        """
        Revenue summary over completed purchases

        Returns:
            PurchaseStats; all zeros on failure
        """
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("amount, created_at, payment_status")
                .eq("payment_status", "completed")
                .order("created_at")
                .execute()
            )
        except RemoteStoreError as e:
            logger.error(f"Error fetching purchase stats: {e}")
            return PurchaseStats()

        rows = result.data or []
        total_revenue = sum(float(row.get("amount") or 0) for row in rows)
        successful = sum(1 for row in rows if row.get("payment_status") == "completed")
        return PurchaseStats(
            total_revenue=total_revenue,
            successful_purchases=successful,
            average_order_value=total_revenue / successful if successful else 0,
            total_purchases=len(rows),
        )
