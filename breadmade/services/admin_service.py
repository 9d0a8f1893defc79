"""Admin dashboard statistics"""
from breadmade.core.exceptions import RemoteStoreError
from breadmade.schemas.admin import AdminStats
from breadmade.services.base import BaseService
from breadmade.utils.logger import logger


class AdminService(BaseService):
    """Aggregate counters for the admin dashboard"""

    async def _count(self, table: str, **filters) -> int:
        query = self.store.table(table).select("id", count="exact", head=True)
        for column, value in filters.items():
            query = query.eq(column, value)
        result = await query.execute()
        return result.count or 0

    async def get_stats(self) -> AdminStats:
        """
        Collect dashboard counters

        Revenue only counts completed purchases. Any remote failure yields
        all-zero statistics.
        """
        try:
            completed = await (
                self.store.table("purchases")
                .select("amount")
                .eq("payment_status", "completed")
                .execute()
            )
            return AdminStats(
                total_leads=await self._count("leads"),
                total_requests=await self._count("custom_requests"),
                pending_requests=await self._count("custom_requests", status="pending"),
                total_revenue=sum(float(row.get("amount") or 0) for row in completed.data or []),
                active_auctions=await self._count("auctions", status="active"),
                total_purchases=await self._count("purchases"),
            )
        except RemoteStoreError as e:
            logger.error(f"Error getting stats: {e}")
            return AdminStats()
