"""Auction and bid service"""
from typing import Dict, List, Optional

from pydantic import ValidationError

from breadmade.core.exceptions import RemoteStoreError, ServiceError
from breadmade.models.auction import Auction, AuctionStatus, Bid
from breadmade.schemas.auction import AuctionCreate, AuctionUpdate, BidCreate, BidResponse, BidUpdate
from breadmade.services.base import BaseService, parse_row, parse_rows, utc_now, utc_now_iso
from breadmade.services.countdown import calculate_time_remaining
from breadmade.utils.logger import logger

AUCTION_WITH_RELATIONS = """
    *,
    funnel:funnels(*),
    winning_bid:bids!winning_bid_id(*)
"""


def format_price(price: float) -> str:
    """Render a price without a trailing ``.0`` for whole amounts"""
    return str(int(price)) if float(price).is_integer() else str(price)


class AuctionService(BaseService):
    """Service for the ``auctions`` and ``bids`` tables"""

    TABLE = "auctions"
    BIDS_TABLE = "bids"

    # Auctions

    async def get_auctions(self) -> List[Auction]:
        """All auctions ending soonest first, with funnel and winning bid"""
        try:
            result = await (
                self.store.table(self.TABLE)
                .select(AUCTION_WITH_RELATIONS)
                .order("ends_at")
                .execute()
            )
            return parse_rows(Auction, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching auctions: {e}")
            return []

    async def get_auction_by_id(self, auction_id: str) -> Optional[Auction]:
        """
        Get one auction with its bids, highest amount first

        Returns:
            The auction, or None if it is missing or the store fails
        """
        try:
            result = await (
                self.store.table(self.TABLE)
                .select(AUCTION_WITH_RELATIONS)
                .eq("id", auction_id)
                .single()
                .execute()
            )
            auction = parse_row(Auction, result.data)
            bids = await (
                self.store.table(self.BIDS_TABLE)
                .select("*")
                .eq("auction_id", auction_id)
                .order("amount", desc=True)
                .execute()
            )
            auction.bids = parse_rows(Bid, bids.data)
            return auction
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching auction {auction_id}: {e}")
            return None

    async def create_auction(self, auction: AuctionCreate) -> Auction:
        """
        Create an auction

        Raises:
            ServiceError: If the remote insert fails
        """
        row = auction.model_dump(exclude_none=True, mode="json")
        try:
            result = await self.store.table(self.TABLE).insert(row).select().single().execute()
            created = parse_row(Auction, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error creating auction: {e}")
            raise ServiceError(f"Failed to create auction: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected auction row after insert: {e}")
            raise ServiceError(f"Failed to create auction: {e}", e) from e

        logger.info(f"Auction created: {created.id}")
        return created

    async def update_auction(self, auction_id: str, updates: AuctionUpdate) -> Auction:
        """
        Update an auction

        Raises:
            ServiceError: If the remote update fails
        """
        values = updates.model_dump(exclude_unset=True, mode="json")
        values["updated_at"] = utc_now_iso()
        try:
            result = await (
                self.store.table(self.TABLE)
                .update(values)
                .eq("id", auction_id)
                .select()
                .single()
                .execute()
            )
            updated = parse_row(Auction, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error updating auction {auction_id}: {e}")
            raise ServiceError(f"Failed to update auction: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected auction row after update: {e}")
            raise ServiceError(f"Failed to update auction: {e}", e) from e

        logger.info(f"Auction updated: {auction_id}")
        return updated

    async def delete_auction(self, auction_id: str) -> bool:
        try:
            await self.store.table(self.TABLE).delete().eq("id", auction_id).execute()
        except RemoteStoreError as e:
            logger.error(f"Error deleting auction {auction_id}: {e}")
            raise ServiceError(f"Failed to delete auction: {e.message}", e) from e

        logger.info(f"Auction deleted: {auction_id}")
        return True

    # Bids

    async def get_bids(self) -> List[Bid]:
        try:
            result = await (
                self.store.table(self.BIDS_TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            return parse_rows(Bid, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching bids: {e}")
            return []

    async def _get_bidder_profiles(self, bidder_ids: List[str]) -> Dict[str, dict]:
        if not bidder_ids:
            return {}
        result = await (
            self.store.table("profiles")
            .select("id, display_name")
            .in_("id", bidder_ids)
            .execute()
        )
        return {row["id"]: row for row in result.data or []}

    async def get_bids_by_auction(self, auction_id: str) -> List[Bid]:
        """
        Bids on one auction, highest amount first, each with its bidder's profile

        Returns:
            List of bids; empty on failure
        """
        try:
            result = await (
                self.store.table(self.BIDS_TABLE)
                .select("*")
                .eq("auction_id", auction_id)
                .order("amount", desc=True)
                .execute()
            )
            rows = result.data or []
            profiles = await self._get_bidder_profiles(
                sorted({row["bidder_id"] for row in rows if row.get("bidder_id")})
            )
            for row in rows:
                row["bidder"] = profiles.get(row.get("bidder_id"))
            return parse_rows(Bid, rows)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching bids for auction {auction_id}: {e}")
            return []

    async def get_user_bids(self, user_id: str) -> List[Bid]:
        try:
            result = await (
                self.store.table(self.BIDS_TABLE)
                .select("*")
                .eq("bidder_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
            return parse_rows(Bid, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching bids for user {user_id}: {e}")
            return []

    async def get_bid_by_id(self, bid_id: str) -> Optional[Bid]:
        try:
            result = await (
                self.store.table(self.BIDS_TABLE)
                .select("*")
                .eq("id", bid_id)
                .single()
                .execute()
            )
            return parse_row(Bid, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching bid {bid_id}: {e}")
            return None

    async def create_bid(self, bid: BidCreate) -> Bid:
        """
        Place a bid or custom offer

        Raises:
            ServiceError: If the remote insert fails
        """
        row = bid.model_dump(exclude_none=True, mode="json")
        try:
            result = await self.store.table(self.BIDS_TABLE).insert(row).select().single().execute()
            created = parse_row(Bid, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error creating bid: {e}")
            raise ServiceError(f"Failed to create bid: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected bid row after insert: {e}")
            raise ServiceError(f"Failed to create bid: {e}", e) from e

        logger.info(f"Bid placed: {created.id} on auction {created.auction_id}")
        return created

    async def update_bid(self, bid_id: str, updates: BidUpdate) -> Bid:
        """
        Update a bid

        Raises:
            ServiceError: If the remote update fails
        """
        values = updates.model_dump(exclude_unset=True, mode="json")
        try:
            result = await (
                self.store.table(self.BIDS_TABLE)
                .update(values)
                .eq("id", bid_id)
                .select()
                .single()
                .execute()
            )
            updated = parse_row(Bid, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error updating bid {bid_id}: {e}")
            raise ServiceError(f"Failed to update bid: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected bid row after update: {e}")
            raise ServiceError(f"Failed to update bid: {e}", e) from e

        logger.info(f"Bid updated: {bid_id}")
        return updated

    # Bidding

    async def place_bid(self, bid: BidCreate) -> BidResponse:
        """
        Place a bid after checking the auction can take it

        The auction must exist, be active and not have ended, and the amount
        must beat the current price (the starting price before any bid).

        Returns:
            BidResponse with the new bid and the refreshed auction, or the
            reason the bid was refused
        """
        auction = await self.get_auction_by_id(bid.auction_id)
        if not auction:
            return BidResponse(success=False, error="Auction not found")
        if auction.status != AuctionStatus.ACTIVE:
            return BidResponse(success=False, error="Auction is not active")
        if calculate_time_remaining(auction.ends_at).expired:
            return BidResponse(success=False, error="Auction has ended")

        current_price = auction.current_price if auction.current_price is not None else auction.starting_price
        if bid.amount <= current_price:
            return BidResponse(
                success=False,
                error=f"Bid must be higher than current price of ${format_price(current_price)}",
            )

        try:
            created = await self.create_bid(bid)
        except ServiceError as e:
            logger.error(f"Error placing bid on auction {bid.auction_id}: {e.message}")
            return BidResponse(success=False, error="Failed to place bid")

        return BidResponse(success=True, bid=created, auction=await self.get_auction_by_id(bid.auction_id))

    async def buy_now(self, auction_id: str, buyer_id: str) -> BidResponse:
        """
        Sell an active auction at its buy-now price and end it immediately

        Returns:
            BidResponse with the sold auction, or the reason it was refused
        """
        auction = await self.get_auction_by_id(auction_id)
        if not auction:
            return BidResponse(success=False, error="Auction not found")
        if auction.status != AuctionStatus.ACTIVE:
            return BidResponse(success=False, error="Auction is not active")
        if not auction.buy_now:
            return BidResponse(success=False, error="Buy now option not available")

        try:
            await self.update_auction(auction_id, AuctionUpdate(
                status=AuctionStatus.SOLD,
                winner_id=buyer_id,
                current_price=auction.buy_now,
                ends_at=utc_now(),
            ))
        except ServiceError as e:
            logger.error(f"Error processing buy now on auction {auction_id}: {e.message}")
            return BidResponse(success=False, error="Failed to process buy now")

        logger.info(f"Auction {auction_id} bought outright by {buyer_id}")
        return BidResponse(success=True, auction=await self.get_auction_by_id(auction_id))
