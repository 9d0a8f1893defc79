"""Strategy call booking service"""
from typing import List, Optional

from pydantic import ValidationError

from breadmade.core.exceptions import RemoteStoreError, ServiceError
from breadmade.models.booking import StrategyCallBooking
from breadmade.schemas.booking import BookingCreate, BookingUpdate
from breadmade.services.base import BaseService, parse_row, parse_rows, utc_now_iso
from breadmade.utils.logger import logger


class StrategyCallService(BaseService):
    """Service for the ``strategy_call_bookings`` table"""

    TABLE = "strategy_call_bookings"

    async def create_booking(self, booking: BookingCreate) -> StrategyCallBooking:
        """
        Create a new strategy call booking

        Args:
            booking: Contact details and preferred slot; timezone defaults to UTC

        Returns:
            The persisted booking

        Raises:
            ServiceError: If the remote insert fails
        """
        row = {
            "user_id": booking.user_id or None,
            "email": booking.email,
            "phone_number": booking.phone_number or None,
            "name": booking.name,
            "company": booking.company or None,
            "preferred_date": booking.preferred_date.isoformat(),
            "preferred_time_slot": booking.preferred_time_slot,
            "timezone": booking.timezone or "UTC",
        }
        try:
            result = await self.store.table(self.TABLE).insert(row).select().single().execute()
            created = parse_row(StrategyCallBooking, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error creating strategy call booking: {e}")
            raise ServiceError(f"Failed to create booking: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected booking row after insert: {e}")
            raise ServiceError(f"Failed to create booking: {e}", e) from e

        logger.info(f"Strategy call booked: {created.id} for {created.email}")
        return created

    async def get_user_bookings(self, user_id: str) -> List[StrategyCallBooking]:
        """Bookings for one user, newest first; empty on failure"""
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
            return parse_rows(StrategyCallBooking, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching user bookings: {e}")
            return []

    async def get_all_bookings(self) -> List[StrategyCallBooking]:
        """All bookings (admin), newest first; empty on failure"""
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            return parse_rows(StrategyCallBooking, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching all bookings: {e}")
            return []

    async def get_booking_by_id(self, booking_id: str) -> Optional[StrategyCallBooking]:
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("*")
                .eq("id", booking_id)
                .single()
                .execute()
            )
            return parse_row(StrategyCallBooking, result.data)
        except (RemoteStoreError, ValidationError) as e:
            logger.error(f"Error fetching booking {booking_id}: {e}")
            return None

    async def update_booking(self, booking_id: str, updates: BookingUpdate) -> StrategyCallBooking:
        """
        Update a booking (admin)

        Raises:
            ServiceError: If the remote update fails
        """
        values = updates.model_dump(exclude_unset=True, mode="json")
        values["updated_at"] = utc_now_iso()
        try:
            result = await (
                self.store.table(self.TABLE)
                .update(values)
                .eq("id", booking_id)
                .select()
                .single()
                .execute()
            )
            updated = parse_row(StrategyCallBooking, result.data)
        except RemoteStoreError as e:
            logger.error(f"Error updating booking {booking_id}: {e}")
            raise ServiceError(f"Failed to update booking: {e.message}", e) from e
        except ValidationError as e:
            logger.error(f"Unexpected booking row after update: {e}")
            raise ServiceError(f"Failed to update booking: {e}", e) from e

        logger.info(f"Booking updated: {booking_id}")
        return updated

    async def delete_booking(self, booking_id: str) -> bool:
        """
        Delete a booking (admin)

        Raises:
            ServiceError: If the remote delete fails
        """
        try:
            await self.store.table(self.TABLE).delete().eq("id", booking_id).execute()
        except RemoteStoreError as e:
            logger.error(f"Error deleting booking {booking_id}: {e}")
            raise ServiceError(f"Failed to delete booking: {e.message}", e) from e

        logger.info(f"Booking deleted: {booking_id}")
        return True

    async def has_existing_bookings(self, user_id: str) -> bool:
        """Whether the user already booked a call; False on failure"""
        try:
            result = await (
                self.store.table(self.TABLE)
                .select("id")
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except RemoteStoreError as e:
            logger.error(f"Error checking existing bookings: {e}")
            return False
        return len(result.data or []) > 0
