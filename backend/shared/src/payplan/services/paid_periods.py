"""Per-booking selection of billing periods marked as paid."""

import datetime as dt
import os
from collections.abc import Collection
from typing import TYPE_CHECKING, Any

from payplan.models import PaidPeriodSelection
from payplan.utils.logging import get_logger

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

DEFAULT_TTL_DAYS = 30


class PaidPeriodStore:
    """Key-value store of paid period indices, one row per booking.

    Rows carry an ``expires_at`` TTL attribute. DynamoDB removes expired
    rows lazily, so reads also check the expiry.
    """

    TABLE = "paid-periods"

    def __init__(self, db: "DynamoDBService", ttl_days: int | None = None) -> None:
        """Initialize paid-period store.

        Args:
            db: DynamoDB service instance
            ttl_days: Selection lifetime. Defaults to PAID_PERIODS_TTL_DAYS env var.
        """
        self.db = db
        if ttl_days is None:
            ttl_days = int(os.getenv("PAID_PERIODS_TTL_DAYS", str(DEFAULT_TTL_DAYS)))
        self.ttl = dt.timedelta(days=ttl_days)

    def get(self, booking_id: str) -> set[int]:
        """Paid period indices for a booking; empty if none or expired."""
        selection = self.get_selection(booking_id)
        if selection is None:
            return set()
        return set(selection.periods)

    def get_selection(self, booking_id: str) -> PaidPeriodSelection | None:
        """Stored selection, or None if missing or expired."""
        item = self.db.get_item(self.TABLE, {"booking_id": booking_id})
        if not item:
            return None
        selection = self._item_to_selection(item)
        if selection.expires_at <= int(dt.datetime.now(dt.UTC).timestamp()):
            logger.debug("Paid-period selection expired: %s", booking_id)
            return None
        return selection

    def save(self, booking_id: str, periods: Collection[int]) -> set[int]:
        """Replace the selection for a booking.

        Args:
            booking_id: Booking ID
            periods: Period indices; an empty collection clears the selection

        Returns:
            The stored indices
        """
        chosen = sorted(set(periods))
        if not chosen:
            self.clear(booking_id)
            return set()

        now = dt.datetime.now(dt.UTC)
        selection = PaidPeriodSelection(
            booking_id=booking_id,
            periods=chosen,
            updated_at=now,
            expires_at=int((now + self.ttl).timestamp()),
        )
        self.db.put_item(self.TABLE, self._selection_to_item(selection))
        logger.info(
            "Paid periods saved | booking_id=%s | periods=%s",
            booking_id,
            ",".join(str(i) for i in chosen),
        )
        return set(chosen)

    def clear(self, booking_id: str) -> None:
        """Remove the selection for a booking."""
        self.db.delete_item(self.TABLE, {"booking_id": booking_id})
        logger.info("Paid periods cleared | booking_id=%s", booking_id)

    def _selection_to_item(self, selection: PaidPeriodSelection) -> dict[str, Any]:
        return {
            "booking_id": selection.booking_id,
            "periods": selection.periods,
            "updated_at": selection.updated_at.isoformat(),
            "expires_at": selection.expires_at,
        }

    def _item_to_selection(self, item: dict[str, Any]) -> PaidPeriodSelection:
        """Convert DynamoDB item to PaidPeriodSelection model."""
        # DynamoDB returns numbers as Decimal
        return PaidPeriodSelection(
            booking_id=item["booking_id"],
            periods=[int(i) for i in item.get("periods", [])],
            updated_at=dt.datetime.fromisoformat(item["updated_at"]),
            expires_at=int(item["expires_at"]),
        )
