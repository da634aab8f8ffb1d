"""Booking storage: one booking row plus one row per property.

Properties live in their own table keyed by ``(booking_id,
property_index)`` so a booking's property set can be replaced in a
single transaction.
"""

import datetime as dt
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from boto3.dynamodb.conditions import Key

from payplan.models import (
    BillingCadence,
    Booking,
    BookingCancellation,
    BookingCreate,
    BookingError,
    BookingSummary,
    ErrorCode,
    Property,
    Stay,
)
from payplan.utils.logging import get_logger, log_booking_operation

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)


class BookingService:
    """Service for creating, reading and deleting bookings."""

    TABLE = "bookings"
    PROPERTIES_TABLE = "properties"
    PAID_PERIODS_TABLE = "paid-periods"

    def __init__(self, db: "DynamoDBService") -> None:
        """Initialize booking service.

        Args:
            db: DynamoDB service instance
        """
        self.db = db

    def _generate_booking_id(self) -> str:
        """Generate a unique booking ID like BKG-ABC123DEF456."""
        return f"BKG-{uuid.uuid4().hex[:12].upper()}"

    def create_booking(self, data: BookingCreate) -> Booking:
        """Store a new booking and its properties atomically.

        Args:
            data: Validated booking data

        Returns:
            The stored Booking

        Raises:
            BookingError: SAVE_FAILED if the transaction is cancelled
        """
        now = dt.datetime.now(dt.UTC)
        booking = Booking(
            booking_id=self._generate_booking_id(),
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )

        transact_items = [
            self.db.transact_put(
                self.TABLE,
                self._booking_to_item(booking),
                condition_expression="attribute_not_exists(booking_id)",
            ),
            *self._property_puts(booking),
        ]
        self._write(transact_items, "create_booking", booking)
        return booking

    def update_booking(self, booking_id: str, data: BookingCreate) -> Booking:
        """Replace a booking and its whole property set.

        Property rows beyond the new property count are deleted in the
        same transaction.

        Args:
            booking_id: Booking to replace
            data: Validated booking data

        Returns:
            The updated Booking

        Raises:
            BookingError: BOOKING_NOT_FOUND, or SAVE_FAILED if the
                transaction is cancelled
        """
        current = self.require_booking(booking_id)
        booking = Booking(
            booking_id=booking_id,
            created_at=current.created_at,
            updated_at=dt.datetime.now(dt.UTC),
            **data.model_dump(),
        )

        stale = range(len(booking.properties), len(current.properties))
        transact_items = [
            self.db.transact_put(
                self.TABLE,
                self._booking_to_item(booking),
                condition_expression="attribute_exists(booking_id)",
            ),
            *self._property_puts(booking),
            *(
                self.db.transact_delete(
                    self.PROPERTIES_TABLE,
                    {"booking_id": booking_id, "property_index": index},
                )
                for index in stale
            ),
        ]
        self._write(transact_items, "update_booking", booking, removed_properties=len(stale))
        return booking

    def get_booking(self, booking_id: str) -> Booking | None:
        """Get a booking with its properties.

        Args:
            booking_id: Booking ID

        Returns:
            Booking or None if not found
        """
        item = self.db.get_item(self.TABLE, {"booking_id": booking_id})
        if not item:
            logger.debug("Booking not found: %s", booking_id)
            return None

        property_items = self.db.query(
            self.PROPERTIES_TABLE,
            Key("booking_id").eq(booking_id),
        )
        property_items.sort(key=lambda p: int(p["property_index"]))
        return self._item_to_booking(item, property_items)

    def require_booking(self, booking_id: str) -> Booking:
        """Get a booking or raise BOOKING_NOT_FOUND."""
        booking = self.get_booking(booking_id)
        if booking is None:
            raise BookingError(
                ErrorCode.BOOKING_NOT_FOUND,
                details={"booking_id": booking_id},
            )
        return booking

    def list_bookings(self) -> list[BookingSummary]:
        """List all bookings, latest check-in first.

        Ties on check-in are ordered by booking ID, descending.
        """
        summaries = [self._item_to_summary(item) for item in self.db.scan(self.TABLE)]
        summaries.sort(key=lambda s: (s.check_in, s.booking_id), reverse=True)
        logger.debug("Listed %d bookings", len(summaries))
        return summaries

    def delete_booking(self, booking_id: str) -> bool:
        """Delete a booking, its properties and its paid-period selection.

        Args:
            booking_id: Booking ID

        Returns:
            True if deleted, False if the booking did not exist

        Raises:
            BookingError: SAVE_FAILED if the transaction is cancelled
        """
        if not self.db.get_item(self.TABLE, {"booking_id": booking_id}):
            return False

        property_keys = [
            {"booking_id": booking_id, "property_index": int(p["property_index"])}
            for p in self.db.query(self.PROPERTIES_TABLE, Key("booking_id").eq(booking_id))
        ]
        transact_items = [
            self.db.transact_delete(self.TABLE, {"booking_id": booking_id}),
            *(self.db.transact_delete(self.PROPERTIES_TABLE, key) for key in property_keys),
        ]
        if not self.db.transact_write(transact_items):
            log_booking_operation(
                logger,
                "delete_booking",
                booking_id=booking_id,
                error="transaction cancelled",
            )
            raise BookingError(ErrorCode.SAVE_FAILED, details={"booking_id": booking_id})

        # Outside the transaction: booking + 99 properties already fill it
        self.db.delete_item(self.PAID_PERIODS_TABLE, {"booking_id": booking_id})

        log_booking_operation(
            logger,
            "delete_booking",
            booking_id=booking_id,
            property_count=len(property_keys),
        )
        return True

    def _write(
        self,
        transact_items: list[dict[str, Any]],
        operation: str,
        booking: Booking,
        **extra: Any,
    ) -> None:
        if not self.db.transact_write(transact_items):
            log_booking_operation(
                logger,
                operation,
                booking_id=booking.booking_id,
                property_count=len(booking.properties),
                error="transaction cancelled",
                **extra,
            )
            raise BookingError(
                ErrorCode.SAVE_FAILED,
                details={"booking_id": booking.booking_id},
            )
        log_booking_operation(
            logger,
            operation,
            booking_id=booking.booking_id,
            property_count=len(booking.properties),
            **extra,
        )

    def _property_puts(self, booking: Booking) -> list[dict[str, Any]]:
        return [
            self.db.transact_put(
                self.PROPERTIES_TABLE,
                self._property_to_item(booking.booking_id, index, prop),
            )
            for index, prop in enumerate(booking.properties)
        ]

    def _booking_to_item(self, booking: Booking) -> dict[str, Any]:
        """Convert Booking to a DynamoDB item, without its properties."""
        stay = booking.stay
        item: dict[str, Any] = {
            "booking_id": booking.booking_id,
            "check_in": stay.check_in.isoformat(),
            "check_out": stay.check_out.isoformat(),
            "eligible_weekdays": [day.value for day in stay.eligible_weekdays],
            "exclude_holidays": stay.exclude_holidays,
            "billing_cadence": stay.billing_cadence.value,
            "service_fee": booking.service_fee,
            "property_count": len(booking.properties),
            "created_at": booking.created_at.isoformat(),
            "updated_at": booking.updated_at.isoformat(),
        }
        cancellation = booking.cancellation
        if cancellation.notification_date:
            item["notification_date"] = cancellation.notification_date.isoformat()
        if cancellation.cancellation_date:
            item["cancellation_date"] = cancellation.cancellation_date.isoformat()
        return item

    def _property_to_item(self, booking_id: str, index: int, prop: Property) -> dict[str, Any]:
        item: dict[str, Any] = {
            "booking_id": booking_id,
            "property_index": index,
            "title": prop.title,
            "night_price": prop.night_price,
            "deposit": prop.deposit,
            "is_cancelled": prop.is_cancelled,
            "notify_day_offset": prop.notify_day_offset,
        }
        if prop.own_checkout_override:
            item["own_checkout_override"] = prop.own_checkout_override.isoformat()
        return item

    def _item_to_booking(
        self,
        item: dict[str, Any],
        property_items: list[dict[str, Any]],
    ) -> Booking:
        """Convert DynamoDB items to a Booking model."""
        return Booking(
            booking_id=item["booking_id"],
            stay=Stay(
                check_in=dt.date.fromisoformat(item["check_in"]),
                check_out=dt.date.fromisoformat(item["check_out"]),
                eligible_weekdays=item.get("eligible_weekdays", []),
                exclude_holidays=item.get("exclude_holidays", False),
                billing_cadence=item["billing_cadence"],
            ),
            service_fee=item.get("service_fee", False),
            cancellation=BookingCancellation(
                notification_date=item.get("notification_date"),
                cancellation_date=item.get("cancellation_date"),
            ),
            properties=[self._item_to_property(p) for p in property_items],
            created_at=dt.datetime.fromisoformat(item["created_at"]),
            updated_at=dt.datetime.fromisoformat(item["updated_at"]),
        )

    def _item_to_property(self, item: dict[str, Any]) -> Property:
        override = item.get("own_checkout_override")
        return Property(
            title=item["title"],
            night_price=Decimal(item["night_price"]),
            deposit=Decimal(item["deposit"]),
            is_cancelled=item.get("is_cancelled", False),
            # DynamoDB returns numbers as Decimal
            notify_day_offset=int(item.get("notify_day_offset", 0)),
            own_checkout_override=dt.date.fromisoformat(override) if override else None,
        )

    def _item_to_summary(self, item: dict[str, Any]) -> BookingSummary:
        return BookingSummary(
            booking_id=item["booking_id"],
            check_in=dt.date.fromisoformat(item["check_in"]),
            check_out=dt.date.fromisoformat(item["check_out"]),
            billing_cadence=BillingCadence.parse(item["billing_cadence"]),
            property_count=int(item.get("property_count", 0)),
            is_cancelled="cancellation_date" in item,
            created_at=dt.datetime.fromisoformat(item["created_at"]),
        )
