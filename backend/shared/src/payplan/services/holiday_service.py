"""Holiday calendar shared by all bookings."""

import datetime as dt
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from boto3.dynamodb.conditions import Attr

from payplan.models import BookingError, ErrorCode, Holiday, HolidaySyncResult
from payplan.utils.logging import get_logger

from .calendar import as_date

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def parse_holiday_date(value: str | dt.date) -> dt.date | None:
    """Parse a strict ``YYYY-MM-DD`` date, or return None if malformed."""
    if isinstance(value, dt.date):
        return as_date(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = dt.datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None
    # strptime accepts unpadded fields like 2024-1-5
    if parsed.isoformat() != text:
        return None
    return parsed


class HolidayService:
    """Service for reading and replacing the holiday calendar."""

    TABLE = "holidays"

    def __init__(self, db: "DynamoDBService") -> None:
        """Initialize holiday service.

        Args:
            db: DynamoDB service instance
        """
        self.db = db

    def get_holidays(self) -> list[Holiday]:
        """All stored holidays, ascending by date."""
        items = self.db.scan(self.TABLE)
        return sorted(
            (self._item_to_holiday(item) for item in items), key=lambda h: h.holiday_date
        )

    def list_holidays(self) -> list[dt.date]:
        """All holiday dates, ascending."""
        return [h.holiday_date for h in self.get_holidays()]

    def holidays_between(self, start: dt.date, end: dt.date) -> set[dt.date]:
        """Holidays in ``[start, end)``.

        Args:
            start: First day of the range
            end: Day after the range (exclusive)

        Returns:
            Set of holiday dates
        """
        # ISO dates sort lexicographically
        condition = Attr("holiday_date").gte(start.isoformat()) & Attr("holiday_date").lt(
            end.isoformat()
        )
        items = self.db.scan(self.TABLE, filter_expression=condition)
        holidays = {self._item_to_holiday(item).holiday_date for item in items}
        logger.debug("Loaded %d holidays between %s and %s", len(holidays), start, end)
        return holidays

    def validate_dates(
        self, dates: Iterable[str | dt.date]
    ) -> tuple[list[dt.date], list[str]]:
        """Split raw submitted dates into parsed dates and rejected entries.

        Blank entries count as invalid. Duplicates are kept.
        """
        valid: list[dt.date] = []
        invalid: list[str] = []
        for raw in dates:
            parsed = parse_holiday_date(raw)
            if parsed is None:
                invalid.append(str(raw))
            else:
                valid.append(parsed)
        return valid, invalid

    def sync_holidays(self, dates: Iterable[str | dt.date]) -> HolidaySyncResult:
        """Replace the calendar with the submitted dates.

        Dates no longer submitted are deleted and new ones inserted.
        Blank and malformed entries are dropped.

        Args:
            dates: Submitted dates as ISO strings or dates

        Returns:
            Counts of inserted and deleted dates with a summary message

        Raises:
            BookingError: NO_HOLIDAY_DATES if nothing was submitted
        """
        submitted = list(dates)
        if not submitted:
            raise BookingError(ErrorCode.NO_HOLIDAY_DATES)

        valid, invalid = self.validate_dates(submitted)
        if invalid:
            logger.warning("Dropping %d malformed holiday dates", len(invalid))

        wanted = set(valid)
        current = set(self.list_holidays())
        to_delete = sorted(current - wanted)
        to_insert = sorted(wanted - current)

        if not to_delete and not to_insert:
            return HolidaySyncResult(message="No changes detected.")

        now = dt.datetime.now(dt.UTC)
        self.db.batch_write(
            self.TABLE,
            put_items=[
                self._holiday_to_item(Holiday(holiday_date=d, created_at=now))
                for d in to_insert
            ],
            delete_keys=[{"holiday_date": d.isoformat()} for d in to_delete],
        )

        parts = []
        if to_insert:
            parts.append(f"{len(to_insert)} inserted")
        if to_delete:
            parts.append(f"{len(to_delete)} deleted")
        result = HolidaySyncResult(
            inserted=len(to_insert),
            deleted=len(to_delete),
            message=" and ".join(parts) + ".",
        )
        logger.info(
            "Holiday calendar synced | inserted=%d | deleted=%d",
            result.inserted,
            result.deleted,
        )
        return result

    def _holiday_to_item(self, holiday: Holiday) -> dict[str, str]:
        item = {"holiday_date": holiday.holiday_date.isoformat()}
        if holiday.created_at is not None:
            item["created_at"] = holiday.created_at.isoformat()
        return item

    def _item_to_holiday(self, item: dict[str, Any]) -> Holiday:
        """Convert DynamoDB item to Holiday model."""
        created_at = item.get("created_at")
        return Holiday(
            holiday_date=dt.date.fromisoformat(item["holiday_date"]),
            created_at=dt.datetime.fromisoformat(created_at) if created_at else None,
        )
