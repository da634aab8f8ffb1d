"""Holiday calendar endpoints."""

from fastapi import APIRouter, Depends

from payplan.models import HolidaySyncResult
from payplan.services.holiday_service import HolidayService
from payplan_api.dependencies import get_holiday_service
from payplan_api.models.holidays import HolidayListResponse, HolidaySyncRequest

router = APIRouter(tags=["holidays"])


@router.get(
    "/holidays",
    summary="List holidays",
    response_model=HolidayListResponse,
)
async def list_holidays(
    service: HolidayService = Depends(get_holiday_service),
) -> HolidayListResponse:
    """List holiday dates, ascending."""
    holidays = service.list_holidays()
    return HolidayListResponse(holidays=holidays, total_count=len(holidays))


@router.put(
    "/holidays",
    summary="Replace holiday calendar",
    description="""
Replace the holiday calendar with the submitted dates.

Dates missing from the submission are deleted and new ones inserted.
Blank or malformed entries are ignored. Submitting no dates at all is
rejected.
""",
    response_model=HolidaySyncResult,
    responses={400: {"description": "No dates provided"}},
)
async def sync_holidays(
    body: HolidaySyncRequest,
    service: HolidayService = Depends(get_holiday_service),
) -> HolidaySyncResult:
    """Sync the holiday calendar."""
    return service.sync_holidays(body.dates)
