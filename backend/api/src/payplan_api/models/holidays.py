"""API models for the holiday calendar."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class HolidaySyncRequest(BaseModel):
    """Full replacement holiday calendar.

    Entries stay as raw strings so blank or malformed dates can be
    dropped during sync instead of failing the whole request.
    """

    model_config = ConfigDict(
        strict=False,
        json_schema_extra={"examples": [{"dates": ["2025-01-01", "2025-04-18"]}]},
    )

    dates: list[str] = Field(
        default_factory=list,
        description="Holiday dates (YYYY-MM-DD)",
    )


class HolidayListResponse(BaseModel):
    """Current holiday calendar."""

    model_config = ConfigDict(strict=True)

    holidays: list[date] = Field(..., description="Holiday dates, ascending")
    total_count: int = Field(..., ge=0)
