"""Holiday calendar models."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class Holiday(BaseModel):
    """A public holiday, shared by every booking."""

    model_config = ConfigDict(strict=True)

    holiday_date: dt.date
    created_at: dt.datetime | None = None


class HolidaySyncResult(BaseModel):
    """Outcome of replacing the holiday calendar."""

    model_config = ConfigDict(strict=True)

    inserted: int = Field(default=0, ge=0)
    deleted: int = Field(default=0, ge=0)
    message: str = ""
