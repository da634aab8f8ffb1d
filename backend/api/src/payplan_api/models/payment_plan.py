"""API models for payment plan endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class PaidPeriodsRequest(BaseModel):
    """Billing periods to mark as paid.

    Indices refer to the booking's current period list. An empty list
    clears the selection.
    """

    model_config = ConfigDict(
        strict=False,
        json_schema_extra={"examples": [{"periods": [0, 1]}]},
    )

    periods: list[int] = Field(
        default_factory=list,
        description="Zero-based period indices",
        examples=[[0, 1]],
    )
