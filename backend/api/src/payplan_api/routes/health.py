"""Health check endpoint."""

import os
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from payplan import __version__

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Health check",
    response_description="Service status",
)
async def health() -> dict[str, Any]:
    """Report that the API is up."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": os.getenv("ENVIRONMENT", "dev"),
        "version": __version__,
    }
