"""FastAPI exception handlers for converting domain errors to HTTP responses.

ErrorCode-to-HTTP status mapping:
- 400 Bad Request: invalid paid-period index, empty holiday submission
- 404 Not Found: unknown booking
- 500 Internal Server Error: storage write failed

Usage:
    from payplan_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

import logging

from botocore.exceptions import ClientError
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from payplan.models.errors import BookingError, ErrorCode, ErrorResponse

logger = logging.getLogger(__name__)

# Map ErrorCode to HTTP status codes
ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.BOOKING_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_PERIOD_INDEX: HTTP_400_BAD_REQUEST,
    ErrorCode.NO_HOLIDAY_DATES: HTTP_400_BAD_REQUEST,
    ErrorCode.SAVE_FAILED: HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode.

    Args:
        code: The ErrorCode to map

    Returns:
        HTTP status code, defaults to 400 if not explicitly mapped.
    """
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    """Convert a BookingError into an ErrorResponse body."""
    return JSONResponse(
        status_code=get_http_status_for_error(exc.code),
        content=exc.to_error_response().model_dump(mode="json"),
    )


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    """Render an unexpected DynamoDB failure as SAVE_FAILED.

    Args:
        request: The incoming request (unused but required by FastAPI)
        exc: The botocore ClientError

    Returns:
        JSONResponse with 500 status and the underlying error text.
    """
    logger.exception("DynamoDB request failed: %s", exc)
    error_response = ErrorResponse.from_code(
        ErrorCode.SAVE_FAILED,
        details={
            "error": str(exc),
            "aws_error_code": exc.response.get("Error", {}).get("Code", "Unknown"),
        },
    )
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(BookingError, booking_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ClientError, client_error_handler)  # type: ignore[arg-type]
