"""Standard error codes for booking and payment plan operations.

All services raise BookingError with one of these codes; the API layer
turns it into an ErrorResponse with a matching HTTP status.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    BOOKING_NOT_FOUND = "ERR_001"
    INVALID_PERIOD_INDEX = "ERR_002"
    NO_HOLIDAY_DATES = "ERR_003"
    SAVE_FAILED = "ERR_004"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.BOOKING_NOT_FOUND: "Booking not found.",
    ErrorCode.INVALID_PERIOD_INDEX: "Paid period does not exist for this booking",
    ErrorCode.NO_HOLIDAY_DATES: "No dates provided",
    ErrorCode.SAVE_FAILED: "The operation failed",
}

# Recovery suggestions for the operator
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.BOOKING_NOT_FOUND: "Check the booking ID or pick the booking from the list",
    ErrorCode.INVALID_PERIOD_INDEX: "Reload the payment plan and select periods again",
    ErrorCode.NO_HOLIDAY_DATES: "Submit at least one holiday date",
    ErrorCode.SAVE_FAILED: "Review the error details and submit again",
}


class ErrorResponse(BaseModel):
    """Standard error response body."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class BookingError(Exception):
    """Exception raised by booking operations."""

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse.from_code(self.code, self.details)
