"""Logging for the payment plan service.

Every record carries the correlation id of the request that produced it,
so one booking edit can be followed from the API route down to the
DynamoDB write. The id lives in a ContextVar set by the API middleware;
records logged outside a request get ``NO_CORRELATION_ID``.

    logger = get_logger(__name__)
    log_booking_operation(logger, "create_booking", booking_id="BKG-1A2B3C4D5E6F")
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any

NO_CORRELATION_ID = "no-correlation-id"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_request_correlation_id: ContextVar[str | None] = ContextVar(
    "payplan_correlation_id", default=None
)


def generate_correlation_id() -> str:
    """New random correlation id."""
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation id to the current context.

    Args:
        correlation_id: Id from the caller, e.g. an ``X-Correlation-ID``
            header. A fresh one is generated when empty.

    Returns:
        The id now bound
    """
    bound = correlation_id or generate_correlation_id()
    _request_correlation_id.set(bound)
    return bound


def get_correlation_id() -> str | None:
    return _request_correlation_id.get()


def clear_correlation_id() -> None:
    _request_correlation_id.set(None)


def _stamp(record: logging.LogRecord) -> None:
    if not getattr(record, "correlation_id", None):
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID


class CorrelationIdFilter(logging.Filter):
    """Stamps ``correlation_id`` on each record; never drops one."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Prefixes each line with ``[correlation_id]``.

    Records from loggers that did not go through ``get_logger`` (boto3,
    uvicorn) are stamped here instead of by the filter.
    """

    def format(self, record: logging.LogRecord) -> str:
        _stamp(record)
        return f"[{record.correlation_id}] {super().format(record)}"


def configure_logging(level: int = logging.INFO) -> None:
    """Install a structured root handler, once.

    Args:
        level: Root log level
    """
    root = logging.getLogger()
    root.setLevel(level)
    if any(isinstance(h.formatter, StructuredFormatter) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter(DEFAULT_FORMAT))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Module logger with the correlation-id filter attached."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())
    return logger


def _format_context(prefix: str, context: dict[str, Any], skip: str) -> str:
    parts = [prefix]
    for key, value in context.items():
        if key != skip:
            parts.append(f"{key}={value}")
    return " | ".join(parts)


def log_booking_operation(
    logger: logging.Logger,
    operation: str,
    *,
    booking_id: str | None = None,
    property_count: int | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log a booking write with structured context.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "create_booking", "delete_booking")
        booking_id: Booking ID if available
        property_count: Number of properties written
        error: Error message if operation failed
        **extra: Additional context fields
    """
    context: dict[str, Any] = {"operation": operation}

    if booking_id:
        context["booking_id"] = booking_id
    if property_count is not None:
        context["property_count"] = property_count
    if error:
        context["error"] = error

    context.update(extra)

    message = _format_context(f"Booking operation: {operation}", context, "operation")

    if error:
        logger.error(message, extra=context)
    else:
        logger.info(message, extra=context)


def log_plan_calculation(
    logger: logging.Logger,
    booking_id: str,
    **extra: Any,
) -> None:
    """Log a payment plan calculation at DEBUG level.

    Args:
        logger: Logger instance
        booking_id: Booking the plan was built for
        **extra: Plan shape fields (periods, paid_periods, ...)
    """
    context: dict[str, Any] = {"plan_booking_id": booking_id, **extra}
    message = _format_context(
        f"Payment plan calculated: {booking_id}", context, "plan_booking_id"
    )
    logger.debug(message, extra=context)
