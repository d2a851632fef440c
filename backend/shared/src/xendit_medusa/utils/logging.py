"""Structured logging utilities with correlation ID support.

Provides:
- Correlation ID context for tracing one webhook or API call end to end
- A formatter that prefixes every record with its correlation ID
- Helpers for logging gateway operations and webhook deliveries

Usage:
    from xendit_medusa.utils.logging import get_logger, log_payment_operation

    logger = get_logger(__name__)
    log_payment_operation(logger, "initiate_payment", intent_id="inv_123", amount=10000)
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any

# Correlation ID for the current request; async-safe
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

NO_CORRELATION_ID = "no-correlation-id"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def generate_correlation_id() -> str:
    """Generate a new UUID-based correlation ID."""
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current context.

    Args:
        correlation_id: Existing ID (e.g. from X-Correlation-ID). Generated if None.

    Returns:
        The correlation ID that was set
    """
    cid = correlation_id or generate_correlation_id()
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    """Get the current correlation ID, if any."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID context."""
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds correlation_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter that prefixes records with their correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return f"[{record.correlation_id}] {super().format(record)}"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Install the structured formatter on the root logger.

    Safe to call more than once; an existing structured handler is reused.

    Args:
        level: Root log level
    """
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if isinstance(handler.formatter, StructuredFormatter):
            return
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with correlation ID support.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())
    return logger


def log_payment_operation(
    logger: logging.Logger,
    operation: str,
    *,
    intent_id: str | None = None,
    reference_id: str | None = None,
    amount: float | None = None,
    currency: str | None = None,
    status: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log a provider operation with structured context.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "initiate_payment", "refund_payment")
        intent_id: Gateway payment request or invoice ID
        reference_id: Caller-generated reference / external ID
        amount: Amount involved
        currency: ISO currency code
        status: Gateway status after the operation
        error: Error message if the operation failed
        **extra: Additional context fields
    """
    context: dict[str, Any] = {"operation": operation}

    if intent_id:
        context["intent_id"] = intent_id
    if reference_id:
        context["reference_id"] = reference_id
    if amount is not None:
        context["amount"] = amount
    if currency:
        context["currency"] = currency
    if status:
        context["status"] = status
    if error:
        context["error"] = error

    context.update(extra)

    msg_parts = [f"Payment operation: {operation}"]
    msg_parts.extend(f"{key}={value}" for key, value in context.items() if key != "operation")
    message = " | ".join(msg_parts)

    if error:
        logger.error(message, extra=context)
    else:
        logger.info(message, extra=context)


def log_webhook_event(
    logger: logging.Logger,
    discriminator: str | None,
    intent_id: str | None,
    *,
    reference_id: str | None = None,
    result: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log a webhook delivery with structured context.

    Args:
        logger: Logger instance
        discriminator: Event name or invoice status (e.g., "payment.capture", "PAID")
        intent_id: Gateway intent ID from the payload
        reference_id: reference_id / external_id from the payload
        result: Outcome (received, accepted, rejected, authorized, failed, not_supported, error)
        error: Error message if handling failed
        **extra: Additional context fields
    """
    context: dict[str, Any] = {
        "webhook_event": discriminator or "unknown",
        "intent_id": intent_id or "N/A",
    }

    if reference_id:
        context["reference_id"] = reference_id
    if result:
        context["result"] = result
    if error:
        context["error"] = error

    context.update(extra)

    msg_parts = [f"Xendit webhook: {context['webhook_event']} ({context['intent_id']})"]
    if result:
        msg_parts.append(f"result={result}")
    if reference_id:
        msg_parts.append(f"reference={reference_id}")
    if error:
        msg_parts.append(f"error={error}")

    message = " | ".join(msg_parts)

    if result == "error":
        logger.error(message, extra=context)
    elif result in ("rejected", "not_supported"):
        logger.warning(message, extra=context)
    else:
        logger.info(message, extra=context)
