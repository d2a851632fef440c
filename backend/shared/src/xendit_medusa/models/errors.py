"""Standard error codes for the Xendit payment provider.

Every failure surfaced to the commerce host or to an HTTP caller is one of
these codes. Gateway responses are categorized into them by the client and
the API layer maps them to HTTP status codes.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Error taxonomy for provider operations."""

    INVALID_REQUEST = "ERR_XENDIT_001"
    UNAUTHORIZED = "ERR_XENDIT_002"
    NOT_FOUND = "ERR_XENDIT_003"
    RATE_LIMITED = "ERR_XENDIT_004"
    UPSTREAM_UNAVAILABLE = "ERR_XENDIT_005"
    NOT_READY = "ERR_XENDIT_006"
    BAD_REQUEST = "ERR_XENDIT_007"
    TEST_MODE_DISABLED = "ERR_XENDIT_008"
    INVALID_CONFIGURATION = "ERR_XENDIT_009"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_REQUEST: "The payment request was rejected",
    ErrorCode.UNAUTHORIZED: "Authentication with the payment gateway failed",
    ErrorCode.NOT_FOUND: "Payment not found",
    ErrorCode.RATE_LIMITED: "Payment gateway rate limit exceeded",
    ErrorCode.UPSTREAM_UNAVAILABLE: "Payment gateway is unavailable",
    ErrorCode.NOT_READY: "Payment is not ready for capture",
    ErrorCode.BAD_REQUEST: "Invalid webhook payload",
    ErrorCode.TEST_MODE_DISABLED: "Payment simulation is only available in test mode",
    ErrorCode.INVALID_CONFIGURATION: "Xendit provider is not configured correctly",
}

# Recovery suggestions for callers
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.INVALID_REQUEST: "Check the payment amount, currency and channel",
    ErrorCode.UNAUTHORIZED: "Verify the Xendit API key or webhook token",
    ErrorCode.NOT_FOUND: "Verify the payment intent ID",
    ErrorCode.RATE_LIMITED: "Retry after the period given in Retry-After",
    ErrorCode.UPSTREAM_UNAVAILABLE: "Try again later",
    ErrorCode.NOT_READY: "Wait for the payment to be completed before capturing",
    ErrorCode.BAD_REQUEST: "Send a JSON payload with a status or event and an ID",
    ErrorCode.TEST_MODE_DISABLED: "Set XENDIT_TEST_MODE=true in a non-production environment",
    ErrorCode.INVALID_CONFIGURATION: "Check the Xendit provider options",
}

# Error codes that may succeed when the caller retries later
RETRYABLE_ERRORS: set[ErrorCode] = {
    ErrorCode.RATE_LIMITED,
    ErrorCode.UPSTREAM_UNAVAILABLE,
}


class ErrorResponse(BaseModel):
    """Standard JSON error body returned by the API."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, Any]] = None


class XenditProviderError(Exception):
    """Base exception for all provider failures.

    Subclasses fix the error code; the message defaults to the standard
    message for that code.
    """

    code: ErrorCode = ErrorCode.INVALID_REQUEST

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        gateway_error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message or ERROR_MESSAGES[self.code]
        self.recovery = ERROR_RECOVERY[self.code]
        self.status_code = status_code
        self.gateway_error_code = gateway_error_code
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to the API error body."""
        return ErrorResponse(
            error_code=self.code,
            message=self.message,
            recovery=self.recovery,
            details=self.details,
        )

    def with_context(self, context: str) -> "XenditProviderError":
        """Return a copy of this error whose message is prefixed with context.

        The category (class) and gateway metadata are preserved.
        """
        wrapped = self.__class__.__new__(self.__class__)
        wrapped.__dict__.update(self.__dict__)
        wrapped.message = f"{context}: {self.message}"
        Exception.__init__(wrapped, wrapped.message)
        return wrapped


class InvalidRequestError(XenditProviderError):
    """Bad input or an unclassified gateway 4xx response."""

    code = ErrorCode.INVALID_REQUEST


class UnauthorizedError(XenditProviderError):
    """Bad API credentials or a failed webhook token check."""

    code = ErrorCode.UNAUTHORIZED


class NotFoundError(XenditProviderError):
    """Unknown payment intent ID."""

    code = ErrorCode.NOT_FOUND


class RateLimitedError(XenditProviderError):
    """HTTP 429 from the gateway."""

    code = ErrorCode.RATE_LIMITED

    def __init__(self, message: Optional[str] = None, *, retry_after: Optional[int] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class UpstreamUnavailableError(XenditProviderError):
    """Gateway 5xx or transport failure."""

    code = ErrorCode.UPSTREAM_UNAVAILABLE


class NotReadyError(XenditProviderError):
    """Capture attempted before the intent reached its paid state."""

    code = ErrorCode.NOT_READY

    def __init__(self, message: Optional[str] = None, *, observed_status: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.observed_status = observed_status


class BadRequestError(XenditProviderError):
    """Malformed webhook payload."""

    code = ErrorCode.BAD_REQUEST


class TestModeDisabledError(XenditProviderError):
    """Simulation requested while test mode is off."""

    __test__ = False  # keep pytest from collecting this class
    code = ErrorCode.TEST_MODE_DISABLED


class InvalidConfigurationError(XenditProviderError):
    """Provider options are missing or invalid."""

    code = ErrorCode.INVALID_CONFIGURATION


def is_retryable(code: Optional[ErrorCode]) -> bool:
    """Check if an error code is transient.

    Args:
        code: The error code.

    Returns:
        True if the operation may succeed when retried later.
    """
    return code in RETRYABLE_ERRORS if code else False
