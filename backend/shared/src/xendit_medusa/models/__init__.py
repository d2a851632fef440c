"""Pydantic models for the Xendit payment provider."""

from .channel import PaymentChannelInfo
from .config import DEFAULT_API_URL, DEFAULT_FRONTEND_URL, XenditProviderOptions
from .enums import (
    CaptureMethod,
    ChannelType,
    IntentStyle,
    InvoiceStatus,
    PaymentAction,
    PaymentRequestStatus,
    PaymentSessionStatus,
)
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    RETRYABLE_ERRORS,
    BadRequestError,
    ErrorCode,
    ErrorResponse,
    InvalidConfigurationError,
    InvalidRequestError,
    NotFoundError,
    NotReadyError,
    RateLimitedError,
    TestModeDisabledError,
    UnauthorizedError,
    UpstreamUnavailableError,
    XenditProviderError,
    is_retryable,
)
from .intent import PaymentIntent
from .invoice import (
    CustomerNotificationPreference,
    InvoiceAddress,
    InvoiceCreate,
    InvoiceCustomer,
    InvoiceItem,
    InvoiceResponse,
)
from .payment_request import (
    PaymentRequestAction,
    PaymentRequestCreate,
    PaymentRequestResponse,
)
from .provider import (
    CustomerInfo,
    InitiatePaymentInput,
    LineItem,
    PaymentDataOutput,
    PaymentProvider,
    PaymentSessionOutput,
    PaymentStatusOutput,
    RefundPaymentInput,
)
from .refund import RefundCreate, RefundResponse
from .webhook import WebhookActionData, WebhookActionResult, WebhookEnvelope

__all__ = [
    # Enums
    "CaptureMethod",
    "ChannelType",
    "IntentStyle",
    "InvoiceStatus",
    "PaymentAction",
    "PaymentRequestStatus",
    "PaymentSessionStatus",
    # Config
    "DEFAULT_API_URL",
    "DEFAULT_FRONTEND_URL",
    "XenditProviderOptions",
    # Gateway wire models
    "CustomerNotificationPreference",
    "InvoiceAddress",
    "InvoiceCreate",
    "InvoiceCustomer",
    "InvoiceItem",
    "InvoiceResponse",
    "PaymentRequestAction",
    "PaymentRequestCreate",
    "PaymentRequestResponse",
    "RefundCreate",
    "RefundResponse",
    # Intent
    "PaymentIntent",
    # Provider contract
    "CustomerInfo",
    "InitiatePaymentInput",
    "LineItem",
    "PaymentDataOutput",
    "PaymentProvider",
    "PaymentSessionOutput",
    "PaymentStatusOutput",
    "RefundPaymentInput",
    # Webhooks
    "WebhookActionData",
    "WebhookActionResult",
    "WebhookEnvelope",
    # Channels
    "PaymentChannelInfo",
    # Errors
    "BadRequestError",
    "ErrorCode",
    "ErrorResponse",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "InvalidConfigurationError",
    "InvalidRequestError",
    "NotFoundError",
    "NotReadyError",
    "RateLimitedError",
    "RETRYABLE_ERRORS",
    "TestModeDisabledError",
    "UnauthorizedError",
    "UpstreamUnavailableError",
    "XenditProviderError",
    "is_retryable",
]
