"""Enumeration types for the Xendit payment provider."""

from enum import Enum


class PaymentSessionStatus(str, Enum):
    """Status of a payment session as seen by the commerce host."""

    AUTHORIZED = "authorized"
    CAPTURED = "captured"
    PENDING = "pending"
    REQUIRES_MORE = "requires_more"
    ERROR = "error"
    CANCELED = "canceled"


class PaymentAction(str, Enum):
    """Action the host should take after a webhook delivery."""

    AUTHORIZED = "authorized"
    CAPTURED = "captured"
    FAILED = "failed"
    NOT_SUPPORTED = "not_supported"


class IntentStyle(str, Enum):
    """Gateway integration style.

    DIRECT uses the payment request API (v3), LINK uses the
    payment link / invoice API (v2).
    """

    DIRECT = "direct"
    LINK = "link"


class CaptureMethod(str, Enum):
    """Capture method for direct payment requests."""

    AUTOMATIC = "AUTOMATIC"
    MANUAL = "MANUAL"


class PaymentRequestStatus(str, Enum):
    """Status of a v3 payment request."""

    REQUIRES_ACTION = "REQUIRES_ACTION"
    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELED = "CANCELED"
    EXPIRED = "EXPIRED"


class InvoiceStatus(str, Enum):
    """Status of a payment link (invoice)."""

    PENDING = "PENDING"
    PAID = "PAID"
    SETTLED = "SETTLED"
    EXPIRED = "EXPIRED"


class ChannelType(str, Enum):
    """Payment channel families offered in the storefront."""

    EWALLET = "ewallet"
    VIRTUAL_ACCOUNT = "virtual_account"
    QR_CODE = "qr_code"
    CARD = "card"
    RETAIL = "retail"
