"""Maps Xendit statuses onto host payment session statuses.

Payment requests (v3) and payment links (invoices) use different status
labels; both are covered by the same table.
"""

from xendit_medusa.models.enums import InvoiceStatus, PaymentRequestStatus, PaymentSessionStatus

STATUS_MAP: dict[str, PaymentSessionStatus] = {
    PaymentRequestStatus.SUCCEEDED.value: PaymentSessionStatus.AUTHORIZED,
    PaymentRequestStatus.REQUIRES_ACTION.value: PaymentSessionStatus.PENDING,
    PaymentRequestStatus.PENDING.value: PaymentSessionStatus.PENDING,
    PaymentRequestStatus.FAILED.value: PaymentSessionStatus.ERROR,
    PaymentRequestStatus.CANCELED.value: PaymentSessionStatus.CANCELED,
    PaymentRequestStatus.EXPIRED.value: PaymentSessionStatus.CANCELED,
    # PENDING and EXPIRED are shared with payment requests
    InvoiceStatus.PAID.value: PaymentSessionStatus.AUTHORIZED,
    InvoiceStatus.SETTLED.value: PaymentSessionStatus.AUTHORIZED,
}

PAID_STATUSES = frozenset(
    {PaymentRequestStatus.SUCCEEDED.value, InvoiceStatus.PAID.value, InvoiceStatus.SETTLED.value}
)
TERMINAL_STATUSES = PAID_STATUSES | {
    PaymentRequestStatus.FAILED.value,
    PaymentRequestStatus.CANCELED.value,
    PaymentRequestStatus.EXPIRED.value,
}


def _normalize(status: str | None) -> str:
    return (status or "").strip().upper()


def map_status(status: str | None) -> PaymentSessionStatus:
    """Translate a gateway status into a host session status.

    Unrecognized values map to PENDING; this never raises.

    Args:
        status: Raw gateway status (any case)

    Returns:
        The host PaymentSessionStatus
    """
    return STATUS_MAP.get(_normalize(status), PaymentSessionStatus.PENDING)


def is_paid(status: str | None) -> bool:
    """True if the status is the terminal success state."""
    return _normalize(status) in PAID_STATUSES


def is_terminal(status: str | None) -> bool:
    """True if the status can no longer change."""
    return _normalize(status) in TERMINAL_STATUSES
