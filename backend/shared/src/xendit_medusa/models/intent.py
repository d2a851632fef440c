"""Normalized payment intent record.

A payment intent is either a v3 payment request (direct style) or a
payment link invoice (link style). Both are flattened into one model so the
provider can treat them alike.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import IntentStyle
from .invoice import InvoiceResponse
from .payment_request import PaymentRequestAction, PaymentRequestResponse

# Action types that carry a customer-facing URL
REDIRECT_ACTION_TYPES = {"REDIRECT_CUSTOMER"}


class PaymentIntent(BaseModel):
    """Gateway-side payment intent snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Gateway-issued intent ID")
    reference_id: str | None = Field(
        default=None,
        description="Caller-generated reference (reference_id or external_id)",
    )
    style: IntentStyle
    status: str = Field(..., description="Raw gateway status")
    amount: float
    currency: str | None = None
    country: str | None = None
    capture_method: str | None = None
    channel_code: str | None = None
    payment_methods: list[str] | None = None
    paid_amount: float | None = Field(
        default=None, description="Captured (direct) or paid (link) amount"
    )
    payment_id: str | None = None
    payment_method: Any = None
    payment_channel: str | None = None
    redirect_url: str | None = Field(
        default=None, description="Invoice URL or redirect action URL"
    )
    actions: list[PaymentRequestAction] = Field(default_factory=list)
    description: str | None = None
    expiry_date: str | None = None
    created: str | None = None
    updated: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payment_request(cls, response: PaymentRequestResponse) -> "PaymentIntent":
        """Build an intent from a v3 payment request response."""
        redirect_url = next(
            (
                action.value
                for action in response.actions
                if (action.type or "").upper() in REDIRECT_ACTION_TYPES
                or (action.descriptor or "").upper() in {"WEB_URL", "DEEPLINK_URL"}
            ),
            None,
        )
        return cls(
            id=response.id,
            reference_id=response.reference_id,
            style=IntentStyle.DIRECT,
            status=response.status,
            amount=response.request_amount,
            currency=response.currency,
            country=response.country,
            capture_method=response.capture_method,
            channel_code=response.channel_code,
            paid_amount=response.captured_amount,
            payment_method=response.payment_method,
            redirect_url=redirect_url,
            actions=response.actions,
            created=response.created,
            updated=response.updated,
            metadata=response.metadata or {},
        )

    @classmethod
    def from_invoice(cls, response: InvoiceResponse) -> "PaymentIntent":
        """Build an intent from a payment link invoice response."""
        return cls(
            id=response.id,
            reference_id=response.external_id,
            style=IntentStyle.LINK,
            status=response.status,
            amount=response.amount,
            currency=response.currency,
            paid_amount=response.paid_amount,
            payment_id=response.payment_id,
            payment_method=response.payment_method,
            payment_channel=response.payment_channel,
            redirect_url=response.invoice_url,
            description=response.description,
            expiry_date=response.expiry_date,
            created=response.created,
            updated=response.updated,
            metadata=response.metadata or {},
        )

    def to_session_data(self) -> dict[str, Any]:
        """Data stored on the host payment session.

        Keys mirror the gateway field names so the storefront can read
        invoice_url or actions directly.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "status": self.status,
            "amount": self.amount,
            "currency": self.currency,
            "created": self.created,
            "metadata": self.metadata,
        }
        if self.style == IntentStyle.DIRECT:
            data.update(
                {
                    "reference_id": self.reference_id,
                    "captured_amount": self.paid_amount,
                    "channel_code": self.channel_code,
                    "payment_method": self.payment_method,
                    "actions": [action.model_dump(exclude_none=True) for action in self.actions],
                    "redirect_url": self.redirect_url,
                }
            )
        else:
            data.update(
                {
                    "external_id": self.reference_id,
                    "invoice_url": self.redirect_url,
                    "expiry_date": self.expiry_date,
                    "description": self.description,
                }
            )
        return data
