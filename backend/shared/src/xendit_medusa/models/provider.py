"""Host-facing payment provider contract.

The commerce host talks to payment providers only through the
PaymentProvider protocol below. Inputs and outputs are plain pydantic
models so any gateway implementation can satisfy it by composition.
"""

from typing import Any, Protocol

from pydantic import BaseModel, Field

from .enums import PaymentSessionStatus
from .webhook import WebhookActionResult


class CustomerInfo(BaseModel):
    """Customer details from the host checkout context."""

    id: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None


class LineItem(BaseModel):
    """Cart line item forwarded to payment links."""

    name: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    category: str | None = None


class InitiatePaymentInput(BaseModel):
    """Input for initiating (or re-initiating) a payment."""

    amount: float = Field(..., gt=0, description="Amount in the currency's major unit")
    currency_code: str = Field(..., min_length=3, max_length=3, examples=["IDR"])
    country: str | None = Field(default=None, description="Overrides default_country")
    channel_code: str | None = Field(default=None, examples=["OVO", "DANA"])
    channel_properties: dict[str, Any] = Field(default_factory=dict)
    payment_methods: list[str] | None = Field(
        default=None, description="Restricts payment link methods"
    )
    success_redirect_url: str | None = None
    failure_redirect_url: str | None = None
    cancel_redirect_url: str | None = None
    customer: CustomerInfo | None = None
    session_id: str | None = None
    items: list[LineItem] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class RefundPaymentInput(BaseModel):
    """Input for refunding a payment."""

    intent_id: str
    amount: float = Field(..., gt=0)
    currency: str | None = None
    reason: str | None = None
    payment_id: str | None = Field(
        default=None, description="Invoice payment ID, when known"
    )
    metadata: dict[str, Any] | None = None


class PaymentSessionOutput(BaseModel):
    """Output of initiate/update: the new session ID and its data."""

    id: str
    data: dict[str, Any]


class PaymentStatusOutput(BaseModel):
    """Output of status lookups."""

    status: PaymentSessionStatus
    data: dict[str, Any] = Field(default_factory=dict)


class PaymentDataOutput(BaseModel):
    """Output of operations that only return session data."""

    data: dict[str, Any]


class PaymentProvider(Protocol):
    """Capability interface every payment provider satisfies."""

    identifier: str

    def initiate_payment(self, payment: InitiatePaymentInput) -> PaymentSessionOutput:
        """Create a payment intent at the gateway."""
        ...

    def get_payment_status(self, intent_id: str) -> PaymentStatusOutput:
        """Return the host status; never raises."""
        ...

    def authorize_payment(self, intent_id: str) -> PaymentStatusOutput:
        """Confirm the session reached an authorizable state."""
        ...

    def capture_payment(self, intent_id: str) -> PaymentDataOutput:
        """Capture a paid intent."""
        ...

    def refund_payment(self, refund: RefundPaymentInput) -> PaymentDataOutput:
        """Refund part or all of a paid intent."""
        ...

    def cancel_payment(self, intent_id: str) -> PaymentDataOutput:
        """Cancel an intent."""
        ...

    def retrieve_payment(self, intent_id: str) -> PaymentDataOutput:
        """Read-only snapshot of an intent."""
        ...

    def update_payment(self, intent_id: str, payment: InitiatePaymentInput) -> PaymentSessionOutput:
        """Replace an intent; the returned ID may differ."""
        ...

    def delete_payment(self, intent_id: str) -> PaymentDataOutput:
        """Delete an intent."""
        ...

    def get_webhook_action_and_data(self, payload: dict[str, Any]) -> WebhookActionResult:
        """Map a webhook payload to a host action."""
        ...
