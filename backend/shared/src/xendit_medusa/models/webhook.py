"""Webhook models for Xendit callbacks."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import IntentStyle, PaymentAction


class WebhookEnvelope(BaseModel):
    """Identifying fields extracted from a validated webhook payload."""

    model_config = ConfigDict(frozen=True)

    style: IntentStyle = Field(..., description="Payload flavour (event or invoice status)")
    discriminator: str = Field(
        ...,
        description="Event name (direct) or invoice status (link)",
        examples=["payment.capture", "PAID"],
    )
    intent_id: str = Field(..., description="Payment request or invoice ID")
    reference_id: str | None = Field(
        default=None,
        description="reference_id (direct) or external_id (link)",
    )


class WebhookActionData(BaseModel):
    """Data passed to the host alongside a webhook action."""

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(..., description="Gateway intent ID")
    amount: float | None = None


class WebhookActionResult(BaseModel):
    """Action the host applies for a webhook delivery."""

    model_config = ConfigDict(frozen=True)

    action: PaymentAction
    data: WebhookActionData | None = None
