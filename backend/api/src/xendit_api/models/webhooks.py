"""Webhook endpoint response models."""

from pydantic import BaseModel, Field


class WebhookAckResponse(BaseModel):
    """Acknowledgement sent to Xendit once a delivery is accepted.

    Processing continues after the response is sent.
    """

    received: bool = True
    event: str = Field(..., description="Event name or invoice status", examples=["PAID"])
    intent_id: str = Field(..., description="Payment request or invoice ID")
    timestamp: str = Field(..., description="ISO 8601 time the delivery was accepted")
