"""Wire models for the refund API.

Reference: https://docs.xendit.co/apidocs/en/refund
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RefundCreate(BaseModel):
    """Payload for POST /refunds.

    Direct payments are refunded by payment_request_id, payment links by
    invoice_id (and payment_id when the invoice was paid).
    """

    reference_id: str
    payment_request_id: str | None = None
    invoice_id: str | None = None
    payment_id: str | None = None
    currency: str
    amount: float = Field(..., gt=0)
    reason: str | None = None
    metadata: dict[str, Any] | None = None


class RefundResponse(BaseModel):
    """Refund object returned by the gateway."""

    model_config = ConfigDict(extra="allow")

    id: str
    reference_id: str | None = None
    payment_request_id: str | None = None
    payment_id: str | None = None
    invoice_id: str | None = None
    status: str
    currency: str | None = None
    amount: float
    reason: str | None = None
    failure_code: str | None = None
    failure_message: str | None = None
    metadata: dict[str, Any] | None = None
    created: str | None = None
    updated: str | None = None
