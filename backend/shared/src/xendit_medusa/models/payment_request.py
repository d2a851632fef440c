"""Wire models for the v3 payment request API.

Reference: https://docs.xendit.co/apidocs/create-payment-request
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .enums import CaptureMethod


class PaymentRequestCreate(BaseModel):
    """Payload for POST /v3/payment_requests."""

    reference_id: str = Field(..., description="Caller-generated unique reference")
    type: str = Field(default="PAY")
    country: str
    currency: str
    request_amount: float = Field(..., gt=0)
    capture_method: CaptureMethod = CaptureMethod.AUTOMATIC
    channel_code: str
    channel_properties: dict[str, Any] = Field(default_factory=dict)
    description: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class PaymentRequestAction(BaseModel):
    """Customer-facing action returned for channels that need one."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    descriptor: str | None = None
    value: str | None = None


class PaymentRequestResponse(BaseModel):
    """Payment request object returned by the gateway.

    The v3 API names the identifier payment_request_id; older responses use id.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., validation_alias=AliasChoices("payment_request_id", "id"))
    reference_id: str | None = None
    business_id: str | None = None
    type: str | None = None
    country: str | None = None
    currency: str
    request_amount: float
    captured_amount: float | None = None
    capture_method: str | None = None
    channel_code: str | None = None
    channel_properties: dict[str, Any] | None = None
    payment_method: dict[str, Any] | str | None = None
    actions: list[PaymentRequestAction] = Field(default_factory=list)
    status: str
    failure_code: str | None = None
    metadata: dict[str, Any] | None = None
    created: str | None = None
    updated: str | None = None
