"""Admin simulation request/response models."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SimulatePaymentRequest(BaseModel):
    """Body for POST /admin/xendit/simulate.

    The intent ID may also be sent as invoice_id.
    """

    model_config = ConfigDict(populate_by_name=True)

    intent_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("intent_id", "invoice_id"),
        description="Payment request or invoice ID",
    )
    amount: float | None = Field(default=None, gt=0, description="Defaults to the full amount")


class SimulatePaymentResponse(BaseModel):
    """Result of a simulated payment."""

    success: bool = True
    message: str
    data: dict[str, Any]


class SimulationAvailability(BaseModel):
    """Response for GET /admin/xendit/simulate."""

    available: bool
    test_mode: bool
    intent_style: str
    message: str
