"""Payment channel model for the storefront channel catalogue."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import ChannelType


class PaymentChannelInfo(BaseModel):
    """A payment channel customers can pick at checkout."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., examples=["OVO", "BCA", "QRIS"])
    name: str
    type: ChannelType
    country: str = Field(..., examples=["ID"])
    currency: str = Field(..., examples=["IDR"])
    description: str
    is_activated: bool = True
    min_amount: float | None = None
    max_amount: float | None = None
