"""Channel catalogue response models."""

from pydantic import BaseModel

from xendit_medusa.models.channel import PaymentChannelInfo


class ChannelListResponse(BaseModel):
    """Response for GET /store/xendit-channels."""

    channels: list[PaymentChannelInfo]
    count: int
