"""Storefront endpoint listing Xendit payment channels."""

from fastapi import APIRouter, Query

from xendit_api.models.channels import ChannelListResponse
from xendit_medusa.models.enums import ChannelType
from xendit_medusa.services.channels import list_channels

router = APIRouter(tags=["store"])


@router.get(
    "/store/xendit-channels",
    summary="List payment channels",
    description="Payment channels customers can choose at checkout, optionally filtered by type and country.",
    response_model=ChannelListResponse,
)
async def get_channels(
    type: ChannelType | None = Query(default=None, description="Channel type filter"),
    country: str | None = Query(default=None, min_length=2, max_length=2, description="ISO country code"),
) -> ChannelListResponse:
    """List activated payment channels."""
    channels = list_channels(type=type, country=country)
    return ChannelListResponse(channels=channels, count=len(channels))
