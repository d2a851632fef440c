"""Services for the Xendit payment provider."""

from .channels import CHANNELS, list_channels
from .settings import get_provider_options, load_provider_options
from .ssm_service import SSMService, SSMServiceError, get_ssm_service
from .status_mapper import is_paid, is_terminal, map_status
from .webhook_handler import (
    CALLBACK_TOKEN_HEADER,
    WebhookVerifier,
    get_webhook_action_and_data,
    parse_payload,
    validate_payload,
)
from .xendit_client import XenditClient, generate_reference_id
from .xendit_provider import XenditProviderService

__all__ = [
    "CALLBACK_TOKEN_HEADER",
    "CHANNELS",
    "SSMService",
    "SSMServiceError",
    "WebhookVerifier",
    "XenditClient",
    "XenditProviderService",
    "generate_reference_id",
    "get_provider_options",
    "get_ssm_service",
    "get_webhook_action_and_data",
    "is_paid",
    "is_terminal",
    "list_channels",
    "load_provider_options",
    "map_status",
    "parse_payload",
    "validate_payload",
]
