"""FastAPI dependency providers for the Xendit services.

Services are built lazily from the process-wide provider options and
cached with @lru_cache, so one XenditClient connection pool is shared by
all requests.

Usage in routes:
    from xendit_api.dependencies import get_provider_service

    @router.get("/payments/{intent_id}")
    async def get_payment(
        provider: XenditProviderService = Depends(get_provider_service),
    ):
        ...

Service Dependency Graph:
    XenditProviderOptions (get_provider_options)
        ├── XenditProviderService (owns XenditClient)
        └── WebhookVerifier

Testing:
    Override get_provider_options via app.dependency_overrides, or call
    reset_services() to clear cached instances between tests.
"""

import hmac
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from xendit_medusa.models.config import XenditProviderOptions
from xendit_medusa.models.errors import UnauthorizedError
from xendit_medusa.services.settings import get_provider_options as load_cached_options
from xendit_medusa.services.ssm_service import SSMService
from xendit_medusa.services.webhook_handler import WebhookVerifier
from xendit_medusa.services.xendit_provider import XenditProviderService


def get_provider_options() -> XenditProviderOptions:
    """Get the provider options loaded from the environment."""
    return load_cached_options()


@lru_cache
def _provider_for(options: XenditProviderOptions) -> XenditProviderService:
    return XenditProviderService(options)


def get_provider_service(
    options: Annotated[XenditProviderOptions, Depends(get_provider_options)],
) -> XenditProviderService:
    """Get the cached XenditProviderService for the active options."""
    return _provider_for(options)


def get_webhook_verifier(
    options: Annotated[XenditProviderOptions, Depends(get_provider_options)],
) -> WebhookVerifier:
    """Get a WebhookVerifier for the configured callback token."""
    return WebhookVerifier(options.webhook_token)


def require_admin(
    options: Annotated[XenditProviderOptions, Depends(get_provider_options)],
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """Guard admin routes with the configured bearer token.

    No check is made when XENDIT_ADMIN_TOKEN is unset.

    Raises:
        UnauthorizedError: Bearer token missing or wrong.
    """
    if not options.admin_token:
        return

    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError("Admin bearer token required")
    if not hmac.compare_digest(token.strip().encode(), options.admin_token.encode()):
        raise UnauthorizedError("Invalid admin bearer token")


def reset_services() -> None:
    """Clear all cached service instances."""
    _provider_for.cache_clear()
    load_cached_options.cache_clear()
    SSMService.clear_cache()

