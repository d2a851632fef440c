"""Load Xendit provider options from the environment.

Plain settings come from environment variables. The two secrets fall back
to SSM Parameter Store (/xendit/<env>/secret_key and
/xendit/<env>/webhook_token) when their variables are unset.
"""

import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from xendit_medusa.models.config import DEFAULT_API_URL, DEFAULT_FRONTEND_URL, XenditProviderOptions
from xendit_medusa.models.errors import InvalidConfigurationError

from .ssm_service import SSMServiceError, get_ssm_service, parameter_name
from .xendit_provider import XenditProviderService

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in TRUE_VALUES


def load_provider_options(
    environ: Mapping[str, str] | None = None,
    *,
    environment: str | None = None,
) -> XenditProviderOptions:
    """Build provider options from environment variables.

    Args:
        environ: Variables to read; defaults to os.environ
        environment: Deployment environment for SSM paths; defaults to ENVIRONMENT or "dev"

    Returns:
        Validated provider options

    Raises:
        InvalidConfigurationError: Secret key missing or options invalid
    """
    env = os.environ if environ is None else environ
    environment = environment or env.get("ENVIRONMENT", "dev")

    try:
        api_key = env.get("XENDIT_SECRET_KEY") or get_ssm_service().get_parameter(
            parameter_name(environment, "secret_key")
        )
        webhook_token = env.get("XENDIT_WEBHOOK_TOKEN") or get_ssm_service().get_optional_parameter(
            parameter_name(environment, "webhook_token")
        )
    except SSMServiceError as e:
        logger.error("Failed to load Xendit secrets: %s", e)
        raise InvalidConfigurationError(f"Xendit secrets unavailable: {e}") from e

    raw: dict[str, Any] = {
        "api_key": api_key,
        "webhook_token": webhook_token,
        "api_url": env.get("XENDIT_API_URL") or DEFAULT_API_URL,
        "default_country": env.get("XENDIT_DEFAULT_COUNTRY", "ID"),
        "default_capture_method": (env.get("XENDIT_CAPTURE_METHOD") or "AUTOMATIC").upper(),
        "test_mode": _flag(env.get("XENDIT_TEST_MODE")),
        "intent_style": (env.get("XENDIT_INTENT_STYLE") or "link").lower(),
        "frontend_url": env.get("FRONTEND_URL") or DEFAULT_FRONTEND_URL,
        "admin_token": env.get("XENDIT_ADMIN_TOKEN") or None,
    }

    options = XenditProviderService.validate_options(raw)
    if options.test_mode:
        logger.warning("Xendit test mode enabled - payment simulation is available")
    logger.info(
        "Xendit provider configured (style: %s, country: %s, webhook token: %s)",
        options.intent_style.value,
        options.default_country,
        "set" if options.webhook_token else "not set",
    )
    return options


@lru_cache(maxsize=1)
def get_provider_options() -> XenditProviderOptions:
    """Get the process-wide provider options, loaded once."""
    return load_provider_options()
