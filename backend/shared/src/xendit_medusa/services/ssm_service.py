"""SSM Parameter Store access for Xendit secrets.

The Xendit secret key and webhook verification token can be kept as
SecureString parameters instead of plain environment variables. Values are
cached in-process after the first lookup.
"""

import logging
from functools import lru_cache
from typing import ClassVar

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

PARAMETER_PREFIX = "/xendit"


def parameter_name(environment: str, key: str) -> str:
    """Build the parameter path for a Xendit secret.

    Args:
        environment: Deployment environment (e.g. "dev", "prod")
        key: Secret name (e.g. "secret_key", "webhook_token")

    Returns:
        Path like /xendit/dev/secret_key
    """
    return f"{PARAMETER_PREFIX}/{environment}/{key}"


class SSMServiceError(Exception):
    """Raised when SSM parameter retrieval fails."""


class SSMService:
    """Retrieves decrypted parameters from AWS SSM Parameter Store.

    Usage:
        ssm = get_ssm_service()
        api_key = ssm.get_parameter(parameter_name("dev", "secret_key"))
    """

    _cache: ClassVar[dict[str, str]] = {}

    def __init__(self, region_name: str | None = None) -> None:
        self._client = boto3.client("ssm", region_name=region_name)

    def get_parameter(self, name: str, *, use_cache: bool = True) -> str:
        """Retrieve a parameter value.

        Args:
            name: Full parameter path
            use_cache: Whether to return a cached value if available

        Returns:
            The decrypted parameter value.

        Raises:
            SSMServiceError: If the parameter cannot be retrieved.
        """
        if use_cache and name in self._cache:
            logger.debug("SSM cache hit for %s", name)
            return self._cache[name]

        try:
            logger.info("Fetching SSM parameter: %s", name)
            response = self._client.get_parameter(Name=name, WithDecryption=True)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "ParameterNotFound":
                raise SSMServiceError(f"SSM parameter not found: {name}") from e
            if error_code == "AccessDeniedException":
                raise SSMServiceError(
                    f"Access denied to SSM parameter: {name}. Check IAM permissions for ssm:GetParameter."
                ) from e
            raise SSMServiceError(f"Failed to retrieve SSM parameter {name}: {e}") from e
        except BotoCoreError as e:
            raise SSMServiceError(f"Failed to retrieve SSM parameter {name}: {e}") from e

        value = response["Parameter"]["Value"]
        self._cache[name] = value
        return value

    def get_optional_parameter(self, name: str) -> str | None:
        """Retrieve a parameter, returning None when it does not exist."""
        try:
            return self.get_parameter(name)
        except SSMServiceError as e:
            if isinstance(e.__cause__, ClientError) and (
                e.__cause__.response.get("Error", {}).get("Code") == "ParameterNotFound"
            ):
                logger.debug("Optional SSM parameter not set: %s", name)
                return None
            raise

    @classmethod
    def clear_cache(cls) -> None:
        """Clear all cached parameters."""
        cls._cache.clear()
        logger.info("SSM parameter cache cleared")


@lru_cache(maxsize=1)
def get_ssm_service() -> SSMService:
    """Get the shared SSMService instance."""
    return SSMService()
