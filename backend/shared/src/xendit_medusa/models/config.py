"""Provider options for the Xendit payment provider."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import CaptureMethod, IntentStyle

DEFAULT_API_URL = "https://api.xendit.co"
DEFAULT_FRONTEND_URL = "http://localhost:8000"


class XenditProviderOptions(BaseModel):
    """Options supplied once at startup and passed to the provider.

    Example:
        options = XenditProviderOptions(
            api_key="xnd_development_abc123",
            webhook_token="callback-token",
            default_country="ID",
            test_mode=True,
        )
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, description="Xendit secret API key")
    webhook_token: str | None = Field(
        default=None,
        description="Webhook verification token sent in x-callback-token",
    )
    api_url: str = Field(default=DEFAULT_API_URL, description="Gateway base URL")
    default_country: str = Field(
        default="ID",
        description="ISO 3166-1 alpha-2 country code used for payment requests",
        examples=["ID", "PH", "MY", "TH"],
    )
    default_capture_method: CaptureMethod = Field(default=CaptureMethod.AUTOMATIC)
    test_mode: bool = Field(
        default=False,
        description="Enables payment simulation. Never enable in production.",
    )
    intent_style: IntentStyle = Field(
        default=IntentStyle.LINK,
        description="Which gateway API is used to create payment intents",
    )
    frontend_url: str = Field(
        default=DEFAULT_FRONTEND_URL,
        description="Storefront base URL for default redirect URLs",
    )
    admin_token: str | None = Field(
        default=None,
        description="Bearer token required by admin endpoints when set",
    )

    @field_validator("api_url", "frontend_url")
    @classmethod
    def _strip_url(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @model_validator(mode="after")
    def _check_country(self) -> "XenditProviderOptions":
        if self.intent_style == IntentStyle.DIRECT and not self.default_country:
            raise ValueError(
                "default_country is required for payment requests. Provide an ISO 3166-1 "
                "alpha-2 country code (e.g., 'ID', 'PH', 'MY', 'TH')"
            )
        return self
