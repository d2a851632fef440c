"""HTTP client for the Xendit REST API.

Wraps httpx with Basic auth, idempotent reference IDs and error
categorization. The client never retries; rate limits are surfaced as
RateLimitedError carrying the Retry-After value.
"""

import base64
import logging
import secrets
import time
from typing import Any, NoReturn, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from xendit_medusa.models.config import XenditProviderOptions
from xendit_medusa.models.enums import IntentStyle
from xendit_medusa.models.errors import (
    InvalidRequestError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
    UpstreamUnavailableError,
    XenditProviderError,
)
from xendit_medusa.models.intent import PaymentIntent
from xendit_medusa.models.invoice import InvoiceCreate, InvoiceResponse
from xendit_medusa.models.payment_request import PaymentRequestCreate, PaymentRequestResponse
from xendit_medusa.models.refund import RefundCreate, RefundResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_TIMEOUT_SECONDS = 30.0
INVOICE_API_VERSION = "2022-07-31"

# Gateway error codes that indicate bad credentials
UNAUTHORIZED_ERROR_CODES = {
    "INVALID_API_KEY",
    "API_VALIDATION_ERROR",
    "REQUEST_FORBIDDEN_ERROR",
}


def generate_reference_id(prefix: str = "medusa") -> str:
    """Generate a unique reference ID for idempotent creation calls.

    Format is <prefix>_<epoch millis>_<random suffix>. The random suffix
    keeps IDs distinct for calls within the same millisecond.

    Args:
        prefix: ID prefix

    Returns:
        Reference ID like medusa_1718000000000_3f9a1c2b7d4e
    """
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(6)}"


def _parse_retry_after(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        seconds = int(float(value))
    except (ValueError, OverflowError):
        return None
    return seconds if seconds >= 0 else None


def _error_class_for(status_code: int, error_code: str) -> type[XenditProviderError]:
    """Map an HTTP status and gateway error code to an error category."""
    if status_code == 401 or error_code in UNAUTHORIZED_ERROR_CODES:
        return UnauthorizedError
    if status_code == 404:
        return NotFoundError
    if status_code == 400 or "VALIDATION" in error_code:
        return InvalidRequestError
    if status_code >= 500:
        return UpstreamUnavailableError
    return InvalidRequestError


class XenditClient:
    """Client for Xendit payment requests, invoices and refunds.

    Usage:
        client = XenditClient(options)
        invoice = client.create_invoice(InvoiceCreate(external_id=..., amount=10000))
        intent = client.retrieve_intent(invoice.id)
    """

    def __init__(
        self,
        options: XenditProviderOptions,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            options: Provider options (API key, base URL, integration style).
            transport: Optional httpx transport, used by tests.
            timeout: Per-request timeout in seconds.
        """
        self._options = options
        self._http = httpx.Client(
            base_url=options.api_url,
            headers=self._auth_headers(),
            timeout=timeout,
            transport=transport,
        )

    @property
    def style(self) -> IntentStyle:
        return self._options.intent_style

    def _auth_headers(self) -> dict[str, str]:
        """Basic auth with the API key as username and an empty password."""
        token = base64.b64encode(f"{self._options.api_key}:".encode()).decode()
        return {
            "Content-Type": "application/json",
            "Authorization": f"Basic {token}",
        }

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._http.close()

    # === Transport ===

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the parsed JSON body.

        Raises:
            XenditProviderError: Categorized by status code and gateway error code.
        """
        try:
            response = self._http.request(method, path, json=json, headers=headers)
        except httpx.TransportError as e:
            logger.error("Xendit request %s %s failed: %s", method, path, e)
            raise UpstreamUnavailableError(f"Xendit API unreachable: {e}") from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                logger.error(
                    "Xendit request %s %s returned a non-JSON body (HTTP %d)", method, path, response.status_code
                )
                raise UpstreamUnavailableError(
                    f"Xendit API returned a non-JSON body ({response.status_code})",
                    status_code=response.status_code,
                ) from e

        self._raise_for_response(response)

    @staticmethod
    def _parse(model: type[ModelT], data: Any) -> ModelT:
        """Validate a 2xx body against its response model."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error("Unexpected Xendit %s body: %s", model.__name__, e)
            raise UpstreamUnavailableError(
                f"Xendit API returned an unexpected {model.__name__} body",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def _raise_for_response(self, response: httpx.Response) -> NoReturn:
        """Convert a non-2xx gateway response into a provider error."""
        status_code = response.status_code

        if status_code == 429:
            retry_after = _parse_retry_after(response.headers.get("retry-after"))
            logger.warning(
                "Xendit API rate limit exceeded. Limit: %s, Remaining: %s, Reset in: %ss, Retry after: %ss",
                response.headers.get("rate-limit-limit"),
                response.headers.get("rate-limit-remaining"),
                response.headers.get("rate-limit-reset"),
                retry_after,
            )
            raise RateLimitedError(
                f"Xendit API rate limit exceeded. Please retry after {retry_after} seconds.",
                retry_after=retry_after,
                status_code=status_code,
                gateway_error_code="RATE_LIMIT_EXCEEDED",
            )

        try:
            error_data = response.json()
        except ValueError:
            error_data = None

        if not isinstance(error_data, dict):
            error_class = _error_class_for(status_code, "")
            raise error_class(
                f"Xendit API error: {response.reason_phrase} ({status_code})",
                status_code=status_code,
            )

        error_code = str(error_data.get("error_code") or "UNKNOWN_ERROR")
        errors = error_data.get("errors") or []
        if errors:
            message = ", ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
        else:
            message = error_data.get("message") or response.reason_phrase

        logger.error("Xendit API Error [%s]: %s (HTTP %d)", error_code, message, status_code)

        error_class = _error_class_for(status_code, error_code)
        raise error_class(
            f"Xendit API error [{error_code}]: {message}",
            status_code=status_code,
            gateway_error_code=error_code,
        )

    # === Payment requests (direct style) ===

    def create_payment_request(self, request: PaymentRequestCreate) -> PaymentRequestResponse:
        """Create a payment request.

        Args:
            request: Payment request payload with a unique reference_id.

        Returns:
            The created payment request.
        """
        logger.info("Creating Xendit payment request: %s", request.reference_id)
        data = self._request(
            "POST",
            "/v3/payment_requests",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        result = self._parse(PaymentRequestResponse, data)
        logger.info("Payment request created: %s (status: %s)", result.id, result.status)
        return result

    def get_payment_request(self, payment_request_id: str) -> PaymentRequestResponse:
        """Retrieve a payment request by ID."""
        logger.debug("Retrieving payment request: %s", payment_request_id)
        data = self._request("GET", f"/v3/payment_requests/{payment_request_id}")
        return self._parse(PaymentRequestResponse, data)

    # === Invoices (link style) ===

    def _invoice_headers(self) -> dict[str, str]:
        return {"x-api-version": INVOICE_API_VERSION}

    def create_invoice(self, request: InvoiceCreate) -> InvoiceResponse:
        """Create a payment link (invoice).

        Args:
            request: Invoice payload with a unique external_id.

        Returns:
            The created invoice including its invoice_url.
        """
        logger.info("Creating Xendit Payment Link (Invoice): %s", request.external_id)
        data = self._request(
            "POST",
            "/v2/invoices",
            json=request.model_dump(mode="json", exclude_none=True),
            headers=self._invoice_headers(),
        )
        result = self._parse(InvoiceResponse, data)
        logger.info(
            "Payment Link created: %s (status: %s, URL: %s)",
            result.id,
            result.status,
            result.invoice_url,
        )
        return result

    def get_invoice(self, invoice_id: str) -> InvoiceResponse:
        """Retrieve an invoice by ID."""
        logger.debug("Retrieving invoice: %s", invoice_id)
        data = self._request("GET", f"/v2/invoices/{invoice_id}", headers=self._invoice_headers())
        return self._parse(InvoiceResponse, data)

    def expire_invoice(self, invoice_id: str) -> InvoiceResponse:
        """Expire (cancel) an invoice."""
        logger.info("Expiring invoice: %s", invoice_id)
        data = self._request(
            "POST",
            f"/v2/invoices/{invoice_id}/expire!",
            headers=self._invoice_headers(),
        )
        result = self._parse(InvoiceResponse, data)
        logger.info("Invoice expired: %s (status: %s)", result.id, result.status)
        return result

    # === Refunds ===

    def create_refund(self, request: RefundCreate) -> RefundResponse:
        """Create a refund.

        Args:
            request: Refund payload with a unique reference_id.

        Returns:
            The created refund (usually PENDING).
        """
        logger.info("Creating refund: %s", request.reference_id)
        data = self._request(
            "POST",
            "/refunds",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        result = self._parse(RefundResponse, data)
        logger.info("Refund created: %s (status: %s)", result.id, result.status)
        return result

    # === Test mode ===

    def simulate_payment(self, intent_id: str, amount: float | None = None) -> dict[str, Any]:
        """Ask the gateway to mark an intent as paid (test keys only).

        Args:
            intent_id: Payment request or invoice ID.
            amount: Amount to simulate; the gateway uses the full amount when omitted.

        Returns:
            Raw gateway response.
        """
        body = {"amount": amount} if amount is not None else {}
        logger.info("Simulating payment for %s intent: %s", self.style.value, intent_id)
        if self.style == IntentStyle.DIRECT:
            return self._request("POST", f"/v3/payment_requests/{intent_id}/simulate", json=body)
        return self._request(
            "POST",
            f"/v2/invoices/{intent_id}/simulate_payment",
            json=body,
            headers=self._invoice_headers(),
        )

    # === Style dispatch ===

    def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        """Retrieve an intent using the configured integration style."""
        if self.style == IntentStyle.DIRECT:
            return PaymentIntent.from_payment_request(self.get_payment_request(intent_id))
        return PaymentIntent.from_invoice(self.get_invoice(intent_id))

    def expire_intent(self, intent_id: str) -> PaymentIntent:
        """Cancel an intent.

        Payment requests have no cancel endpoint and expire on their own, so
        for the direct style this is a plain retrieval.
        """
        if self.style == IntentStyle.DIRECT:
            return self.retrieve_intent(intent_id)
        return PaymentIntent.from_invoice(self.expire_invoice(intent_id))
