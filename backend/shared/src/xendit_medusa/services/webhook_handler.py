"""Webhook verification and dispatch for Xendit callbacks.

Kept separate from HTTP routing so the same logic serves the FastAPI
route, the provider facade and unit tests.

Two payload flavours are accepted:
- payment request events: {"event": "payment.capture", "data": {"payment_request_id": ...}}
- invoice callbacks: {"id": ..., "external_id": ..., "status": "PAID", ...}

Dispatch is a pure function of the payload, so redelivered events always
produce the same action.
"""

import hmac
import json
from typing import Any

from xendit_medusa.models.enums import IntentStyle, InvoiceStatus, PaymentAction
from xendit_medusa.models.errors import BadRequestError, UnauthorizedError
from xendit_medusa.models.webhook import (
    WebhookActionData,
    WebhookActionResult,
    WebhookEnvelope,
)
from xendit_medusa.utils.logging import get_logger, log_webhook_event

logger = get_logger(__name__)

CALLBACK_TOKEN_HEADER = "x-callback-token"

# Payment request events that mean the money was collected
CAPTURED_EVENTS = {"payment.capture", "payment.succeeded"}
FAILED_EVENTS = {"payment.failed"}

# Invoice statuses
PAID_INVOICE_STATUSES = {InvoiceStatus.PAID.value, InvoiceStatus.SETTLED.value}
EXPIRED_INVOICE_STATUSES = {InvoiceStatus.EXPIRED.value}


class WebhookVerifier:
    """Authenticates and validates inbound Xendit webhooks.

    Xendit sends the dashboard verification token in the x-callback-token
    header. When no token is configured every call is accepted and a
    warning is logged.
    """

    def __init__(self, webhook_token: str | None) -> None:
        self._webhook_token = webhook_token or None

    @property
    def is_configured(self) -> bool:
        return self._webhook_token is not None

    def authenticate(self, callback_token: str | None) -> None:
        """Check the x-callback-token header value.

        Args:
            callback_token: Header value, or None if absent.

        Raises:
            UnauthorizedError: Header missing or not equal to the configured token.
        """
        if self._webhook_token is None:
            logger.warning("Xendit webhook token not configured - signature verification skipped")
            return

        if not callback_token:
            logger.warning("Xendit webhook rejected: missing %s header", CALLBACK_TOKEN_HEADER)
            raise UnauthorizedError("Missing webhook verification token")

        if not hmac.compare_digest(callback_token.encode(), self._webhook_token.encode()):
            logger.warning(
                "Xendit webhook rejected: invalid signature (received: %s...)",
                callback_token[:10],
            )
            raise UnauthorizedError("Invalid webhook verification token")


def parse_payload(body: bytes) -> dict[str, Any]:
    """Parse a raw webhook body.

    Raises:
        BadRequestError: Body is not a JSON object.
    """
    try:
        payload = json.loads(body or b"")
    except (ValueError, UnicodeDecodeError) as e:
        raise BadRequestError("Webhook body is not valid JSON") from e
    if not isinstance(payload, dict):
        raise BadRequestError("Webhook body must be a JSON object")
    return payload


def _payment_request_id(data: dict[str, Any]) -> str | None:
    return data.get("payment_request_id") or data.get("id")


def extract_envelope(payload: dict[str, Any]) -> WebhookEnvelope | None:
    """Pull the identifying fields out of a payload, or None if incomplete."""
    event = payload.get("event")
    if event:
        data = payload.get("data")
        if not isinstance(data, dict):
            return None
        intent_id = _payment_request_id(data)
        if not intent_id:
            return None
        return WebhookEnvelope(
            style=IntentStyle.DIRECT,
            discriminator=str(event),
            intent_id=str(intent_id),
            reference_id=data.get("reference_id"),
        )

    status = payload.get("status")
    intent_id = payload.get("id")
    if not status or not intent_id:
        return None
    return WebhookEnvelope(
        style=IntentStyle.LINK,
        discriminator=str(status),
        intent_id=str(intent_id),
        reference_id=payload.get("external_id"),
    )


def validate_payload(payload: dict[str, Any]) -> WebhookEnvelope:
    """Require the event/status discriminator and the intent ID.

    Raises:
        BadRequestError: Discriminator or intent ID missing.
    """
    envelope = extract_envelope(payload)
    if envelope is None:
        logger.error("Xendit webhook rejected: invalid payload structure")
        raise BadRequestError("Invalid webhook payload structure")
    return envelope


def get_webhook_action_and_data(payload: dict[str, Any]) -> WebhookActionResult:
    """Map a webhook payload to the host action and data.

    Never raises; anything unrecognized maps to NOT_SUPPORTED.

    Args:
        payload: Parsed webhook body.

    Returns:
        WebhookActionResult with AUTHORIZED/FAILED plus session data, or NOT_SUPPORTED.
    """
    envelope = extract_envelope(payload)
    if envelope is None:
        logger.error("Invalid webhook payload structure")
        return WebhookActionResult(action=PaymentAction.NOT_SUPPORTED)

    if envelope.style == IntentStyle.DIRECT:
        result = _map_payment_request_event(envelope, payload.get("data") or {})
    else:
        result = _map_invoice_status(envelope, payload)

    log_webhook_event(
        logger,
        envelope.discriminator,
        envelope.intent_id,
        reference_id=envelope.reference_id,
        result=result.action.value,
    )
    return result


def _first_amount(*values: Any) -> float | None:
    for value in values:
        if value is not None:
            try:
                return float(value)
            except (TypeError, ValueError):
                continue
    return None


def _map_payment_request_event(envelope: WebhookEnvelope, data: dict[str, Any]) -> WebhookActionResult:
    event = envelope.discriminator.lower()
    amount = _first_amount(data.get("captured_amount"), data.get("amount"), data.get("request_amount"))

    if event in CAPTURED_EVENTS:
        action = PaymentAction.AUTHORIZED
    elif event in FAILED_EVENTS:
        action = PaymentAction.FAILED
    else:
        return WebhookActionResult(action=PaymentAction.NOT_SUPPORTED)

    return WebhookActionResult(
        action=action,
        data=WebhookActionData(session_id=envelope.intent_id, amount=amount),
    )


def _map_invoice_status(envelope: WebhookEnvelope, payload: dict[str, Any]) -> WebhookActionResult:
    status = envelope.discriminator.upper()

    if status in PAID_INVOICE_STATUSES:
        logger.info(
            "Invoice paid: %s (External ID: %s), Payment ID: %s",
            envelope.intent_id,
            envelope.reference_id,
            payload.get("payment_id"),
        )
        return WebhookActionResult(
            action=PaymentAction.AUTHORIZED,
            data=WebhookActionData(
                session_id=envelope.intent_id,
                amount=_first_amount(payload.get("paid_amount"), payload.get("amount")),
            ),
        )

    if status in EXPIRED_INVOICE_STATUSES:
        return WebhookActionResult(
            action=PaymentAction.FAILED,
            data=WebhookActionData(
                session_id=envelope.intent_id,
                amount=_first_amount(payload.get("amount")),
            ),
        )

    # PENDING is informational
    return WebhookActionResult(action=PaymentAction.NOT_SUPPORTED)
