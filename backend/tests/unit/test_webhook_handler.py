"""Unit tests for webhook verification and dispatch.

Test categories:
- Callback token verification
- Payload parsing and validation
- Payment request event mapping
- Invoice status mapping
"""

import logging

import pytest

from xendit_medusa.models.enums import IntentStyle, PaymentAction
from xendit_medusa.models.errors import BadRequestError, UnauthorizedError
from xendit_medusa.services.webhook_handler import (
    WebhookVerifier,
    get_webhook_action_and_data,
    parse_payload,
    validate_payload,
)

# === Test Configuration ===

TEST_TOKEN = "callback_token_abcdef123456"


# === Payload Helpers ===


def _payment_event(event: str = "payment.capture", **data) -> dict:
    return {
        "event": event,
        "business_id": "biz_123",
        "created": "2026-10-19T00:00:00.000Z",
        "data": {
            "payment_request_id": "pr-000001",
            "reference_id": "medusa_1_abc",
            "status": "SUCCEEDED",
            "request_amount": 10000,
            "captured_amount": 10000,
            **data,
        },
    }


def _invoice_callback(status: str = "PAID", **fields) -> dict:
    return {
        "id": "inv_000001",
        "external_id": "medusa_1_abc",
        "status": status,
        "amount": 10000,
        "paid_amount": 10000,
        "payment_id": "pay_123",
        **fields,
    }


# === Verification ===


class TestWebhookVerifier:
    """x-callback-token verification."""

    def test_matching_token_accepted(self):
        WebhookVerifier(TEST_TOKEN).authenticate(TEST_TOKEN)

    def test_mismatched_token_rejected(self):
        with pytest.raises(UnauthorizedError):
            WebhookVerifier(TEST_TOKEN).authenticate("wrong-token")

    def test_missing_token_rejected(self):
        with pytest.raises(UnauthorizedError):
            WebhookVerifier(TEST_TOKEN).authenticate(None)

    def test_rejected_token_logged_truncated(self, caplog):
        with caplog.at_level(logging.WARNING), pytest.raises(UnauthorizedError):
            WebhookVerifier(TEST_TOKEN).authenticate("abcdefghijklmnopqrstuvwxyz")

        assert "abcdefghij..." in caplog.text
        assert "abcdefghijk" not in caplog.text

    def test_no_configured_token_accepts_with_warning(self, caplog):
        verifier = WebhookVerifier(None)

        with caplog.at_level(logging.WARNING):
            verifier.authenticate(None)

        assert not verifier.is_configured
        assert "verification skipped" in caplog.text

    def test_empty_configured_token_treated_as_unset(self):
        assert not WebhookVerifier("").is_configured


# === Parsing and validation ===


class TestParsePayload:
    def test_parses_json_object(self):
        assert parse_payload(b'{"status": "PAID", "id": "inv_1"}') == {"status": "PAID", "id": "inv_1"}

    @pytest.mark.parametrize("body", [b"not json", b"", b"[1, 2]", b'"PAID"'])
    def test_rejects_non_object(self, body):
        with pytest.raises(BadRequestError):
            parse_payload(body)


class TestValidatePayload:
    def test_payment_event_envelope(self):
        envelope = validate_payload(_payment_event())

        assert envelope.style == IntentStyle.DIRECT
        assert envelope.discriminator == "payment.capture"
        assert envelope.intent_id == "pr-000001"
        assert envelope.reference_id == "medusa_1_abc"

    def test_payment_event_falls_back_to_data_id(self):
        payload = _payment_event()
        del payload["data"]["payment_request_id"]
        payload["data"]["id"] = "pr-legacy"

        assert validate_payload(payload).intent_id == "pr-legacy"

    def test_invoice_envelope(self):
        envelope = validate_payload(_invoice_callback())

        assert envelope.style == IntentStyle.LINK
        assert envelope.discriminator == "PAID"
        assert envelope.intent_id == "inv_000001"
        assert envelope.reference_id == "medusa_1_abc"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"id": "inv_1"},
            {"status": "PAID"},
            {"event": "payment.capture"},
            {"event": "payment.capture", "data": {}},
            {"event": "payment.capture", "data": "pr-1"},
        ],
    )
    def test_missing_discriminator_or_id_rejected(self, payload):
        with pytest.raises(BadRequestError):
            validate_payload(payload)


# === Dispatch ===


class TestPaymentRequestEvents:
    """Direct-style event mapping."""

    @pytest.mark.parametrize("event", ["payment.capture", "payment.succeeded"])
    def test_captured_events_authorize(self, event):
        result = get_webhook_action_and_data(_payment_event(event))

        assert result.action == PaymentAction.AUTHORIZED
        assert result.data.session_id == "pr-000001"
        assert result.data.amount == 10000

    def test_amount_falls_back_to_amount_field(self):
        payload = _payment_event(captured_amount=None, amount=7500)

        result = get_webhook_action_and_data(payload)

        assert result.data.amount == 7500

    def test_failed_event(self):
        result = get_webhook_action_and_data(_payment_event("payment.failed", status="FAILED"))

        assert result.action == PaymentAction.FAILED
        assert result.data.session_id == "pr-000001"

    def test_other_events_not_supported(self):
        result = get_webhook_action_and_data(_payment_event("payment.awaiting_capture"))

        assert result.action == PaymentAction.NOT_SUPPORTED
        assert result.data is None


class TestInvoiceCallbacks:
    """Link-style status mapping."""

    @pytest.mark.parametrize("status", ["PAID", "SETTLED"])
    def test_paid_authorizes_with_paid_amount(self, status):
        result = get_webhook_action_and_data(_invoice_callback(status, paid_amount=9000))

        assert result.action == PaymentAction.AUTHORIZED
        assert result.data.session_id == "inv_000001"
        assert result.data.amount == 9000

    def test_paid_without_paid_amount_uses_amount(self):
        result = get_webhook_action_and_data(_invoice_callback(paid_amount=None))

        assert result.data.amount == 10000

    def test_expired_fails(self):
        result = get_webhook_action_and_data(_invoice_callback("EXPIRED", paid_amount=None))

        assert result.action == PaymentAction.FAILED
        assert result.data.amount == 10000

    def test_pending_not_supported(self):
        assert get_webhook_action_and_data(_invoice_callback("PENDING")).action == PaymentAction.NOT_SUPPORTED

    def test_invalid_structure_not_supported(self):
        """Dispatch never raises."""
        assert get_webhook_action_and_data({"foo": "bar"}).action == PaymentAction.NOT_SUPPORTED

    def test_dispatch_is_repeatable(self):
        payload = _invoice_callback()

        assert get_webhook_action_and_data(payload) == get_webhook_action_and_data(payload)
