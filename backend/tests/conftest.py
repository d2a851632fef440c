"""Pytest configuration and fixtures for the Xendit provider tests.

This module provides reusable fixtures for testing:
- An in-memory fake of the Xendit REST API served through httpx.MockTransport
- Provider options for both integration styles
- Provider services wired to the fake gateway
- A FastAPI TestClient with dependency overrides
"""

import json
import os
import re
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

# === Environment Setup ===

# Fake credentials so boto3 never reaches real AWS from tests
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-southeast-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from xendit_medusa.models.config import XenditProviderOptions  # noqa: E402
from xendit_medusa.models.enums import IntentStyle  # noqa: E402
from xendit_medusa.services.xendit_client import XenditClient  # noqa: E402
from xendit_medusa.services.xendit_provider import XenditProviderService  # noqa: E402

# === Test Configuration ===

TEST_API_KEY = "xnd_development_test_key_123"
TEST_WEBHOOK_TOKEN = "callback_token_abcdef123456"
TEST_ADMIN_TOKEN = "admin_token_xyz"
TEST_API_URL = "https://api.xendit.test"


# === Fake Gateway ===


class FakeXenditGateway:
    """In-memory stand-in for the Xendit payment request, invoice and refund APIs.

    Every request is recorded in `calls`. Use `fail(method, pattern, response)`
    to make matching requests return a canned error response instead.
    """

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.invoices: dict[str, dict[str, Any]] = {}
        self.payment_requests: dict[str, dict[str, Any]] = {}
        self.refunds: list[dict[str, Any]] = []
        self._failures: list[tuple[str, re.Pattern[str], httpx.Response]] = []
        self._counter = 0

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def fail(self, method: str, pattern: str, response: httpx.Response) -> None:
        self._failures.append((method, re.compile(pattern), response))

    def set_status(self, intent_id: str, status: str) -> None:
        record = self.invoices.get(intent_id) or self.payment_requests[intent_id]
        record["status"] = status

    def seed_invoice(self, amount: float = 10000) -> str:
        """Create an invoice directly in the fake and return its ID."""
        return self._create_invoice({"external_id": f"seed_{self._counter}", "amount": amount}).json()["id"]

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.method == method and c.url.path == path]

    def _next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter:06d}"

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path

        for method, pattern, response in self._failures:
            if request.method == method and pattern.fullmatch(path):
                return response

        body = json.loads(request.content) if request.content else {}

        if request.method == "POST" and path == "/v2/invoices":
            return self._create_invoice(body)
        if request.method == "POST" and path == "/v3/payment_requests":
            return self._create_payment_request(body)
        if request.method == "POST" and path == "/refunds":
            return self._create_refund(body)

        match = re.fullmatch(r"/v2/invoices/([^/]+)(/expire!|/simulate_payment)?", path)
        if match:
            return self._invoice_action(request.method, match.group(1), match.group(2))

        match = re.fullmatch(r"/v3/payment_requests/([^/]+)(/simulate)?", path)
        if match:
            return self._payment_request_action(request.method, match.group(1), match.group(2))

        return _error(404, "NOT_FOUND", f"No route for {request.method} {path}")

    def _create_invoice(self, body: dict[str, Any]) -> httpx.Response:
        invoice_id = self._next_id("inv_")
        invoice = {
            "id": invoice_id,
            "external_id": body["external_id"],
            "user_id": "user_123",
            "status": "PENDING",
            "merchant_name": "Test Store",
            "amount": body["amount"],
            "currency": body.get("currency", "IDR"),
            "description": body.get("description"),
            "expiry_date": "2026-10-20T00:00:00.000Z",
            "invoice_url": f"https://checkout-staging.xendit.co/web/{invoice_id}",
            "metadata": body.get("metadata"),
            "created": "2026-10-19T00:00:00.000Z",
            "updated": "2026-10-19T00:00:00.000Z",
        }
        self.invoices[invoice_id] = invoice
        return httpx.Response(200, json=invoice)

    def _invoice_action(self, method: str, invoice_id: str, action: str | None) -> httpx.Response:
        invoice = self.invoices.get(invoice_id)
        if invoice is None:
            return _error(404, "INVOICE_NOT_FOUND_ERROR", "Invoice not found")
        if method == "POST" and action == "/expire!":
            invoice["status"] = "EXPIRED"
        elif method == "POST" and action == "/simulate_payment":
            invoice["status"] = "PAID"
            invoice["paid_amount"] = invoice["amount"]
            invoice["payment_id"] = f"pay_{invoice_id}"
        return httpx.Response(200, json=invoice)

    def _create_payment_request(self, body: dict[str, Any]) -> httpx.Response:
        request_id = self._next_id("pr-")
        payment_request = {
            "payment_request_id": request_id,
            "reference_id": body["reference_id"],
            "business_id": "biz_123",
            "type": body.get("type", "PAY"),
            "country": body["country"],
            "currency": body["currency"],
            "request_amount": body["request_amount"],
            "capture_method": body.get("capture_method", "AUTOMATIC"),
            "channel_code": body["channel_code"],
            "channel_properties": body.get("channel_properties"),
            "status": "REQUIRES_ACTION",
            "actions": [
                {
                    "type": "REDIRECT_CUSTOMER",
                    "descriptor": "WEB_URL",
                    "value": f"https://ewallet.test/{request_id}",
                }
            ],
            "metadata": body.get("metadata"),
            "created": "2026-10-19T00:00:00.000Z",
            "updated": "2026-10-19T00:00:00.000Z",
        }
        self.payment_requests[request_id] = payment_request
        return httpx.Response(201, json=payment_request)

    def _payment_request_action(self, method: str, request_id: str, action: str | None) -> httpx.Response:
        payment_request = self.payment_requests.get(request_id)
        if payment_request is None:
            return _error(404, "DATA_NOT_FOUND", "Payment request not found")
        if method == "POST" and action == "/simulate":
            payment_request["status"] = "SUCCEEDED"
            payment_request["captured_amount"] = payment_request["request_amount"]
        return httpx.Response(200, json=payment_request)

    def _create_refund(self, body: dict[str, Any]) -> httpx.Response:
        refund = {
            "id": self._next_id("rfd-"),
            "status": "PENDING",
            **body,
        }
        self.refunds.append(refund)
        return httpx.Response(200, json=refund)


def _error(status_code: int, error_code: str, message: str) -> httpx.Response:
    return httpx.Response(status_code, json={"error_code": error_code, "message": message})


# === Option Fixtures ===


def make_options(**overrides: Any) -> XenditProviderOptions:
    """Build provider options with test defaults."""
    values: dict[str, Any] = {
        "api_key": TEST_API_KEY,
        "webhook_token": TEST_WEBHOOK_TOKEN,
        "api_url": TEST_API_URL,
        "default_country": "ID",
        "test_mode": True,
        "intent_style": IntentStyle.LINK,
        "frontend_url": "https://shop.example.com",
    }
    values.update(overrides)
    return XenditProviderOptions(**values)


@pytest.fixture
def gateway() -> FakeXenditGateway:
    """Fresh fake gateway per test."""
    return FakeXenditGateway()


@pytest.fixture
def link_options() -> XenditProviderOptions:
    return make_options()


@pytest.fixture
def direct_options() -> XenditProviderOptions:
    return make_options(intent_style=IntentStyle.DIRECT)


# === Service Fixtures ===


def make_provider(options: XenditProviderOptions, gateway: FakeXenditGateway) -> XenditProviderService:
    """Provider whose client talks to the fake gateway."""
    return XenditProviderService(options, client=XenditClient(options, transport=gateway.transport()))


@pytest.fixture
def link_provider(link_options, gateway) -> XenditProviderService:
    return make_provider(link_options, gateway)


@pytest.fixture
def direct_provider(direct_options, gateway) -> XenditProviderService:
    return make_provider(direct_options, gateway)


# === API Fixtures ===


@pytest.fixture
def make_api_client(gateway) -> Generator[Callable[..., Any], None, None]:
    """Factory for a TestClient whose services use the fake gateway.

    Usage:
        client = make_api_client(test_mode=False)
    """
    from fastapi.testclient import TestClient

    from xendit_api.dependencies import get_provider_options, get_provider_service, reset_services
    from xendit_api.main import app

    def _factory(**overrides: Any) -> TestClient:
        options = make_options(**overrides)
        provider = make_provider(options, gateway)
        app.dependency_overrides[get_provider_options] = lambda: options
        app.dependency_overrides[get_provider_service] = lambda: provider
        return TestClient(app, raise_server_exceptions=False)

    yield _factory

    app.dependency_overrides.clear()
    reset_services()


@pytest.fixture
def api_client(make_api_client):
    """TestClient with default options (link style, test mode, webhook token set)."""
    return make_api_client()


@pytest.fixture
def options_factory() -> Callable[..., XenditProviderOptions]:
    """Factory for provider options with test defaults."""
    return make_options
