"""Unit tests for the gateway status mapper."""

import pytest

from xendit_medusa.models.enums import InvoiceStatus, PaymentRequestStatus, PaymentSessionStatus
from xendit_medusa.services.status_mapper import STATUS_MAP, is_paid, is_terminal, map_status


class TestMapStatus:
    """Gateway statuses map onto host session statuses."""

    @pytest.mark.parametrize(
        ("gateway_status", "expected"),
        [
            ("SUCCEEDED", PaymentSessionStatus.AUTHORIZED),
            ("PAID", PaymentSessionStatus.AUTHORIZED),
            ("SETTLED", PaymentSessionStatus.AUTHORIZED),
            ("REQUIRES_ACTION", PaymentSessionStatus.PENDING),
            ("PENDING", PaymentSessionStatus.PENDING),
            ("FAILED", PaymentSessionStatus.ERROR),
            ("CANCELED", PaymentSessionStatus.CANCELED),
            ("EXPIRED", PaymentSessionStatus.CANCELED),
        ],
    )
    def test_known_statuses(self, gateway_status, expected):
        assert map_status(gateway_status) == expected

    def test_matching_is_case_insensitive(self):
        assert map_status("paid") == PaymentSessionStatus.AUTHORIZED
        assert map_status(" Expired ") == PaymentSessionStatus.CANCELED

    @pytest.mark.parametrize("gateway_status", ["VOIDED", "", None, "AWAITING_CAPTURE"])
    def test_unknown_status_is_pending(self, gateway_status):
        """Unrecognized values never raise."""
        assert map_status(gateway_status) == PaymentSessionStatus.PENDING


class TestPaidAndTerminal:
    @pytest.mark.parametrize("status", ["SUCCEEDED", "PAID", "SETTLED"])
    def test_paid_statuses(self, status):
        assert is_paid(status)
        assert is_terminal(status)

    @pytest.mark.parametrize("status", ["PENDING", "REQUIRES_ACTION", "FAILED", "EXPIRED", None])
    def test_not_paid(self, status):
        assert not is_paid(status)

    def test_failed_and_expired_are_terminal(self):
        assert is_terminal("FAILED")
        assert is_terminal("EXPIRED")
        assert not is_terminal("PENDING")


class TestGatewayStatusCoverage:
    @pytest.mark.parametrize("status", [*PaymentRequestStatus, *InvoiceStatus])
    def test_every_gateway_status_is_mapped(self, status):
        assert status.value in STATUS_MAP

    def test_enum_member_maps_like_its_value(self):
        assert map_status(InvoiceStatus.SETTLED) == PaymentSessionStatus.AUTHORIZED
        assert is_paid(PaymentRequestStatus.SUCCEEDED)
