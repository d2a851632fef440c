"""Unit tests for the payment channel catalogue."""

import pytest

from xendit_medusa.models.enums import ChannelType
from xendit_medusa.services.channels import CHANNELS, list_channels


class TestListChannels:
    def test_all_channels(self):
        channels = list_channels()

        assert len(channels) == len(CHANNELS) == 14
        assert {c.code for c in channels} >= {"OVO", "BCA", "QRIS", "CREDIT_CARD", "ALFAMART"}

    def test_filter_by_type(self):
        codes = [c.code for c in list_channels(type=ChannelType.EWALLET)]

        assert codes == ["OVO", "DANA", "LINKAJA", "SHOPEEPAY"]

    def test_filter_by_type_string(self):
        assert [c.code for c in list_channels(type="qr_code")] == ["QRIS"]

    def test_filter_by_country_is_case_insensitive(self):
        assert len(list_channels(country="id")) == len(CHANNELS)

    def test_unknown_country_returns_empty(self):
        assert list_channels(country="PH") == []

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            list_channels(type="crypto")

    def test_amount_limits_present(self):
        for channel in CHANNELS:
            assert channel.min_amount is not None
            assert channel.max_amount > channel.min_amount
