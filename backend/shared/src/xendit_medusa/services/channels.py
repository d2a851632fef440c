"""Static catalogue of Xendit payment channels offered at checkout.

Amounts are in IDR. The catalogue only lists channels enabled for the
Indonesian market; availability per merchant account is managed in the
Xendit dashboard.
"""

from xendit_medusa.models.channel import PaymentChannelInfo
from xendit_medusa.models.enums import ChannelType


def _channel(
    code: str,
    name: str,
    type: ChannelType,
    description: str,
    min_amount: float,
    max_amount: float,
) -> PaymentChannelInfo:
    return PaymentChannelInfo(
        code=code,
        name=name,
        type=type,
        country="ID",
        currency="IDR",
        description=description,
        min_amount=min_amount,
        max_amount=max_amount,
    )


CHANNELS: tuple[PaymentChannelInfo, ...] = (
    # E-wallets
    _channel("OVO", "OVO", ChannelType.EWALLET, "Pay with your OVO balance", 100, 20_000_000),
    _channel("DANA", "DANA", ChannelType.EWALLET, "Pay with your DANA balance", 100, 20_000_000),
    _channel("LINKAJA", "LinkAja", ChannelType.EWALLET, "Pay with your LinkAja balance", 100, 20_000_000),
    _channel("SHOPEEPAY", "ShopeePay", ChannelType.EWALLET, "Pay with your ShopeePay balance", 100, 20_000_000),
    # Virtual accounts
    _channel("BCA", "BCA Virtual Account", ChannelType.VIRTUAL_ACCOUNT, "Bank transfer via BCA", 10_000, 50_000_000_000),
    _channel("BNI", "BNI Virtual Account", ChannelType.VIRTUAL_ACCOUNT, "Bank transfer via BNI", 10_000, 50_000_000_000),
    _channel("BRI", "BRI Virtual Account", ChannelType.VIRTUAL_ACCOUNT, "Bank transfer via BRI", 10_000, 50_000_000_000),
    _channel(
        "MANDIRI", "Mandiri Virtual Account", ChannelType.VIRTUAL_ACCOUNT, "Bank transfer via Mandiri", 10_000, 50_000_000_000
    ),
    _channel(
        "PERMATA", "Permata Virtual Account", ChannelType.VIRTUAL_ACCOUNT, "Bank transfer via Permata", 10_000, 50_000_000_000
    ),
    # QR code
    _channel("QRIS", "QRIS", ChannelType.QR_CODE, "Scan with any QRIS-enabled app", 1_500, 10_000_000),
    # Cards
    _channel("CREDIT_CARD", "Credit Card", ChannelType.CARD, "Visa, Mastercard, JCB and AMEX", 5_000, 200_000_000),
    _channel("DEBIT_CARD", "Debit Card", ChannelType.CARD, "Visa and Mastercard debit cards", 5_000, 200_000_000),
    # Retail outlets
    _channel("ALFAMART", "Alfamart", ChannelType.RETAIL, "Pay cash at any Alfamart store", 10_000, 2_500_000),
    _channel("INDOMARET", "Indomaret", ChannelType.RETAIL, "Pay cash at any Indomaret store", 10_000, 2_500_000),
)


def list_channels(
    type: ChannelType | str | None = None,
    country: str | None = None,
) -> list[PaymentChannelInfo]:
    """List activated payment channels.

    Args:
        type: Optional channel type filter (e.g. "ewallet")
        country: Optional ISO country code filter (case-insensitive)

    Returns:
        Matching channels in catalogue order
    """
    channel_type = ChannelType(type) if type else None
    country_code = country.upper() if country else None

    return [
        channel
        for channel in CHANNELS
        if channel.is_activated
        and (channel_type is None or channel.type == channel_type)
        and (country_code is None or channel.country == country_code)
    ]
