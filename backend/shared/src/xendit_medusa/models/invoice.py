"""Wire models for the payment link (invoice v2) API.

Reference: https://docs.xendit.co/apidocs/en/payment-link
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class InvoiceItem(BaseModel):
    """Line item shown on the payment link page."""

    name: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    category: str | None = None
    url: str | None = None


class InvoiceAddress(BaseModel):
    """Customer address."""

    city: str | None = None
    country: str | None = None
    postal_code: str | None = None
    state: str | None = None
    street_line1: str | None = None
    street_line2: str | None = None


class InvoiceCustomer(BaseModel):
    """Customer details attached to an invoice."""

    given_names: str | None = None
    surname: str | None = None
    email: str | None = None
    mobile_number: str | None = None
    addresses: list[InvoiceAddress] | None = None


class CustomerNotificationPreference(BaseModel):
    """Channels used to notify the customer about the invoice."""

    invoice_created: list[str] | None = None
    invoice_reminder: list[str] | None = None
    invoice_paid: list[str] | None = None
    invoice_expired: list[str] | None = None


class InvoiceCreate(BaseModel):
    """Payload for POST /v2/invoices."""

    external_id: str = Field(..., description="Caller-generated unique reference")
    amount: float = Field(..., gt=0)
    description: str | None = None
    invoice_duration: int | None = Field(default=None, description="Expiry in seconds")
    customer: InvoiceCustomer | None = None
    customer_notification_preference: CustomerNotificationPreference | None = None
    success_redirect_url: str | None = None
    failure_redirect_url: str | None = None
    currency: str | None = None
    items: list[InvoiceItem] | None = None
    payment_methods: list[str] | None = None
    should_send_email: bool | None = None
    locale: str | None = None
    metadata: dict[str, Any] | None = None


class InvoiceResponse(BaseModel):
    """Invoice object returned by the gateway."""

    model_config = ConfigDict(extra="allow")

    id: str
    external_id: str
    user_id: str | None = None
    status: str
    merchant_name: str | None = None
    amount: float
    paid_amount: float | None = None
    description: str | None = None
    expiry_date: str | None = None
    invoice_url: str | None = None
    currency: str | None = None
    paid_at: str | None = None
    payment_method: str | None = None
    payment_channel: str | None = None
    payment_destination: str | None = None
    payment_id: str | None = None
    customer: InvoiceCustomer | None = None
    success_redirect_url: str | None = None
    failure_redirect_url: str | None = None
    items: list[InvoiceItem] | None = None
    metadata: dict[str, Any] | None = None
    created: str | None = None
    updated: str | None = None
