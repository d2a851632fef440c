"""Xendit payment provider for the commerce host.

Implements the PaymentProvider protocol on top of XenditClient. The host
calls these operations during checkout; webhooks are mapped through
webhook_handler.get_webhook_action_and_data.

Which gateway API backs a payment intent is decided by
XenditProviderOptions.intent_style:
- DIRECT: v3 payment requests for a specific channel (e.g. OVO)
- LINK: hosted payment links (invoices), the storefront redirects to invoice_url
"""

import time
from typing import Any

from pydantic import ValidationError

from xendit_medusa.models.config import XenditProviderOptions
from xendit_medusa.models.enums import IntentStyle, PaymentSessionStatus
from xendit_medusa.models.errors import (
    InvalidConfigurationError,
    InvalidRequestError,
    NotReadyError,
    TestModeDisabledError,
    XenditProviderError,
)
from xendit_medusa.models.intent import PaymentIntent
from xendit_medusa.models.invoice import (
    CustomerNotificationPreference,
    InvoiceCreate,
    InvoiceCustomer,
    InvoiceItem,
)
from xendit_medusa.models.payment_request import PaymentRequestCreate
from xendit_medusa.models.provider import (
    InitiatePaymentInput,
    PaymentDataOutput,
    PaymentSessionOutput,
    PaymentStatusOutput,
    RefundPaymentInput,
)
from xendit_medusa.models.refund import RefundCreate
from xendit_medusa.models.webhook import WebhookActionResult
from xendit_medusa.utils.logging import get_logger, log_payment_operation

from .status_mapper import is_paid, map_status
from .webhook_handler import get_webhook_action_and_data
from .xendit_client import XenditClient, generate_reference_id

logger = get_logger(__name__)

PROVIDER_IDENTIFIER = "xendit"

DEFAULT_CHANNEL_CODE = "OVO"
DEFAULT_REFUND_CURRENCY = "IDR"
DEFAULT_REFUND_REASON = "Customer requested refund"
INVOICE_DURATION_SECONDS = 86400
INVOICE_LOCALE = "en"


def _context(operation: str) -> str:
    return f"An error occurred in {operation}"


class XenditProviderService:
    """Payment provider backed by the Xendit API.

    Usage:
        provider = XenditProviderService(options)
        session = provider.initiate_payment(InitiatePaymentInput(amount=10000, currency_code="IDR"))
        status = provider.get_payment_status(session.id)
    """

    identifier = PROVIDER_IDENTIFIER

    def __init__(self, options: XenditProviderOptions, client: XenditClient | None = None) -> None:
        """Initialize the provider.

        Args:
            options: Validated provider options
            client: Gateway client; built from options when omitted
        """
        self.options = options
        self.client = client or XenditClient(options)

    @staticmethod
    def validate_options(options: dict[str, Any]) -> XenditProviderOptions:
        """Validate raw provider options.

        Args:
            options: Raw option mapping (e.g. from host configuration)

        Returns:
            The parsed options.

        Raises:
            InvalidConfigurationError: If a required option is missing or invalid.
        """
        try:
            return XenditProviderOptions.model_validate(options)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}" for err in e.errors()
            )
            raise InvalidConfigurationError(
                f"Invalid Xendit provider options: {problems}",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def is_in_test_mode(self) -> bool:
        return self.options.test_mode

    # === Session lifecycle ===

    def initiate_payment(self, payment: InitiatePaymentInput) -> PaymentSessionOutput:
        """Create a payment intent at the gateway.

        Args:
            payment: Amount, currency and checkout context

        Returns:
            The intent ID and its session data

        Raises:
            InvalidRequestError: Any failure, wrapping the underlying error
        """
        operation = "initiate_payment"
        try:
            if self.options.intent_style == IntentStyle.DIRECT:
                request = self._build_payment_request(payment)
                intent = PaymentIntent.from_payment_request(self.client.create_payment_request(request))
            else:
                invoice = self._build_invoice(payment)
                intent = PaymentIntent.from_invoice(self.client.create_invoice(invoice))
        except XenditProviderError as e:
            log_payment_operation(
                logger, operation, amount=payment.amount, currency=payment.currency_code, error=e.message
            )
            raise InvalidRequestError(
                f"{_context(operation)}: {e.message}",
                status_code=e.status_code,
                gateway_error_code=e.gateway_error_code,
                details={"cause": e.code.value},
            ) from e
        except (ValidationError, ValueError) as e:
            log_payment_operation(
                logger, operation, amount=payment.amount, currency=payment.currency_code, error=str(e)
            )
            raise InvalidRequestError(f"{_context(operation)}: {e}") from e

        log_payment_operation(
            logger,
            operation,
            intent_id=intent.id,
            reference_id=intent.reference_id,
            amount=intent.amount,
            currency=intent.currency,
            status=intent.status,
            style=intent.style.value,
        )
        return PaymentSessionOutput(id=intent.id, data=intent.to_session_data())

    def update_payment(self, intent_id: str, payment: InitiatePaymentInput) -> PaymentSessionOutput:
        """Replace an intent with a new one for the updated amount.

        Gateway intents are immutable once created, so a fresh intent is
        always created and its ID returned. The old intent is left to expire.
        """
        logger.info("Updating payment %s by creating a new intent", intent_id)
        return self.initiate_payment(payment)

    def get_payment_status(self, intent_id: str) -> PaymentStatusOutput:
        """Return the host status for an intent.

        Never raises; any failure is reported as ERROR with empty data.
        """
        try:
            intent = self.client.retrieve_intent(intent_id)
        except Exception as e:
            logger.error("Failed to get payment status for %s: %s", intent_id, e)
            return PaymentStatusOutput(status=PaymentSessionStatus.ERROR, data={})

        return PaymentStatusOutput(status=map_status(intent.status), data=intent.to_session_data())

    def authorize_payment(self, intent_id: str) -> PaymentStatusOutput:
        """Report whether the intent reached an authorizable state."""
        operation = "authorize_payment"
        intent = self._retrieve(intent_id, operation)
        status = map_status(intent.status)
        log_payment_operation(logger, operation, intent_id=intent_id, status=intent.status, mapped=status.value)
        return PaymentStatusOutput(status=status, data=intent.to_session_data())

    def capture_payment(self, intent_id: str) -> PaymentDataOutput:
        """Capture a paid intent.

        Xendit captures automatically, so this only confirms the intent is in
        its terminal success state.

        Raises:
            NotReadyError: Intent exists but is not paid yet
        """
        operation = "capture_payment"
        intent = self._retrieve(intent_id, operation)

        if not is_paid(intent.status):
            log_payment_operation(
                logger, operation, intent_id=intent_id, status=intent.status, error="payment not completed"
            )
            raise NotReadyError(
                f"{_context(operation)}: Payment not completed. Current status: {intent.status}",
                observed_status=intent.status,
            )

        log_payment_operation(logger, operation, intent_id=intent_id, amount=intent.paid_amount, status=intent.status)
        return PaymentDataOutput(data=intent.to_session_data())

    def refund_payment(self, refund: RefundPaymentInput) -> PaymentDataOutput:
        """Refund part or all of a paid intent.

        Args:
            refund: Intent ID, amount and optional currency/reason

        Returns:
            The refund record as session data
        """
        operation = "refund_payment"
        reference_id = f"refund_{refund.intent_id}_{int(time.time() * 1000)}"
        request = RefundCreate(
            reference_id=reference_id,
            currency=(refund.currency or DEFAULT_REFUND_CURRENCY).upper(),
            amount=refund.amount,
            reason=refund.reason or DEFAULT_REFUND_REASON,
            metadata=refund.metadata,
        )
        if self.options.intent_style == IntentStyle.DIRECT:
            request.payment_request_id = refund.intent_id
        else:
            request.invoice_id = refund.intent_id
            request.payment_id = refund.payment_id

        try:
            result = self.client.create_refund(request)
        except XenditProviderError as e:
            log_payment_operation(logger, operation, intent_id=refund.intent_id, amount=refund.amount, error=e.message)
            raise e.with_context(_context(operation)) from e

        log_payment_operation(
            logger,
            operation,
            intent_id=refund.intent_id,
            reference_id=reference_id,
            amount=result.amount,
            currency=result.currency,
            status=result.status,
            refund_id=result.id,
        )
        return PaymentDataOutput(data=result.model_dump(mode="json"))

    def cancel_payment(self, intent_id: str) -> PaymentDataOutput:
        """Cancel an intent.

        Invoices are expired at the gateway; payment requests have no cancel
        endpoint, so their current snapshot is returned unchanged.
        """
        operation = "cancel_payment"
        try:
            intent = self.client.expire_intent(intent_id)
        except XenditProviderError as e:
            log_payment_operation(logger, operation, intent_id=intent_id, error=e.message)
            raise e.with_context(_context(operation)) from e

        log_payment_operation(logger, operation, intent_id=intent_id, status=intent.status)
        return PaymentDataOutput(data=intent.to_session_data())

    def delete_payment(self, intent_id: str) -> PaymentDataOutput:
        """Delete an intent; same as cancelling it."""
        return self.cancel_payment(intent_id)

    def retrieve_payment(self, intent_id: str) -> PaymentDataOutput:
        """Read-only snapshot of an intent."""
        intent = self._retrieve(intent_id, "retrieve_payment")
        return PaymentDataOutput(data=intent.to_session_data())

    # === Webhooks ===

    def get_webhook_action_and_data(self, payload: dict[str, Any]) -> WebhookActionResult:
        return get_webhook_action_and_data(payload)

    # === Test mode ===

    def simulate_payment(self, intent_id: str, amount: float | None = None) -> PaymentDataOutput:
        """Mark an intent as paid at the gateway (test keys only).

        Raises:
            TestModeDisabledError: test_mode is off
        """
        operation = "simulate_payment"
        if not self.options.test_mode:
            raise TestModeDisabledError()

        try:
            self.client.simulate_payment(intent_id, amount)
            intent = self.client.retrieve_intent(intent_id)
        except XenditProviderError as e:
            log_payment_operation(logger, operation, intent_id=intent_id, error=e.message)
            raise e.with_context(_context(operation)) from e

        log_payment_operation(logger, operation, intent_id=intent_id, status=intent.status, test_mode=True)
        return PaymentDataOutput(data=intent.to_session_data())

    # === Helpers ===

    def _retrieve(self, intent_id: str, operation: str) -> PaymentIntent:
        try:
            return self.client.retrieve_intent(intent_id)
        except XenditProviderError as e:
            log_payment_operation(logger, operation, intent_id=intent_id, error=e.message)
            raise e.with_context(_context(operation)) from e

    def _metadata(self, payment: InitiatePaymentInput) -> dict[str, Any]:
        metadata: dict[str, Any] = {
            "session_id": payment.session_id,
            "customer_id": payment.customer.id if payment.customer else None,
            "integration": "medusa",
        }
        metadata.update(payment.metadata)
        return {key: value for key, value in metadata.items() if value is not None}

    def _success_url(self, payment: InitiatePaymentInput) -> str:
        return payment.success_redirect_url or f"{self.options.frontend_url}/order/confirmed"

    def _failure_url(self, payment: InitiatePaymentInput) -> str:
        return payment.failure_redirect_url or f"{self.options.frontend_url}/checkout?step=payment&status=failed"

    def _build_payment_request(self, payment: InitiatePaymentInput) -> PaymentRequestCreate:
        country = payment.country or self.options.default_country
        if not country:
            raise InvalidConfigurationError(
                "Country is required for payment requests. Set default_country in the provider options."
            )

        channel_properties = {
            "success_return_url": self._success_url(payment),
            "failure_return_url": self._failure_url(payment),
        }
        if payment.cancel_redirect_url:
            channel_properties["cancel_return_url"] = payment.cancel_redirect_url
        channel_properties.update(payment.channel_properties)

        return PaymentRequestCreate(
            reference_id=generate_reference_id(),
            country=country.upper(),
            currency=payment.currency_code.upper(),
            request_amount=payment.amount,
            capture_method=self.options.default_capture_method,
            channel_code=payment.channel_code or DEFAULT_CHANNEL_CODE,
            channel_properties=channel_properties,
            description=f"Payment for {self._payer_label(payment)}",
            metadata=self._metadata(payment),
        )

    def _build_invoice(self, payment: InitiatePaymentInput) -> InvoiceCreate:
        customer = payment.customer
        invoice_customer = None
        if customer is not None:
            invoice_customer = InvoiceCustomer(
                given_names=customer.first_name,
                surname=customer.last_name,
                email=customer.email,
                mobile_number=customer.phone,
            )

        items = None
        if payment.items:
            items = [
                InvoiceItem(name=item.name, quantity=item.quantity, price=item.price, category=item.category)
                for item in payment.items
            ]

        return InvoiceCreate(
            external_id=generate_reference_id(),
            amount=payment.amount,
            description=f"Payment for {self._payer_label(payment)}",
            invoice_duration=INVOICE_DURATION_SECONDS,
            customer=invoice_customer,
            customer_notification_preference=CustomerNotificationPreference(
                invoice_created=["email"],
                invoice_paid=["email"],
            ),
            success_redirect_url=self._success_url(payment),
            failure_redirect_url=self._failure_url(payment),
            currency=payment.currency_code.upper(),
            items=items,
            payment_methods=payment.payment_methods,
            should_send_email=bool(customer and customer.email),
            locale=INVOICE_LOCALE,
            metadata=self._metadata(payment),
        )

    @staticmethod
    def _payer_label(payment: InitiatePaymentInput) -> str:
        if payment.customer and payment.customer.email:
            return payment.customer.email
        return "customer"
