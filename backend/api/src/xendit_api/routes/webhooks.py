"""Webhook endpoint for Xendit callbacks.

Xendit posts payment request events and invoice status changes here. The
request is authenticated with the x-callback-token header rather than an
API key, and acknowledged as soon as the payload is validated; mapping the
event to a host action runs after the response is sent.

Response codes matter to Xendit: any non-2xx status schedules a redelivery.
"""

import datetime as dt
from typing import Annotated, Any

from fastapi import APIRouter, BackgroundTasks, Depends, Header, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from xendit_api.dependencies import get_provider_service, get_webhook_verifier
from xendit_api.models.common import ErrorResponse, MethodNotAllowedResponse
from xendit_api.models.webhooks import WebhookAckResponse
from xendit_medusa.models.errors import XenditProviderError
from xendit_medusa.services.webhook_handler import (
    CALLBACK_TOKEN_HEADER,
    WebhookVerifier,
    parse_payload,
    validate_payload,
)
from xendit_medusa.services.xendit_provider import XenditProviderService
from xendit_medusa.utils.logging import get_logger, log_webhook_event

logger = get_logger(__name__)

router = APIRouter(tags=["webhooks"])

WEBHOOK_PATH = "/webhooks/xendit"


def dispatch_webhook(provider: XenditProviderService, payload: dict[str, Any]) -> None:
    """Map an accepted delivery to a host action.

    Runs as a background task after Xendit has been acknowledged.
    """
    result = provider.get_webhook_action_and_data(payload)
    logger.info(
        "Xendit webhook dispatched: action=%s session=%s amount=%s",
        result.action.value,
        result.data.session_id if result.data else None,
        result.data.amount if result.data else None,
    )


@router.post(
    WEBHOOK_PATH,
    summary="Receive Xendit webhook events",
    description="""
Endpoint for Xendit callbacks. Accepts:
- Payment request events (payment.capture, payment.failed, ...)
- Payment link (invoice) status callbacks (PAID, SETTLED, EXPIRED, ...)

**No API authentication** - the x-callback-token header must match the
webhook verification token from the Xendit dashboard when one is configured.

The delivery is acknowledged before it is processed.
""",
    response_model=WebhookAckResponse,
    responses={
        200: {"description": "Delivery accepted", "model": WebhookAckResponse},
        400: {"description": "Body is not JSON or lacks an event/status and ID", "model": ErrorResponse},
        401: {"description": "Missing or invalid x-callback-token", "model": ErrorResponse},
        500: {"description": "Unexpected error; Xendit will redeliver", "model": ErrorResponse},
    },
)
async def handle_xendit_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    verifier: Annotated[WebhookVerifier, Depends(get_webhook_verifier)],
    provider: Annotated[XenditProviderService, Depends(get_provider_service)],
    callback_token: Annotated[str | None, Header(alias=CALLBACK_TOKEN_HEADER)] = None,
) -> WebhookAckResponse | JSONResponse:
    """Validate a Xendit delivery and schedule its processing."""
    try:
        payload = parse_payload(await request.body())
        envelope = validate_payload(payload)
        verifier.authenticate(callback_token)
    except XenditProviderError as e:
        log_webhook_event(logger, None, None, result="rejected", error=e.message)
        raise
    except Exception as e:
        logger.exception("Error processing Xendit webhook: %s", e)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error_code": "ERR_INTERNAL",
                "message": "Webhook processing failed",
                "recovery": "Xendit will redeliver the event",
                "details": None,
            },
        )

    log_webhook_event(
        logger,
        envelope.discriminator,
        envelope.intent_id,
        reference_id=envelope.reference_id,
        result="received",
    )
    background_tasks.add_task(dispatch_webhook, provider, payload)

    return WebhookAckResponse(
        event=envelope.discriminator,
        intent_id=envelope.intent_id,
        timestamp=dt.datetime.now(dt.UTC).isoformat(),
    )


@router.get(
    WEBHOOK_PATH,
    summary="Webhook endpoint method check",
    status_code=HTTP_405_METHOD_NOT_ALLOWED,
    response_model=MethodNotAllowedResponse,
)
async def webhook_method_not_allowed() -> JSONResponse:
    """Reject GET requests with a JSON explanation."""
    return JSONResponse(
        status_code=HTTP_405_METHOD_NOT_ALLOWED,
        content=MethodNotAllowedResponse(
            message="This endpoint only accepts POST requests from Xendit",
        ).model_dump(),
        headers={"Allow": "POST"},
    )
