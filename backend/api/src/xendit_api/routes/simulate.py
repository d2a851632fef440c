"""Admin endpoint for simulating payments in test mode.

Lets developers mark a payment request or invoice as paid without going
through a real channel. Only available when XENDIT_TEST_MODE is enabled
and guarded by the admin bearer token when XENDIT_ADMIN_TOKEN is set.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from starlette.status import HTTP_200_OK

from xendit_api.dependencies import get_provider_service, require_admin
from xendit_api.models.common import ErrorResponse
from xendit_api.models.simulate import (
    SimulatePaymentRequest,
    SimulatePaymentResponse,
    SimulationAvailability,
)
from xendit_medusa.models.errors import BadRequestError, TestModeDisabledError
from xendit_medusa.services.xendit_provider import XenditProviderService
from xendit_medusa.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/admin/xendit",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.post(
    "/simulate",
    summary="Simulate a payment",
    description="""
Marks a Xendit payment request or invoice as paid using the gateway's test
simulation API, then returns the refreshed payment snapshot.

**Test mode only.** Returns 403 when XENDIT_TEST_MODE is off.
""",
    response_model=SimulatePaymentResponse,
    status_code=HTTP_200_OK,
    responses={
        400: {"description": "intent_id missing", "model": ErrorResponse},
        401: {"description": "Admin bearer token missing or invalid", "model": ErrorResponse},
        403: {"description": "Test mode disabled", "model": ErrorResponse},
        404: {"description": "Payment intent not found", "model": ErrorResponse},
    },
)
def simulate_payment(
    body: SimulatePaymentRequest,
    provider: Annotated[XenditProviderService, Depends(get_provider_service)],
) -> SimulatePaymentResponse:
    """Simulate a payment for a test-mode intent."""
    if not provider.is_in_test_mode():
        logger.warning("Payment simulation attempted with test mode disabled")
        raise TestModeDisabledError()

    if not body.intent_id:
        raise BadRequestError("intent_id is required")

    logger.info("Simulating payment for intent: %s", body.intent_id)
    result = provider.simulate_payment(body.intent_id, body.amount)

    return SimulatePaymentResponse(
        message="Payment simulated successfully",
        data=result.data,
    )


@router.get(
    "/simulate",
    summary="Check whether payment simulation is available",
    response_model=SimulationAvailability,
)
async def simulation_availability(
    provider: Annotated[XenditProviderService, Depends(get_provider_service)],
) -> SimulationAvailability:
    """Report whether simulation can be used in this environment."""
    test_mode = provider.is_in_test_mode()
    return SimulationAvailability(
        available=test_mode,
        test_mode=test_mode,
        intent_style=provider.options.intent_style.value,
        message=(
            "Payment simulation is available"
            if test_mode
            else "Payment simulation is only available in test mode"
        ),
    )
