"""FastAPI application exposing the Xendit provider's HTTP surface.

This package provides REST endpoints for:
- Xendit webhook deliveries (/webhooks/xendit)
- Test-mode payment simulation (/admin/xendit/simulate)
- The storefront payment channel catalogue (/store/xendit-channels)
- Health checks (/health, /ping)

The provider operations themselves (initiate, capture, refund, ...) are
called in-process by the commerce host through XenditProviderService.
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from xendit_api.exceptions import register_exception_handlers
from xendit_api.middleware.correlation import CORRELATION_ID_HEADER, CorrelationIdMiddleware
from xendit_api.routes import channels_router, health_router, simulate_router, webhooks_router
from xendit_medusa import __version__
from xendit_medusa.utils.logging import configure_logging

configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Xendit Payment Provider API",
    description="Webhook, simulation and channel endpoints for the Xendit payment provider",
    version=__version__,
)

# Storefront origins allowed to call the channel catalogue
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.environ.get("STORE_CORS", "http://localhost:8000,http://127.0.0.1:8000").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[CORRELATION_ID_HEADER],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(webhooks_router)
app.include_router(simulate_router)
app.include_router(channels_router)


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 9000, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 9000)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run(
            "xendit_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["backend/api/src", "backend/shared/src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
