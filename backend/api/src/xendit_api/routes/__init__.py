"""API routes package.

Routers are organized by concern:

- health: health and ping checks
- webhooks: Xendit callback receiver
- simulate: test-mode payment simulation (admin)
- channels: storefront payment channel catalogue

All routers are registered in main.py.
"""

from xendit_api.routes.channels import router as channels_router
from xendit_api.routes.health import router as health_router
from xendit_api.routes.simulate import router as simulate_router
from xendit_api.routes.webhooks import router as webhooks_router

__all__ = [
    "channels_router",
    "health_router",
    "simulate_router",
    "webhooks_router",
]
