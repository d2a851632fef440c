"""API-specific request/response models.

Modules:
- common: health, ping and error bodies
- webhooks: webhook acknowledgement
- simulate: admin payment simulation
- channels: storefront channel catalogue
"""

__all__: list[str] = []
