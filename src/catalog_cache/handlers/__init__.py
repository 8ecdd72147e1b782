"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .catalog_handler import CatalogHandler
from .webhook_handler import WebhookHandler

__all__ = [
    "CatalogHandler",
    "WebhookHandler",
]
