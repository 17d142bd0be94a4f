"""Backend service clients (SSO and learning platform) over httpx."""

from app.infrastructure.external.clients.content_client import ContentServiceClient
from app.infrastructure.external.clients.identity_client import IdentityServiceClient

__all__ = [
    "ContentServiceClient",
    "IdentityServiceClient",
]
