"""Application services: authorization."""

from app.application.services.authorization_service import AuthorizationService

__all__ = [
    "AuthorizationService",
]
