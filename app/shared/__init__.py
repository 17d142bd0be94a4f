"""Shared cross-cutting helpers: request context and telemetry.

Used by middleware, application, and infrastructure. No business logic.
"""

from app.shared.context import get_request_id, reset_request_id, set_request_id

__all__ = [
    "get_request_id",
    "reset_request_id",
    "set_request_id",
]
