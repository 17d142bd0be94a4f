"""Request context management using contextvars.

Provides async-safe storage for request-scoped data (the request ID)
so log records emitted deep inside an authorization check can be tied
back to the HTTP request that triggered it.

Usage:
    token = set_request_id("abc-123")
    request_id = get_request_id()
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


def set_request_id(request_id: str) -> Token:
    """Set the request ID for the current task; returns a token for reset_request_id."""
    return _current_request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return _current_request_id.get()


def reset_request_id(token: Token) -> None:
    """Restore the request ID that was current before set_request_id."""
    _current_request_id.reset(token)
