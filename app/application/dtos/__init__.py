"""Application DTOs: plain read-models passed between layers."""

from app.application.dtos.permission import GroupLookupResult

__all__ = ["GroupLookupResult"]
