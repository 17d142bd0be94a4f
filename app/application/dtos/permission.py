"""DTOs for authorization checks (no dependency on infrastructure)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GroupLookupResult:
    """Outcome of one group lookup: a known set, or unknown because the lookup failed.

    A failed lookup is never the same as "no groups"; the engine decides
    what unknown means via its LookupFailurePolicy.
    """

    source: str
    groups: frozenset[str] = frozenset()
    error: BaseException | None = None

    @classmethod
    def ok(cls, source: str, groups: list[str] | None) -> "GroupLookupResult":
        return cls(source=source, groups=frozenset(groups or ()))

    @classmethod
    def unknown(cls, source: str, error: BaseException) -> "GroupLookupResult":
        return cls(source=source, error=error)

    @property
    def is_known(self) -> bool:
        return self.error is None
