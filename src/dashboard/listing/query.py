"""Canonical query state of a list view and the snapshot exposed to the view layer."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Final

from dashboard.schemas.pagination import PageResult

# Filter value meaning "do not filter on this dimension"
ALL: Final = "all"


class ListState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"  # first fetch in flight, nothing to show yet
    READY = "ready"
    REFRESHING = "refreshing"  # showing data while a newer fetch is in flight
    ERROR = "error"


@dataclass(frozen=True)
class ListQuery:
    """What the user asked for.

    ``raw_input`` mirrors the search box keystroke by keystroke; ``search_term``
    is the committed (debounced) value actually used for fetching and filtering.
    ``filters`` is stored as a read-only copy.
    """

    raw_input: str = ""
    search_term: str = ""
    filters: Mapping[str, str] = field(default_factory=dict)
    page: int = 1
    page_size: int = 10

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))

    def active_filters(self, names: frozenset[str] | None = None) -> dict[str, str]:
        """Filters that actually constrain the result, optionally limited to ``names``."""
        return {
            name: value
            for name, value in self.filters.items()
            if value != ALL and (names is None or name in names)
        }


@dataclass(frozen=True)
class ListSnapshot[T]:
    """Read-only view of a controller, rebuilt after every state change."""

    state: ListState
    page: PageResult[T] | None
    error: str | None
    query: ListQuery


def describe(query: ListQuery) -> dict[str, Any]:
    """Flat representation of a query for log events."""
    return {
        "search": query.search_term or None,
        "filters": query.active_filters() or None,
        "page": query.page,
        "page_size": query.page_size,
    }
