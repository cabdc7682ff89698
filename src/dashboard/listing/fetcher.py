"""The contract between a list controller and whatever loads its collection."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from dashboard.schemas.pagination import ServerPagination


@dataclass(frozen=True)
class FetchRequest:
    """Server-side portion of a ListQuery.

    ``search_term`` is None unless the view searches on the server, and
    ``filters`` only holds the server-side dimensions with a concrete value.
    """

    page: int
    page_size: int
    search_term: str | None = None
    filters: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FetchResult[T]:
    """A fetched collection.

    ``pagination`` is set when the backend already paged the result; otherwise
    ``items`` is the whole (possibly capped) listing and the controller pages it.
    """

    items: tuple[T, ...]
    pagination: ServerPagination | None = None


class CollectionFetcher[T](Protocol):
    async def __call__(self, request: FetchRequest) -> FetchResult[T]: ...
