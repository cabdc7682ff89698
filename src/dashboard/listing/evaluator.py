"""Client-side search and filtering of a fetched collection."""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from dashboard.listing.query import ALL

type SearchFields[T] = Callable[[T, Mapping[str, Any] | None], Iterable[str | None]]
type FilterFields[T] = Mapping[str, Callable[[T], Any]]


def matches_search(values: Iterable[str | None], search_term: str) -> bool:
    """Case-insensitive substring match against any of ``values``. Missing values never match."""
    needle = search_term.lower()
    return any(needle in (value or "").lower() for value in values)


def filter_collection[T](
    items: Sequence[T],
    search_term: str,
    filters: Mapping[str, str],
    *,
    search_fields: SearchFields[T] | None = None,
    filter_fields: FilterFields[T] | None = None,
    lookup: Mapping[str, Any] | None = None,
) -> list[T]:
    """Return the items passing the search term and every client-side filter, in input order.

    Args:
        items: The raw collection; never modified.
        search_term: Committed search term. Empty means no search.
        filters: Selected value per dimension. ``"all"`` disables a dimension.
        search_fields: Returns the searchable strings of an item. ``lookup`` is passed
            through so denormalized fields (a patient's name) can be resolved.
        filter_fields: Field accessor per client-side dimension. Dimensions without
            an accessor are handled by the server and ignored here.
        lookup: Read-only side index, e.g. patient id -> patient.
    """
    predicates: list[tuple[Callable[[T], Any], str]] = []
    for name, value in filters.items():
        accessor = filter_fields.get(name) if filter_fields is not None else None
        if accessor is not None and value != ALL:
            predicates.append((accessor, value))
    searching = bool(search_term) and search_fields is not None

    result = []
    for item in items:
        if any(accessor(item) != value for accessor, value in predicates):
            continue
        if searching and not matches_search(search_fields(item, lookup), search_term):  # type: ignore[misc]
            continue
        result.append(item)
    return result
