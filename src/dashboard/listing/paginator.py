"""Slicing a filtered collection into pages."""

from collections.abc import Sequence

from dashboard.schemas.pagination import PageResult, ServerPagination, page_count


def paginate[T](items: Sequence[T], page: int, page_size: int) -> PageResult[T]:
    """Return page ``page`` (1-based) of ``items``.

    A page past the end yields no items rather than being corrected; callers
    reset the page themselves when the collection shrinks.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    start = (page - 1) * page_size
    total = len(items)
    return PageResult(
        items=tuple(items[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_items=total,
        total_pages=page_count(total, page_size),
    )


def from_server[T](items: Sequence[T], pagination: ServerPagination, page_size: int) -> PageResult[T]:
    """Wrap a page the backend already cut, trusting its totals."""
    return PageResult(
        items=tuple(items),
        page=pagination.page,
        page_size=pagination.limit or page_size,
        total_items=pagination.total,
        total_pages=pagination.total_pages,
    )
