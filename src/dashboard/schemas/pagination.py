"""Pagination types shared by every list view.

ServerPagination — pydantic model for the metadata the backend sends along a page.
PageResult[T]    — plain dataclass handed to the view layer.
"""

import math
from dataclasses import dataclass

from pydantic import Field

from dashboard.schemas.base import ApiModel


class ServerPagination(ApiModel):
    """Pagination block of a server-paged listing (``{"page", "limit", "total", "totalPages"}``)."""

    page: int = Field(ge=1)
    limit: int | None = Field(default=None, ge=1)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=0)


def page_count(total_items: int, page_size: int) -> int:
    """Number of pages needed for ``total_items``; zero when there are none."""
    return math.ceil(total_items / page_size)


@dataclass(frozen=True)
class PageResult[T]:
    """One page of a list plus the metadata the pager renders.

    ``items`` is the ``[(page - 1) * page_size, page * page_size)`` slice of the
    filtered collection. ``total_pages`` is 0 exactly when ``total_items`` is 0.
    """

    items: tuple[T, ...]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def is_empty(self) -> bool:
        return self.total_items == 0

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
