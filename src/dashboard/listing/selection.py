"""Detail overlay state: which single item is open, independent of the list."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from dashboard.exceptions import DashboardError
from dashboard.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Selection:
    selected_id: str | None = None
    is_open: bool = False

    def select(self, identifier: str) -> None:
        # The id does not have to be on the current page; the overlay fetches it itself
        self.selected_id = identifier
        self.is_open = True

    def close(self) -> None:
        self.selected_id = None
        self.is_open = False


class DetailLoader[T]:
    """Selection plus the overlay's own fetch by id.

    A failed fetch sets ``error`` for inline display inside the overlay; the
    list behind it is not affected. A response arriving after the overlay was
    closed or switched to another item is dropped.
    """

    def __init__(self, load: Callable[[str], Awaitable[T]], *, label: str = "details") -> None:
        self.selection = Selection()
        self.label = label
        self.data: T | None = None
        self.error: str | None = None
        self.loading = False
        self._load = load
        self._generation = 0

    @property
    def is_open(self) -> bool:
        return self.selection.is_open

    async def open(self, identifier: str) -> None:
        self.selection.select(identifier)
        self._generation += 1
        generation = self._generation
        self.data, self.error, self.loading = None, None, True

        try:
            data = await self._load(identifier)
        except DashboardError as exc:
            self._finish(generation, error=exc.message)
        except Exception as exc:
            logger.exception("detail_load_crashed", label=self.label, id=identifier)
            self._finish(generation, error=str(exc) or type(exc).__name__)
        else:
            self._finish(generation, data=data)

    def close(self) -> None:
        self._generation += 1
        self.selection.close()
        self.data, self.error, self.loading = None, None, False

    def _finish(self, generation: int, *, data: T | None = None, error: str | None = None) -> None:
        if generation != self._generation:
            logger.debug("detail_load_discarded", label=self.label)
            return
        self.data, self.error, self.loading = data, error, False
