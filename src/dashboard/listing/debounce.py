"""Debounced search input.

Keystrokes update ``raw_input`` immediately; the committed value is only
handed on once the input has been quiet for ``interval`` seconds.
"""

import asyncio
from collections.abc import Awaitable, Callable

from dashboard.logging import get_logger

logger = get_logger(__name__)


class DebouncedInput:
    """One pending commit at most, owned by a single list controller.

    Must be fed from a running event loop: every ``on_input`` schedules an
    asyncio task that sleeps for the interval and then awaits ``on_commit``.
    A newer ``on_input`` cancels the sleeping task; a commit already running
    is left to finish.
    """

    def __init__(self, interval: float, on_commit: Callable[[str], Awaitable[None]]) -> None:
        if interval < 0:
            raise ValueError("interval must not be negative")
        self.interval = interval
        self.raw_input = ""
        self._on_commit = on_commit
        self._task: asyncio.Task[None] | None = None
        self._pending = False

    @property
    def pending(self) -> bool:
        """True while a commit is scheduled but has not fired yet."""
        return self._pending

    def on_input(self, value: str) -> None:
        self.raw_input = value
        self.cancel()
        self._pending = True
        self._task = asyncio.get_running_loop().create_task(self._fire())

    def cancel(self) -> None:
        """Drop the scheduled commit, if any. Safe to call repeatedly."""
        if self._pending and self._task is not None:
            self._task.cancel()
        self._pending = False

    async def settle(self) -> None:
        """Wait until the latest scheduled commit has fired (or was cancelled)."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def _fire(self) -> None:
        await asyncio.sleep(self.interval)
        self._pending = False
        logger.debug("search_committed", term=self.raw_input)
        await self._on_commit(self.raw_input)
