"""List-state controller shared by every list view.

One instance per view. It owns the ListQuery, the last fetched collection and
the page derived from it, and re-fetches whenever the query changes:

    keystrokes -> DebouncedInput -> search_term --+
    set_filter / set_page / set_page_size --------+-> fetch -> filter -> paginate -> snapshot

Per-view differences (debounce interval, which filters and whether search run
on the server, which fields are searchable) live in ListConfig.

Fetches are numbered. A response is applied only if no newer fetch has already
been applied, so a slow old response cannot overwrite a newer page. A failed
fetch keeps the last good page on screen and surfaces the message instead.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from dashboard.exceptions import DashboardError, NoWalletError, ValidationError
from dashboard.listing.debounce import DebouncedInput
from dashboard.listing.evaluator import FilterFields, SearchFields, filter_collection
from dashboard.listing.fetcher import CollectionFetcher, FetchRequest, FetchResult
from dashboard.listing.paginator import from_server, paginate
from dashboard.listing.query import ListQuery, ListSnapshot, ListState, describe
from dashboard.logging import get_logger
from dashboard.notifications import Notifier
from dashboard.schemas.pagination import PageResult, ServerPagination

logger = get_logger(__name__)

type Listener[T] = Callable[[ListSnapshot[T]], None]


@dataclass(frozen=True)
class ListConfig[T]:
    """Everything that differs between two list views."""

    label: str  # plural noun used in messages, e.g. "consents"
    debounce: float = 0.5
    page_size: int = 10
    filters: Mapping[str, str] = field(default_factory=dict)  # initial value per dimension
    server_filters: frozenset[str] = frozenset()  # dimensions sent to the fetcher
    server_search: bool = False
    server_paging: bool = False
    search_fields: SearchFields[T] | None = None
    filter_fields: FilterFields[T] = field(default_factory=dict)


class ListController[T]:
    """State machine behind one list view.

    All setters are coroutines that return once the fetch they triggered has
    settled; a setter that leaves the query unchanged does not fetch. Errors
    never escape: they end up in ``snapshot().error`` and the notifier.
    """

    def __init__(
        self,
        fetcher: CollectionFetcher[T],
        config: ListConfig[T],
        *,
        lookup: Mapping[str, Any] | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.config = config
        self.notifier = notifier or Notifier()
        self._lookup = lookup
        self._query = ListQuery(filters=dict(config.filters), page_size=config.page_size)
        self._state = ListState.IDLE
        self._page: PageResult[T] | None = None
        self._error: str | None = None

        self._raw: tuple[T, ...] = ()
        self._raw_query = self._query
        self._server_page: ServerPagination | None = None

        self._issued = 0
        self._settled = 0
        self._in_flight: set[int] = set()

        self._search = DebouncedInput(config.debounce, self.set_search_term)
        self._listeners: list[Listener[T]] = []
        self._log = logger.bind(view=config.label)

    # -- read side -----------------------------------------------------------

    @property
    def query(self) -> ListQuery:
        return self._query

    @property
    def state(self) -> ListState:
        return self._state

    @property
    def page(self) -> PageResult[T] | None:
        return self._page

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def lookup(self) -> Mapping[str, Any] | None:
        return self._lookup

    def snapshot(self) -> ListSnapshot[T]:
        return ListSnapshot(state=self._state, page=self._page, error=self._error, query=self._query)

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # -- lifecycle -----------------------------------------------------------

    async def mount(self) -> None:
        """Initial fetch with the default query."""
        await self._fetch()

    def close(self) -> None:
        """Teardown: a search typed just before closing must not commit afterwards."""
        self._search.cancel()

    # -- query setters -------------------------------------------------------

    def on_input(self, value: str) -> None:
        """Record a keystroke. The search term follows once typing pauses."""
        self._search.on_input(value)
        self._query = replace(self._query, raw_input=value)
        self._publish()

    async def settle(self) -> None:
        """Wait for a scheduled search commit (and the fetch it triggers)."""
        await self._search.settle()

    async def set_search_term(self, term: str) -> None:
        await self._update(search_term=term, page=1)

    async def set_filter(self, name: str, value: str) -> None:
        """Change one filter dimension; other dimensions and the search term are kept."""
        await self._update(filters={**self._query.filters, name: value}, page=1)

    async def set_page(self, page: int) -> None:
        await self._update(page=page)

    async def set_page_size(self, page_size: int) -> None:
        await self._update(page_size=page_size, page=1)

    async def next_page(self) -> None:
        if self._page is not None and self._query.page < self._page.total_pages:
            await self.set_page(self._query.page + 1)

    async def previous_page(self) -> None:
        if self._query.page > 1:
            await self.set_page(self._query.page - 1)

    async def refresh(self) -> None:
        """Re-fetch the current query even though it did not change."""
        await self._fetch()

    def set_lookup(self, lookup: Mapping[str, Any] | None) -> None:
        """Swap the side index and re-derive the page from the collection already held."""
        self._lookup = lookup
        if self._page is not None:
            self._page = self._derive(self._raw_query)
            self._publish()

    # -- mutations -----------------------------------------------------------

    async def mutate[R](
        self,
        action: Callable[[], Awaitable[R]],
        *,
        success: str | Callable[[R], str] | None = None,
        failure: str = "Action failed",
    ) -> R | None:
        """Run a create/update against the backend, then reload from page 1.

        Nothing is patched locally: server-assigned fields only exist after
        the refetch. On failure the query and page are left untouched and
        ``None`` is returned. Rejected input (no wallet, missing or invalid
        fields) is shown as a warning, anything else as an error.
        """
        try:
            result = await action()
        except (NoWalletError, ValidationError) as exc:
            self._log.info("mutation_rejected", error=exc.message)
            self.notifier.warning(exc.message)
            return None
        except DashboardError as exc:
            self._log.warning("mutation_failed", error=exc.message)
            self.notifier.error(f"{failure}: {exc.message}")
            return None
        except Exception as exc:
            self._log.exception("mutation_crashed")
            self.notifier.error(f"{failure}: {exc}")
            return None

        self._query = replace(self._query, page=1)
        await self._fetch()
        if success is not None:
            self.notifier.success(success(result) if callable(success) else success)
        return result

    # -- internals -----------------------------------------------------------

    async def _update(self, **changes: Any) -> None:
        query = replace(self._query, **changes)
        if query == self._query:
            return
        self._query = query
        await self._fetch()

    def _request_for(self, query: ListQuery) -> FetchRequest:
        search = (query.search_term or None) if self.config.server_search else None
        return FetchRequest(
            page=query.page,
            page_size=query.page_size,
            search_term=search,
            filters=query.active_filters(self.config.server_filters),
        )

    async def _fetch(self) -> None:
        self._issued += 1
        seq = self._issued
        query = self._query
        self._in_flight.add(seq)
        self._state = ListState.LOADING if self._page is None else ListState.REFRESHING
        self._publish()
        self._log.debug("list_fetch_issued", seq=seq, **describe(query))

        try:
            result = await self.fetcher(self._request_for(query))
        except DashboardError as exc:
            self._fail(seq, exc.message)
        except Exception as exc:
            self._log.exception("list_fetch_crashed", seq=seq)
            self._fail(seq, str(exc) or type(exc).__name__)
        else:
            self._apply(seq, query, result)
        finally:
            self._in_flight.discard(seq)

    def _apply(self, seq: int, query: ListQuery, result: FetchResult[T]) -> None:
        if seq <= self._settled:
            self._log.debug("list_fetch_discarded", seq=seq, settled=self._settled)
            return
        self._settled = seq
        self._raw = result.items
        self._raw_query = query
        self._server_page = result.pagination
        self._page = self._derive(query)
        self._error = None
        newer_pending = any(other > seq for other in self._in_flight)
        self._state = ListState.REFRESHING if newer_pending else ListState.READY
        self._log.info(
            "list_fetch_applied",
            seq=seq,
            fetched=len(result.items),
            total=self._page.total_items,
        )
        self._publish()

    def _fail(self, seq: int, message: str) -> None:
        if seq != self._issued or seq <= self._settled:
            self._log.debug("list_fetch_failure_discarded", seq=seq, error=message)
            return
        self._settled = seq
        # The last good page stays visible
        self._error = message
        self._state = ListState.ERROR
        self._log.warning("list_fetch_failed", seq=seq, error=message)
        self.notifier.error(f"Failed to fetch {self.config.label}: {message}")
        self._publish()

    def _derive(self, query: ListQuery) -> PageResult[T]:
        if self.config.server_paging and self._server_page is not None:
            return from_server(self._raw, self._server_page, query.page_size)

        client_filters = {
            name: value
            for name, value in query.filters.items()
            if name not in self.config.server_filters
        }
        filtered = filter_collection(
            self._raw,
            "" if self.config.server_search else query.search_term,
            client_filters,
            search_fields=self.config.search_fields,
            filter_fields=self.config.filter_fields,
            lookup=self._lookup,
        )
        return paginate(filtered, query.page, query.page_size)

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
