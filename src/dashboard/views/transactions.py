"""Transaction history: capped fetch, client-side search, filters and paging.

The wallet filter is applied by the backend (``walletAddress``); type and
status are matched locally against the fetched transactions.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from dashboard.config import Settings, settings
from dashboard.http.session import ApiSession
from dashboard.listing.controller import ListConfig, ListController
from dashboard.listing.fetcher import FetchRequest, FetchResult
from dashboard.listing.query import ALL
from dashboard.notifications import Notifier
from dashboard.repositories.collection import Resource, fetch_collection
from dashboard.schemas.transaction import TRANSACTION_STATUSES, TRANSACTION_TYPES, Transaction

WALLET = "wallet"
TYPE = "type"
STATUS = "status"


def transaction_search_fields(
    tx: Transaction, _lookup: Mapping[str, Any] | None
) -> Iterable[str | None]:
    return (tx.id, tx.from_address, tx.to_address, tx.type, tx.blockchain_tx_hash)


def transaction_config(config: Settings = settings) -> ListConfig[Transaction]:
    return ListConfig(
        label="transactions",
        debounce=config.transaction_search_debounce,
        page_size=config.default_page_size,
        filters={WALLET: ALL, TYPE: ALL, STATUS: ALL},
        server_filters=frozenset({WALLET}),
        search_fields=transaction_search_fields,
        filter_fields={TYPE: lambda tx: tx.type, STATUS: lambda tx: tx.status},
    )


class TransactionsView:
    def __init__(
        self,
        session: ApiSession,
        *,
        config: Settings = settings,
        notifier: Notifier | None = None,
    ) -> None:
        self.session = session
        self.fetch_limit = config.transaction_fetch_limit
        self.list = ListController(self._fetch, transaction_config(config), notifier=notifier)

    async def _fetch(self, request: FetchRequest) -> FetchResult[Transaction]:
        return await fetch_collection(
            self.session,
            Resource.TRANSACTIONS,
            request.page,
            request.page_size,
            wallet_address=request.filters.get(WALLET),
            limit=self.fetch_limit,
        )

    @property
    def filter_by_wallet(self) -> bool:
        return self.list.query.filters.get(WALLET, ALL) != ALL

    async def toggle_wallet_filter(self, account: str | None) -> None:
        """Show only the connected wallet's transactions, or everything again."""
        if self.filter_by_wallet or not account:
            await self.list.set_filter(WALLET, ALL)
        else:
            await self.list.set_filter(WALLET, account)

    async def set_type(self, value: str) -> None:
        if value != ALL and value not in TRANSACTION_TYPES:
            raise ValueError(f"Unknown transaction type: {value}")
        await self.list.set_filter(TYPE, value)

    async def set_status(self, value: str) -> None:
        if value != ALL and value not in TRANSACTION_STATUSES:
            raise ValueError(f"Unknown transaction status: {value}")
        await self.list.set_filter(STATUS, value)

    async def mount(self) -> None:
        await self.list.mount()

    def close(self) -> None:
        self.list.close()
