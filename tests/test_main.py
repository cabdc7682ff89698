import pytest
from httpx import ASGITransport

from dashboard.config import Settings
from dashboard.listing.query import ListState
from dashboard.main import open_dashboard
from tests.stub_backend import BackendStore


@pytest.mark.asyncio
async def test_views_share_session_and_notifier(
    config: Settings, transport: ASGITransport, seeded_store: BackendStore
) -> None:
    async with open_dashboard(config, transport=transport) as dashboard:
        assert dashboard.consents.notifier is dashboard.notifier
        assert dashboard.patients.list.notifier is dashboard.notifier
        assert dashboard.transactions.session is dashboard.session

        await dashboard.patients.mount()
        await dashboard.transactions.mount()

        assert dashboard.patients.list.state is ListState.READY
        assert dashboard.transactions.list.state is ListState.READY


@pytest.mark.asyncio
async def test_failures_from_any_view_land_in_one_tray(
    config: Settings, transport: ASGITransport, seeded_store: BackendStore
) -> None:
    seeded_store.outage = 503
    async with open_dashboard(config, transport=transport) as dashboard:
        await dashboard.patients.mount()
        await dashboard.transactions.mount()

    assert [n.message for n in dashboard.notifier.notifications] == [
        "Failed to fetch patients: Service unavailable",
        "Failed to fetch transactions: Service unavailable",
    ]


@pytest.mark.asyncio
async def test_close_cancels_pending_search(
    config: Settings, transport: ASGITransport, seeded_store: BackendStore
) -> None:
    async with open_dashboard(config, transport=transport) as dashboard:
        await dashboard.transactions.mount()
        dashboard.transactions.list.on_input("tx-2")

    await dashboard.transactions.list.settle()
    assert dashboard.transactions.list.query.search_term == ""
    assert len(seeded_store.calls("/api/transactions")) == 1
