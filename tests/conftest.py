from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport

from dashboard.config import Settings
from dashboard.http.session import ApiSession
from dashboard.notifications import Notifier
from tests.stub_backend import BackendStore, create_stub_app

# Pytest only picks up fixtures from conftest.py files. Fixtures defined in other
# modules (like tests/seeds.py) are invisible unless we register them here.
pytest_plugins = ["tests.seeds"]

TEST_API_URL = "http://test/api"


@pytest.fixture
def config() -> Settings:
    """Settings with short debounce intervals; ignores any local .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        api_base_url=TEST_API_URL,
        consent_search_debounce=0.02,
        transaction_search_debounce=0.02,
        patient_search_debounce=0.01,
        default_page_size=10,
        transaction_fetch_limit=20,
    )


@pytest.fixture
def store() -> BackendStore:
    """Empty backend; see tests/seeds.py for populated variants."""
    return BackendStore()


@pytest.fixture
def transport(store: BackendStore) -> ASGITransport:
    return ASGITransport(app=create_stub_app(store))


@pytest_asyncio.fixture
async def session(transport: ASGITransport) -> AsyncIterator[ApiSession]:
    """API session wired to the in-memory backend."""
    session = ApiSession(TEST_API_URL, transport=transport)
    yield session
    await session.aclose()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()
