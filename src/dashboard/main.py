from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from dashboard.config import Settings, settings
from dashboard.http.session import ApiSession, create_session
from dashboard.logging import get_logger
from dashboard.notifications import Notifier
from dashboard.views.consents import ConsentsView
from dashboard.views.patients import PatientsView
from dashboard.views.transactions import TransactionsView

logger = get_logger(__name__)


@dataclass
class Dashboard:
    """The three list views, sharing one HTTP session and one notification tray."""

    session: ApiSession
    notifier: Notifier
    patients: PatientsView
    consents: ConsentsView
    transactions: TransactionsView

    def close(self) -> None:
        """Tear down every view (pending search commits, open overlays)."""
        self.patients.close()
        self.consents.close()
        self.transactions.close()


@asynccontextmanager
async def open_dashboard(
    config: Settings = settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[Dashboard]:
    """Lifespan of a dashboard: code before yield runs on startup, after yield on shutdown.

    Views are not mounted here; the host mounts each one when it is shown.
    """
    session = create_session(config, transport=transport)
    notifier = Notifier()
    dashboard = Dashboard(
        session=session,
        notifier=notifier,
        patients=PatientsView(session, config=config, notifier=notifier),
        consents=ConsentsView(session, config=config, notifier=notifier),
        transactions=TransactionsView(session, config=config, notifier=notifier),
    )
    logger.info("dashboard_started", api=config.api_base_url)
    try:
        yield dashboard
    finally:
        dashboard.close()
        await session.aclose()
        logger.info("dashboard_stopped")
