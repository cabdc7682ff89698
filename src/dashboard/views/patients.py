"""Patient list: searched and paged by the backend."""

from dashboard.config import Settings, settings
from dashboard.http.session import ApiSession
from dashboard.listing.controller import ListConfig, ListController
from dashboard.listing.fetcher import FetchRequest, FetchResult
from dashboard.listing.selection import DetailLoader
from dashboard.notifications import Notifier
from dashboard.repositories.collection import Resource, fetch_collection
from dashboard.schemas.patient import Patient
from dashboard.services.detail import PatientDetail, load_patient_detail


def patient_config(config: Settings = settings) -> ListConfig[Patient]:
    return ListConfig(
        label="patients",
        debounce=config.patient_search_debounce,
        page_size=config.default_page_size,
        server_search=True,
        server_paging=True,
    )


class PatientsView:
    def __init__(
        self,
        session: ApiSession,
        *,
        config: Settings = settings,
        notifier: Notifier | None = None,
    ) -> None:
        self.session = session
        self.list = ListController(self._fetch, patient_config(config), notifier=notifier)
        self.detail: DetailLoader[PatientDetail] = DetailLoader(
            lambda patient_id: load_patient_detail(session, patient_id), label="patient"
        )

    async def _fetch(self, request: FetchRequest) -> FetchResult[Patient]:
        return await fetch_collection(
            self.session, Resource.PATIENTS, request.page, request.page_size, request.search_term
        )

    async def mount(self) -> None:
        await self.list.mount()

    def close(self) -> None:
        self.list.close()
        self.detail.close()
