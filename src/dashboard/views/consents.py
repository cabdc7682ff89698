"""Consent management: the list, the detail overlay and the signed mutations.

Consents come back whole from the backend (narrowed by status on the server)
and are searched and paged here. Search covers the patient's name, which the
consent does not carry, so the view keeps a patient lookup built on mount.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from dashboard.config import Settings, settings
from dashboard.exceptions import DashboardError
from dashboard.http.session import ApiSession
from dashboard.listing.controller import ListConfig, ListController
from dashboard.listing.fetcher import FetchRequest, FetchResult
from dashboard.listing.query import ALL
from dashboard.listing.selection import DetailLoader
from dashboard.logging import get_logger
from dashboard.notifications import Notifier
from dashboard.repositories.collection import Resource, fetch_collection
from dashboard.repositories.patient import list_patients
from dashboard.schemas.consent import Consent
from dashboard.schemas.patient import Patient
from dashboard.services.consent import ConsentForm, change_status, sign_and_create
from dashboard.services.detail import ConsentDetail, load_consent_detail
from dashboard.wallet import Signer

logger = get_logger(__name__)

STATUS = "status"


def consent_search_fields(
    consent: Consent, lookup: Mapping[str, Any] | None
) -> Iterable[str | None]:
    patient = lookup.get(consent.patient_id) if lookup else None
    return (consent.patient_id, patient.name if patient else None, consent.purpose)


def consent_config(config: Settings = settings) -> ListConfig[Consent]:
    return ListConfig(
        label="consents",
        debounce=config.consent_search_debounce,
        page_size=config.default_page_size,
        filters={STATUS: ALL},
        server_filters=frozenset({STATUS}),
        search_fields=consent_search_fields,
    )


class ConsentsView:
    def __init__(
        self,
        session: ApiSession,
        *,
        config: Settings = settings,
        notifier: Notifier | None = None,
    ) -> None:
        self.session = session
        self.lookup_limit = config.patient_lookup_limit
        self.option_limit = config.patient_option_limit
        self.list = ListController(self._fetch, consent_config(config), notifier=notifier)
        self.notifier = self.list.notifier
        self.detail: DetailLoader[ConsentDetail] = DetailLoader(
            lambda consent_id: load_consent_detail(session, consent_id), label="consent"
        )
        self.form = ConsentForm()
        self.show_form = False
        self.creating = False

    async def _fetch(self, request: FetchRequest) -> FetchResult[Consent]:
        return await fetch_collection(
            self.session,
            Resource.CONSENTS,
            request.page,
            request.page_size,
            status=request.filters.get(STATUS),
        )

    async def mount(self) -> None:
        """Build the patient lookup, then load the first page of consents."""
        self.list.set_lookup(await self.load_patient_lookup())
        await self.list.mount()

    def close(self) -> None:
        self.list.close()
        self.detail.close()

    async def load_patient_lookup(self) -> dict[str, Patient]:
        """Patient id -> patient. On failure the list still loads, just without names."""
        try:
            response = await list_patients(self.session, 1, self.lookup_limit)
        except DashboardError as exc:
            logger.error("patient_lookup_failed", error=exc.message)
            return {}
        return {patient.id: patient for patient in response.patients}

    async def refresh_lookup(self) -> None:
        self.list.set_lookup(await self.load_patient_lookup())

    async def patient_options(self, text: str) -> list[Patient]:
        """Candidates for the form's patient dropdown."""
        try:
            response = await list_patients(self.session, 1, self.option_limit, text)
        except DashboardError as exc:
            logger.error("patient_options_failed", error=exc.message)
            return []
        return response.patients

    async def set_status_filter(self, value: str) -> None:
        await self.list.set_filter(STATUS, value)

    def toggle_form(self) -> None:
        self.show_form = not self.show_form
        self.form = ConsentForm()

    async def create_consent(self, account: str | None, signer: Signer | None) -> Consent | None:
        """Sign and store the form. No wallet or an incomplete form ends in a warning before signing."""
        self.creating = True
        try:
            consent = await self.list.mutate(
                lambda: sign_and_create(self.session, self.form, account, signer),
                success="Consent created successfully!",
                failure="Failed to create consent",
            )
        finally:
            self.creating = False
        if consent is not None:
            self.show_form = False
            self.form = ConsentForm()
        return consent

    async def update_status(self, consent_id: str, status: str) -> Consent | None:
        return await self.list.mutate(
            lambda: change_status(self.session, consent_id, status),
            success=f"Consent status updated to {status}",
            failure="Failed to update consent",
        )
