"""Resource-generic access used by list controllers and detail overlays.

``fetch_collection`` / ``fetch_by_id`` / ``create_item`` / ``update_item`` dispatch
on the resource kind to the per-resource functions, so a controller can be
wired to any listing without knowing its endpoint shape.
"""

from enum import StrEnum
from typing import Any

from dashboard.exceptions import ValidationError
from dashboard.http.session import ApiSession
from dashboard.listing.fetcher import FetchResult
from dashboard.repositories import consent as consent_repo
from dashboard.repositories import patient as patient_repo
from dashboard.repositories import transaction as transaction_repo
from dashboard.schemas.consent import ConsentCreate, ConsentUpdate
from dashboard.schemas.pagination import ServerPagination


class Resource(StrEnum):
    PATIENTS = "patients"
    CONSENTS = "consents"
    TRANSACTIONS = "transactions"


async def fetch_collection(
    session: ApiSession,
    kind: Resource,
    page: int,
    page_size: int,
    search_term: str | None = None,
    status: str | None = None,
    *,
    wallet_address: str | None = None,
    limit: int = 20,
) -> FetchResult[Any]:
    """Fetch one listing.

    Patients are paged and searched by the backend, so ``pagination`` is set.
    Consents and transactions come back whole (transactions capped at ``limit``)
    and ``pagination`` is None: the caller pages them itself.
    """
    match kind:
        case Resource.PATIENTS:
            response = await patient_repo.list_patients(session, page, page_size, search_term)
            pagination = response.pagination or ServerPagination(
                page=page,
                limit=page_size,
                total=len(response.patients),
                total_pages=1 if response.patients else 0,
            )
            return FetchResult(items=tuple(response.patients), pagination=pagination)
        case Resource.CONSENTS:
            consents = await consent_repo.list_consents(session, status=status)
            return FetchResult(items=tuple(consents))
        case Resource.TRANSACTIONS:
            transactions = await transaction_repo.list_transactions(
                session, wallet_address=wallet_address, limit=limit
            )
            return FetchResult(items=tuple(transactions))
    raise ValueError(f"Unknown resource: {kind}")


async def fetch_by_id(session: ApiSession, kind: Resource, identifier: str) -> Any:
    match kind:
        case Resource.PATIENTS:
            return await patient_repo.get_patient(session, identifier)
        case Resource.CONSENTS:
            return await consent_repo.get_consent(session, identifier)
    raise ValueError(f"{kind} cannot be fetched by id")


async def create_item(session: ApiSession, kind: Resource, payload: dict[str, Any]) -> Any:
    if kind != Resource.CONSENTS:
        raise ValueError(f"{kind} cannot be created from the dashboard")
    try:
        body = ConsentCreate.model_validate(payload)
    except ValueError as exc:
        raise ValidationError("Please fill in all fields") from exc
    return await consent_repo.create_consent(session, body)


async def update_item(
    session: ApiSession, kind: Resource, identifier: str, patch: dict[str, Any]
) -> Any:
    if kind != Resource.CONSENTS:
        raise ValueError(f"{kind} cannot be updated from the dashboard")
    try:
        body = ConsentUpdate.model_validate(patch)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    return await consent_repo.update_consent(session, identifier, body)
