"""Consent data-access layer."""

from typing import Any

from dashboard.http.session import ApiSession, decode
from dashboard.schemas.consent import Consent, ConsentCreate, ConsentListResponse, ConsentUpdate


def _unwrap(body: Any) -> Any:
    # Mutations answer either the consent itself or {"consent": {...}}
    if isinstance(body, dict) and isinstance(body.get("consent"), dict):
        return body["consent"]
    return body


async def list_consents(
    session: ApiSession, patient_id: str | None = None, status: str | None = None
) -> list[Consent]:
    """Return every consent, optionally narrowed to one patient and/or status."""
    body = await session.get("/consents", params={"patientId": patient_id, "status": status})
    return decode(ConsentListResponse, body).consents


async def get_consent(session: ApiSession, consent_id: str) -> Consent:
    body = await session.get(f"/consents/{consent_id}", entity="Consent", identifier=consent_id)
    return decode(Consent, _unwrap(body))


async def create_consent(session: ApiSession, payload: ConsentCreate) -> Consent:
    body = await session.post("/consents", json=payload.model_dump(by_alias=True))
    return decode(Consent, _unwrap(body))


async def update_consent(session: ApiSession, consent_id: str, patch: ConsentUpdate) -> Consent:
    body = await session.patch(
        f"/consents/{consent_id}",
        json=patch.model_dump(by_alias=True),
        entity="Consent",
        identifier=consent_id,
    )
    return decode(Consent, _unwrap(body))
