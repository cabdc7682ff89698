"""Patient data-access layer.

Pure request functions: no state, no UI concerns.
Each function takes a session and returns schema models.
"""

from dashboard.http.session import ApiSession, decode
from dashboard.schemas.patient import MedicalRecord, Patient, PatientListResponse, RecordListResponse


async def list_patients(
    session: ApiSession, page: int, limit: int, search: str | None = None
) -> PatientListResponse:
    """Return one server-side page of patients, optionally filtered by a search term."""
    body = await session.get(
        "/patients", params={"page": page, "limit": limit, "search": search or None}
    )
    return decode(PatientListResponse, body)


async def get_patient(session: ApiSession, patient_id: str) -> Patient:
    body = await session.get(f"/patients/{patient_id}", entity="Patient", identifier=patient_id)
    return decode(Patient, body)


async def list_patient_records(session: ApiSession, patient_id: str) -> list[MedicalRecord]:
    body = await session.get(
        f"/patients/{patient_id}/records", entity="Patient", identifier=patient_id
    )
    return decode(RecordListResponse, body).records
