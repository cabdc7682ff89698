"""Patient and medical record payloads."""

from pydantic import Field

from dashboard.schemas.base import ApiModel
from dashboard.schemas.pagination import ServerPagination


class Patient(ApiModel):
    """A patient as listed by ``GET /patients``.

    ``id`` is the backend record id (what consents reference); ``patient_id`` is
    the human-facing identifier printed on cards.
    """

    id: str
    patient_id: str
    name: str
    date_of_birth: str | None = None
    gender: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    wallet_address: str | None = None


class MedicalRecord(ApiModel):
    id: str
    patient_id: str | None = None
    title: str = ""
    type: str | None = None
    description: str | None = None
    doctor: str | None = None
    hospital: str | None = None
    date: str | None = None
    status: str | None = None
    blockchain_hash: str | None = None


class PatientListResponse(ApiModel):
    """Body of ``GET /patients``."""

    patients: list[Patient] = Field(default_factory=list)
    pagination: ServerPagination | None = None


class RecordListResponse(ApiModel):
    """Body of ``GET /patients/{id}/records``."""

    records: list[MedicalRecord] = Field(default_factory=list)
