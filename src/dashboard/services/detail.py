"""Loaders behind the patient and consent detail overlays."""

import asyncio
from dataclasses import dataclass

from dashboard.http.session import ApiSession
from dashboard.repositories.collection import Resource, fetch_by_id
from dashboard.repositories.patient import list_patient_records
from dashboard.schemas.consent import Consent
from dashboard.schemas.patient import MedicalRecord, Patient


@dataclass(frozen=True)
class PatientDetail:
    patient: Patient
    records: list[MedicalRecord]


@dataclass(frozen=True)
class ConsentDetail:
    consent: Consent
    patient: Patient
    records: list[MedicalRecord]


async def load_patient_detail(session: ApiSession, patient_id: str) -> PatientDetail:
    """Patient and records are independent, so both requests run concurrently."""
    patient, records = await asyncio.gather(
        fetch_by_id(session, Resource.PATIENTS, patient_id),
        list_patient_records(session, patient_id),
    )
    return PatientDetail(patient=patient, records=records)


async def load_consent_detail(session: ApiSession, consent_id: str) -> ConsentDetail:
    """Consent first: the patient to load is only known from it."""
    consent: Consent = await fetch_by_id(session, Resource.CONSENTS, consent_id)
    patient: Patient = await fetch_by_id(session, Resource.PATIENTS, consent.patient_id)
    records = await list_patient_records(session, consent.patient_id)
    return ConsentDetail(consent=consent, patient=patient, records=records)
