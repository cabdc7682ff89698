"""Consent mutations: signed creation and status changes.

Foreseeable failures (no wallet, empty form) are raised before any network
call. The list controller decides what the user sees.
"""

import secrets
from dataclasses import dataclass

from dashboard.exceptions import ValidationError
from dashboard.formatting import format_patient_option
from dashboard.http.session import ApiSession
from dashboard.logging import get_logger
from dashboard.repositories.collection import Resource, create_item, update_item
from dashboard.schemas.consent import CONSENT_STATUSES, Consent
from dashboard.schemas.patient import Patient
from dashboard.wallet import Signer, consent_message, require_wallet

logger = get_logger(__name__)


@dataclass
class ConsentForm:
    """State of the "new consent" form."""

    selected_patient: Patient | None = None
    purpose: str = ""

    def missing_fields(self) -> list[str]:
        missing = []
        if self.selected_patient is None:
            missing.append("patient")
        if not self.purpose.strip():
            missing.append("purpose")
        return missing

    @property
    def patient_label(self) -> str:
        """What the patient dropdown shows for the current selection."""
        return format_patient_option(self.selected_patient) if self.selected_patient else ""


def check_form(form: ConsentForm) -> Patient:
    missing = form.missing_fields()
    if missing or form.selected_patient is None:
        raise ValidationError("Please fill in all fields", fields=missing)
    return form.selected_patient


async def sign_and_create(
    session: ApiSession,
    form: ConsentForm,
    account: str | None,
    signer: Signer | None,
) -> Consent:
    """Have the wallet sign the consent text, then store the consent."""
    account, signer = require_wallet(account, signer)
    patient = check_form(form)

    signature = await signer.sign_message(consent_message(form.purpose, patient.patient_id))
    payload = {
        "patient_id": patient.id,
        "purpose": form.purpose,
        "wallet_address": account,
        "signature": signature,
    }
    consent: Consent = await create_item(session, Resource.CONSENTS, payload)
    logger.info("consent_created", consent_id=consent.id, patient_id=patient.id)
    return consent


def approval_tx_hash() -> str:
    """Placeholder chain transaction hash recorded when a consent becomes active."""
    return "0x" + secrets.token_hex(32)


async def change_status(session: ApiSession, consent_id: str, status: str) -> Consent:
    if status not in CONSENT_STATUSES:
        raise ValidationError(f"Unknown consent status: {status}", fields=["status"])
    patch = {
        "status": status,
        "blockchain_tx_hash": approval_tx_hash() if status == "active" else None,
    }
    consent: Consent = await update_item(session, Resource.CONSENTS, consent_id, patch)
    logger.info("consent_status_changed", consent_id=consent_id, status=status)
    return consent
