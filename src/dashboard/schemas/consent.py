"""Consent payloads."""

from datetime import datetime
from typing import Final

from pydantic import Field

from dashboard.schemas.base import ApiModel

CONSENT_STATUSES: Final = ("pending", "active", "revoked")


class Consent(ApiModel):
    id: str
    patient_id: str
    purpose: str
    status: str = "pending"
    wallet_address: str | None = None
    signature: str | None = None
    blockchain_tx_hash: str | None = None
    created_at: datetime | None = None


class ConsentCreate(ApiModel):
    """Body of ``POST /consents``. The signature covers the consent message."""

    patient_id: str
    purpose: str
    wallet_address: str
    signature: str


class ConsentUpdate(ApiModel):
    """Body of ``PATCH /consents/{id}``."""

    status: str
    blockchain_tx_hash: str | None = None


class ConsentListResponse(ApiModel):
    """Body of ``GET /consents``."""

    consents: list[Consent] = Field(default_factory=list)
