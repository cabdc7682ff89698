"""Display-only helpers. Pure: same input, same output; missing values render as "N/A"."""

from datetime import date, datetime
from typing import Final

from dashboard.schemas.patient import Patient

MISSING: Final = "N/A"


def _parse(value: str | date | datetime) -> datetime | date | None:
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def format_date(value: str | date | datetime | None, *, with_time: bool = True) -> str:
    """``"March 5, 2024, 02:30 PM"``, or ``"March 5, 2024"`` without time.

    Unparseable strings are returned unchanged.
    """
    if not value:
        return MISSING
    parsed = _parse(value)
    if parsed is None:
        return str(value)
    text = f"{parsed:%B} {parsed.day}, {parsed.year}"
    if with_time and isinstance(parsed, datetime):
        text += f", {parsed:%I:%M %p}"
    return text


def truncate_hash(value: str | None) -> str:
    """``0x12345678...9abcdef0`` for anything longer than 20 characters."""
    if not value:
        return MISSING
    if len(value) <= 20:
        return value
    return f"{value[:10]}...{value[-8:]}"


# Wallet addresses in tables are shortened the same way
format_address = truncate_hash


def truncate_address(value: str | None) -> str:
    """Compact form used on patient cards: ``0x1234...abcd``."""
    if not value:
        return MISSING
    return f"{value[:6]}...{value[-4:]}"


def format_patient_option(patient: Patient) -> str:
    return f"{patient.name} (Patient ID: {patient.patient_id})"


def format_type_label(value: str | None) -> str:
    """``consent_approval`` -> ``Consent Approval``."""
    if not value:
        return MISSING
    return " ".join(word[:1].upper() + word[1:] for word in value.split("_"))


def item_label(label: str | None, total: int) -> str:
    """Singular for exactly one item, naive plural otherwise."""
    if not label:
        return "items"
    return label if total == 1 else f"{label}s"
