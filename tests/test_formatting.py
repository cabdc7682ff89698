from datetime import UTC, date, datetime

import pytest

from dashboard.formatting import (
    MISSING,
    format_address,
    format_date,
    format_patient_option,
    format_type_label,
    item_label,
    truncate_address,
    truncate_hash,
)
from dashboard.services.consent import ConsentForm
from tests.factories import make_patient


def test_format_date_with_and_without_time() -> None:
    assert format_date("2024-03-05T14:30:00Z") == "March 5, 2024, 02:30 PM"
    assert format_date(datetime(2024, 3, 5, 9, 5, tzinfo=UTC)) == "March 5, 2024, 09:05 AM"
    assert format_date("2024-03-05T14:30:00Z", with_time=False) == "March 5, 2024"
    assert format_date(date(1980, 4, 12)) == "April 12, 1980"


@pytest.mark.parametrize("value", [None, ""])
def test_missing_values_render_placeholder(value: str | None) -> None:
    assert format_date(value) == MISSING
    assert truncate_hash(value) == MISSING
    assert format_address(value) == MISSING
    assert format_type_label(value) == MISSING


def test_unparseable_date_is_returned_as_is() -> None:
    assert format_date("last tuesday") == "last tuesday"


def test_truncate_hash() -> None:
    tx_hash = "0x" + "ab" * 32
    assert truncate_hash(tx_hash) == "0xabababab...abababab"
    assert truncate_hash("0x1234") == "0x1234"
    assert format_address("0x1111111111111111111111111111111111111111") == "0x11111111...11111111"


def test_type_label() -> None:
    assert format_type_label("consent_approval") == "Consent Approval"
    assert format_type_label("data_access") == "Data Access"


def test_item_label() -> None:
    assert item_label("consent", 1) == "consent"
    assert item_label("consent", 0) == "consents"
    assert item_label("consent", 7) == "consents"
    assert item_label(None, 3) == "items"


def test_truncate_address_for_patient_cards() -> None:
    assert truncate_address("0x1111111111111111111111111111111111112345") == "0x1111...2345"
    assert truncate_address(None) == MISSING


def test_patient_option_label() -> None:
    patient = make_patient(name="Jane Doe", patient_id="PAT-0002")
    assert format_patient_option(patient) == "Jane Doe (Patient ID: PAT-0002)"

    form = ConsentForm()
    assert form.patient_label == ""
    form.selected_patient = patient
    assert form.patient_label == "Jane Doe (Patient ID: PAT-0002)"
