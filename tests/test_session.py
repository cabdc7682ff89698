"""Tests for the HTTP session and repositories against the stub backend."""

import httpx
import pytest

from dashboard.exceptions import NotFoundError, TransportError, ValidationError
from dashboard.http.session import REQUEST_ID_HEADER, ApiSession
from dashboard.repositories import collection
from dashboard.repositories.collection import Resource
from dashboard.repositories.consent import get_consent, list_consents
from dashboard.repositories.patient import get_patient, list_patient_records, list_patients
from dashboard.repositories.transaction import list_transactions
from dashboard.schemas.error import error_message
from tests.stub_backend import BackendStore


@pytest.mark.asyncio
async def test_list_patients_returns_page_and_metadata(
    session: ApiSession, seeded_store: BackendStore
) -> None:
    response = await list_patients(session, 1, 2)
    assert [p.name for p in response.patients] == ["John Smith", "Jane Doe"]
    assert response.pagination is not None
    assert response.pagination.total == 3
    assert response.pagination.total_pages == 2


@pytest.mark.asyncio
async def test_empty_search_is_not_sent(session: ApiSession, seeded_store: BackendStore) -> None:
    await list_patients(session, 1, 10, "")
    await list_patients(session, 1, 10, "john")
    assert seeded_store.calls("/api/patients") == [
        {"page": "1", "limit": "10"},
        {"page": "1", "limit": "10", "search": "john"},
    ]


@pytest.mark.asyncio
async def test_consent_filters_become_query_params(
    session: ApiSession, seeded_store: BackendStore
) -> None:
    consents = await list_consents(session, status="revoked")
    assert [c.id for c in consents] == ["c-4"]
    assert seeded_store.calls("/api/consents") == [{"status": "revoked"}]


@pytest.mark.asyncio
async def test_records_and_wallet_transactions(
    session: ApiSession, seeded_store: BackendStore
) -> None:
    records = await list_patient_records(session, "p-1")
    assert [r.title for r in records] == ["Blood panel", "Chest X-ray"]

    transactions = await list_transactions(
        session, wallet_address="0x1111111111111111111111111111111111111111", limit=3
    )
    assert [tx.id for tx in transactions] == ["tx-1", "tx-2", "tx-3"]
    assert transactions[0].from_address == "0x1111111111111111111111111111111111111111"


@pytest.mark.asyncio
async def test_missing_entity_raises_not_found(session: ApiSession, seeded_store: BackendStore) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        await get_patient(session, "p-999")
    assert excinfo.value.entity == "Patient"
    assert excinfo.value.identifier == "p-999"

    with pytest.raises(NotFoundError):
        await get_consent(session, "c-999")


@pytest.mark.asyncio
async def test_rejected_payload_raises_validation_error_with_backend_message(
    session: ApiSession, seeded_store: BackendStore
) -> None:
    with pytest.raises(ValidationError) as excinfo:
        await session.post("/consents", json={"patientId": "p-1", "purpose": ""})
    assert excinfo.value.message == "Missing fields: purpose, walletAddress, signature"


@pytest.mark.asyncio
async def test_server_error_raises_transport_error(session: ApiSession, store: BackendStore) -> None:
    store.outage = 503
    with pytest.raises(TransportError) as excinfo:
        await list_consents(session)
    assert excinfo.value.status_code == 503
    assert excinfo.value.message == "Service unavailable"


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    session = ApiSession("http://test/api", transport=httpx.MockTransport(refuse))
    with pytest.raises(TransportError) as excinfo:
        await list_transactions(session)
    assert excinfo.value.status_code is None
    assert "Connection refused" in excinfo.value.message
    await session.aclose()


@pytest.mark.asyncio
async def test_malformed_payload_raises_transport_error() -> None:
    def garbage(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"patients": [{"name": "no id"}]})

    session = ApiSession("http://test/api", transport=httpx.MockTransport(garbage))
    with pytest.raises(TransportError):
        await list_patients(session, 1, 10)
    await session.aclose()


@pytest.mark.asyncio
async def test_every_request_carries_a_fresh_request_id() -> None:
    seen: list[str] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers[REQUEST_ID_HEADER])
        return httpx.Response(200, json={"transactions": []})

    session = ApiSession("http://test/api", transport=httpx.MockTransport(record))
    await list_transactions(session)
    await list_transactions(session)
    await session.aclose()

    assert len(seen) == 2
    assert seen[0] != seen[1]


@pytest.mark.asyncio
async def test_fetch_collection_pages_patients_on_the_server(
    session: ApiSession, seeded_store: BackendStore
) -> None:
    result = await collection.fetch_collection(session, Resource.PATIENTS, 2, 2, "j")
    assert [p.id for p in result.items] == ["p-3"]
    assert result.pagination is not None
    assert result.pagination.total == 3


@pytest.mark.asyncio
async def test_fetch_collection_returns_whole_consent_listing(
    session: ApiSession, seeded_store: BackendStore
) -> None:
    result = await collection.fetch_collection(session, Resource.CONSENTS, 1, 2, status="active")
    assert [c.id for c in result.items] == ["c-1", "c-3", "c-5", "c-7"]
    assert result.pagination is None


@pytest.mark.asyncio
async def test_generic_create_and_update(session: ApiSession, seeded_store: BackendStore) -> None:
    created = await collection.create_item(
        session,
        Resource.CONSENTS,
        {"patientId": "p-2", "purpose": "Audit", "walletAddress": "0xabc", "signature": "0xsig"},
    )
    assert created.status == "pending"

    updated = await collection.update_item(
        session, Resource.CONSENTS, created.id, {"status": "revoked"}
    )
    assert updated.status == "revoked"
    assert (await collection.fetch_by_id(session, Resource.CONSENTS, created.id)).status == "revoked"


@pytest.mark.asyncio
async def test_generic_create_rejects_incomplete_payload_before_sending(
    session: ApiSession, store: BackendStore
) -> None:
    with pytest.raises(ValidationError):
        await collection.create_item(session, Resource.CONSENTS, {"purpose": "Audit"})
    assert store.requests == []


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"error": {"code": "not_found", "message": "gone"}}, "gone"),
        ({"error": "plain text"}, "plain text"),
        ({"message": "other shape"}, "other shape"),
        ({"unrelated": 1}, None),
        (["not", "a", "dict"], None),
    ],
)
def test_error_message_shapes(body: object, expected: str | None) -> None:
    assert error_message(body) == expected
