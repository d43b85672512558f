"""Firestore document repository against a mocked REST API (httpx.MockTransport)."""

import json
from datetime import UTC, datetime
from types import SimpleNamespace

import httpx
import pytest
from google.auth.exceptions import RefreshError

from app.domain.value_objects.core import StoredFile
from app.infrastructure.exceptions import RecordStoreException
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.repositories import FirestoreDocumentRepository
from tests.fakes import make_fields

BASE = "https://firestore.test/v1"
PARENT = "projects/demo/databases/(default)/documents"
COLLECTION = f"{PARENT}/documents"


def _repo(handler, credentials=None) -> FirestoreDocumentRepository:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    credentials = credentials or SimpleNamespace(valid=True, token="test-token")
    client = FirestoreRESTClient("demo", credentials, http_client=http, base_url=BASE)
    return FirestoreDocumentRepository(client)


def _stored_doc(doc_id: str, received: str, **extra: str) -> dict:
    fields = {
        "complainantName": {"stringValue": "Somchai"},
        "subject": {"stringValue": "Late submission"},
        "source": {"stringValue": "HR"},
        "receivedDate": {"timestampValue": received},
        "notes": {"stringValue": ""},
    }
    fields.update({k: {"stringValue": v} for k, v in extra.items()})
    return {"name": f"{COLLECTION}/{doc_id}", "fields": fields}


async def test_create_posts_fields_and_returns_assigned_id() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"name": f"{COLLECTION}/abc123"})

    doc_id = await _repo(handler).create(make_fields(notes="first"))
    assert doc_id == "abc123"
    assert seen["method"] == "POST"
    assert seen["url"] == f"{BASE}/{COLLECTION}"
    assert seen["auth"] == "Bearer test-token"
    fields = seen["body"]["fields"]
    assert fields["complainantName"] == {"stringValue": "Somchai"}
    assert fields["receivedDate"] == {"timestampValue": "2024-03-10T09:30:00.000000Z"}
    assert "fileName" not in fields


async def test_list_orders_by_received_date_descending() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json=[
                {"document": _stored_doc("new", "2024-03-10T09:30:00.123456789Z")},
                {
                    "document": _stored_doc(
                        "old",
                        "2024-01-01T00:00:00Z",
                        fileName="a.pdf",
                        fileUrl="https://files.test/a",
                        filePath="documents/old/1.pdf",
                    )
                },
                {"readTime": "2024-03-11T00:00:00Z"},
            ],
        )

    docs = await _repo(handler).list()
    assert seen["url"] == f"{BASE}/{PARENT}:runQuery"
    query = seen["body"]["structuredQuery"]
    assert query["from"] == [{"collectionId": "documents"}]
    assert query["orderBy"] == [{"field": {"fieldPath": "receivedDate"}, "direction": "DESCENDING"}]
    assert "limit" not in query
    assert [d.id for d in docs] == ["new", "old"]
    assert docs[0].received_date == datetime(2024, 3, 10, 9, 30, 0, 123456, tzinfo=UTC)
    assert docs[0].file is None
    assert docs[1].file == StoredFile("a.pdf", "https://files.test/a", "documents/old/1.pdf")


async def test_partial_file_fields_load_without_file(caplog: pytest.LogCaptureFixture) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_stored_doc("d", "2024-01-01T00:00:00Z", fileName="a.pdf"))

    doc = await _repo(handler).get("d")
    assert doc is not None
    assert doc.file is None
    assert "partial file fields" in caplog.text


async def test_get_missing_returns_none() -> None:
    doc = await _repo(lambda request: httpx.Response(404, json={})).get("missing")
    assert doc is None


async def test_update_sends_field_mask_and_requires_existence() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["params"] = request.url.params
        return httpx.Response(200, json=_stored_doc("d", "2024-01-01T00:00:00Z"))

    assert await _repo(handler).update("d", make_fields()) is True
    assert seen["method"] == "PATCH"
    assert sorted(seen["params"].get_list("updateMask.fieldPaths")) == [
        "complainantName",
        "notes",
        "receivedDate",
        "source",
        "subject",
    ]
    assert seen["params"]["currentDocument.exists"] == "true"


async def test_update_missing_document_returns_false() -> None:
    assert await _repo(lambda request: httpx.Response(404, json={})).update("x", make_fields()) is False


async def test_attach_file_masks_only_file_fields() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = request.url.params
        return httpx.Response(200, json={})

    stored = StoredFile("a.pdf", "https://files.test/a", "documents/d/1.pdf")
    assert await _repo(handler).attach_file("d", stored) is True
    assert sorted(seen["params"].get_list("updateMask.fieldPaths")) == ["fileName", "filePath", "fileUrl"]


async def test_delete_is_idempotent() -> None:
    await _repo(lambda request: httpx.Response(404, json={})).delete("missing")


async def test_server_error_becomes_record_store_exception() -> None:
    with pytest.raises(RecordStoreException) as exc_info:
        await _repo(lambda request: httpx.Response(503, json={})).list()
    assert exc_info.value.details["operation"] == "list"


async def test_transport_error_becomes_record_store_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RecordStoreException):
        await _repo(handler).create(make_fields())


async def test_undecodable_record_on_get_becomes_record_store_exception() -> None:
    broken = _stored_doc("d", "2024-01-01T00:00:00Z")
    del broken["fields"]["subject"]

    with pytest.raises(RecordStoreException) as exc_info:
        await _repo(lambda request: httpx.Response(200, json=broken)).get("d")
    assert exc_info.value.details["operation"] == "get"


async def test_list_skips_invalid_records(caplog: pytest.LogCaptureFixture) -> None:
    blank = _stored_doc("blank", "2024-02-01T00:00:00Z")
    blank["fields"]["complainantName"] = {"stringValue": "   "}
    rows = [
        {"document": _stored_doc("good", "2024-03-01T00:00:00Z")},
        {"document": blank},
    ]

    docs = await _repo(lambda request: httpx.Response(200, json=rows)).list()
    assert [d.id for d in docs] == ["good"]
    assert "Skipping invalid document blank" in caplog.text


async def test_token_refresh_failure_becomes_record_store_exception() -> None:
    def refresh(request) -> None:
        raise RefreshError("invalid_grant: account disabled")

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request should be sent without a token")

    credentials = SimpleNamespace(valid=False, token=None, refresh=refresh)
    repo = _repo(handler, credentials)
    for call in (repo.list(), repo.get("d"), repo.delete("d"), repo.update("d", make_fields())):
        with pytest.raises(RecordStoreException):
            await call
