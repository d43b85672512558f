"""Firestore-backed document repository (implements IDocumentRepository)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx
from google.auth.exceptions import GoogleAuthError

from app.domain.entities.document import Document
from app.domain.exceptions import ValidationException
from app.domain.value_objects.core import DocumentFields, StoredFile
from app.infrastructure.exceptions import RecordStoreException
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import (
    COLLECTION_DOCUMENTS,
    FIELD_COMPLAINANT_NAME,
    FIELD_FILE_NAME,
    FIELD_FILE_PATH,
    FIELD_FILE_URL,
    FIELD_NOTES,
    FIELD_RECEIVED_DATE,
    FIELD_SOURCE,
    FIELD_SUBJECT,
)
from app.shared.telemetry.tracing import traced
from app.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

_FILE_FIELDS = (FIELD_FILE_NAME, FIELD_FILE_URL, FIELD_FILE_PATH)

# Token refresh failures come from google-auth, everything else from httpx or decoding.
_STORE_ERRORS = (httpx.HTTPError, GoogleAuthError, ValueError)


def _fields_to_data(fields: DocumentFields) -> dict[str, Any]:
    return {
        FIELD_COMPLAINANT_NAME: fields.complainant_name,
        FIELD_SUBJECT: fields.subject,
        FIELD_SOURCE: fields.source,
        FIELD_RECEIVED_DATE: fields.received_date,
        FIELD_NOTES: fields.notes,
    }


def _parse_received_date(value: Any) -> datetime | None:
    # Older records written by other clients may carry an ISO string.
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    return None


def _to_document(document_id: str, data: dict[str, Any]) -> Document:
    """Build a Document from decoded Firestore fields.

    File fields are all-or-none; a record with only some of them is loaded
    without a file.
    """
    file_values = [data.get(name) for name in _FILE_FIELDS]
    file: StoredFile | None = None
    if all(file_values):
        file = StoredFile(*file_values)
    elif any(file_values):
        logger.warning("Document %s has partial file fields; treating as no file", document_id)

    return Document(
        id=document_id,
        complainant_name=data.get(FIELD_COMPLAINANT_NAME) or "",
        subject=data.get(FIELD_SUBJECT) or "",
        source=data.get(FIELD_SOURCE) or "",
        received_date=_parse_received_date(data.get(FIELD_RECEIVED_DATE)),
        notes=data.get(FIELD_NOTES) or "",
        file=file,
    )


class FirestoreDocumentRepository:
    """Document repository using Firestore collection "documents".

    Every call is a single REST round trip. Transport and credential errors,
    unexpected HTTP statuses and undecodable responses surface as
    RecordStoreException. list() skips individual records that fail
    validation (logged at WARNING) so one bad record does not hide the rest.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_DOCUMENTS)

    @staticmethod
    def _failed(operation: str, exc: Exception) -> RecordStoreException:
        logger.error("Record store %s failed: %s", operation, exc)
        return RecordStoreException(operation, str(exc))

    @traced("documents.create")
    async def create(self, fields: DocumentFields) -> str:
        """Create a record with a store-assigned id (no file fields)."""
        try:
            ref = await self._coll.add(_fields_to_data(fields))
        except _STORE_ERRORS as e:
            raise self._failed("create", e) from e
        logger.info("Created document %s", ref.id)
        return ref.id

    @traced("documents.list")
    async def list(self) -> list[Document]:
        """Return all documents, newest receivedDate first. Not paginated."""
        query = self._coll.order_by(FIELD_RECEIVED_DATE, "DESCENDING")
        results: list[Document] = []
        try:
            async for snapshot in query.stream():
                try:
                    results.append(_to_document(snapshot.id, snapshot.to_dict()))
                except ValidationException as e:
                    logger.warning("Skipping invalid document %s: %s", snapshot.id, e.message)
        except _STORE_ERRORS as e:
            raise self._failed("list", e) from e
        return results

    @traced("documents.get")
    async def get(self, document_id: str) -> Document | None:
        """Return a document by id, or None if not found."""
        try:
            snapshot = await self._coll.document(document_id).get()
            if snapshot is None:
                return None
            return _to_document(snapshot.id, snapshot.to_dict())
        except _STORE_ERRORS + (ValidationException,) as e:
            raise self._failed("get", e) from e

    @traced("documents.update")
    async def update(self, document_id: str, fields: DocumentFields) -> bool:
        """Overwrite the five metadata fields; file fields are left as they are."""
        try:
            updated = await self._coll.document(document_id).update(_fields_to_data(fields))
        except _STORE_ERRORS as e:
            raise self._failed("update", e) from e
        if not updated:
            logger.info("Update skipped; document %s does not exist", document_id)
        return updated

    @traced("documents.attach_file")
    async def attach_file(self, document_id: str, file: StoredFile) -> bool:
        """Record the uploaded blob's name, public URL and storage key."""
        data = {
            FIELD_FILE_NAME: file.file_name,
            FIELD_FILE_URL: file.file_url,
            FIELD_FILE_PATH: file.file_path,
        }
        try:
            return await self._coll.document(document_id).update(data)
        except _STORE_ERRORS as e:
            raise self._failed("attach_file", e) from e

    @traced("documents.delete")
    async def delete(self, document_id: str) -> None:
        """Delete the record; deleting a missing record is not an error."""
        try:
            await self._coll.document(document_id).delete()
        except _STORE_ERRORS as e:
            raise self._failed("delete", e) from e
        logger.info("Deleted document %s", document_id)
