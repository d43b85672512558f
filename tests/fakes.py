"""In-memory stand-ins for the record store, object storage and identity provider."""

from __future__ import annotations

import itertools
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import Any, BinaryIO

from app.domain.entities.document import Document
from app.domain.enums import AuthErrorReason
from app.domain.exceptions import AuthenticationException
from app.domain.value_objects.core import DocumentFields, StoredFile
from app.infrastructure.exceptions import (
    RecordStoreException,
    StorageDeleteError,
    StorageNotFoundError,
    StorageUploadError,
)
from app.application.dtos.identity import IdentityResult


def make_fields(
    complainant_name: str = "Somchai",
    subject: str = "Late submission",
    source: str = "HR",
    received_date: datetime | None = None,
    notes: str = "",
) -> DocumentFields:
    return DocumentFields(
        complainant_name=complainant_name,
        subject=subject,
        source=source,
        received_date=received_date or datetime(2024, 3, 10, 9, 30, tzinfo=UTC),
        notes=notes,
    )


def make_document(document_id: str = "doc-1", file: StoredFile | None = None, **fields: Any) -> Document:
    return Document.from_fields(document_id, make_fields(**fields), file=file)


class InMemoryDocumentRepository:
    """IDocumentRepository over a dict. Operations named in fail_on raise RecordStoreException."""

    def __init__(self, docs: tuple[Document, ...] | list[Document] = ()) -> None:
        self.docs: dict[str, Document] = {d.id: d for d in docs}
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self._ids = itertools.count(1)

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise RecordStoreException(operation, "injected failure")

    async def create(self, fields: DocumentFields) -> str:
        self._record("create")
        document_id = f"new-{next(self._ids)}"
        self.docs[document_id] = Document.from_fields(document_id, fields)
        return document_id

    async def list(self) -> list[Document]:
        self._record("list")
        return sorted(self.docs.values(), key=lambda d: d.received_date, reverse=True)

    async def get(self, document_id: str) -> Document | None:
        self._record("get")
        return self.docs.get(document_id)

    async def update(self, document_id: str, fields: DocumentFields) -> bool:
        self._record("update")
        if document_id not in self.docs:
            return False
        self.docs[document_id] = Document.from_fields(document_id, fields, file=self.docs[document_id].file)
        return True

    async def attach_file(self, document_id: str, file: StoredFile) -> bool:
        self._record("attach_file")
        if document_id not in self.docs:
            return False
        self.docs[document_id] = self.docs[document_id].with_file(file)
        return True

    async def delete(self, document_id: str) -> None:
        self._record("delete")
        self.docs.pop(document_id, None)


class FakeStorage:
    """IStorageService keeping blobs in memory."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.fail_upload = False
        self.fail_delete = False

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        if self.fail_upload:
            raise StorageUploadError(storage_ref, "injected failure")
        content = file_data.read()
        self.blobs[storage_ref] = content
        self.content_types[storage_ref] = content_type
        return {"storage_ref": storage_ref, "checksum": expected_checksum, "size": len(content)}

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        if storage_ref not in self.blobs:
            raise StorageNotFoundError(storage_ref)
        yield self.blobs[storage_ref]

    async def delete(self, storage_ref: str) -> bool:
        if self.fail_delete:
            raise StorageDeleteError(storage_ref, "injected failure")
        return self.blobs.pop(storage_ref, None) is not None

    async def exists(self, storage_ref: str) -> bool:
        return storage_ref in self.blobs

    def get_public_url(self, storage_ref: str) -> str:
        return f"https://files.test/{storage_ref}"


class FakeIdentityProvider:
    """IIdentityProvider with a dict of accounts. Set error to force a failure reason."""

    def __init__(self, accounts: dict[str, str] | None = None) -> None:
        self.accounts: dict[str, str] = dict(accounts or {})
        self.error: AuthErrorReason | None = None
        self.calls: list[tuple[str, str]] = []

    @staticmethod
    def _result(email: str) -> IdentityResult:
        return IdentityResult(
            uid=f"uid-{email}",
            email=email,
            id_token="id-token",
            refresh_token=None,
            expires_in=3600,
        )

    async def sign_in(self, email: str, password: str) -> IdentityResult:
        self.calls.append(("sign_in", email))
        if self.error is not None:
            raise AuthenticationException(self.error)
        if self.accounts.get(email) != password:
            raise AuthenticationException(AuthErrorReason.INVALID_CREDENTIAL)
        return self._result(email)

    async def sign_up(self, email: str, password: str) -> IdentityResult:
        self.calls.append(("sign_up", email))
        if self.error is not None:
            raise AuthenticationException(self.error)
        if email in self.accounts:
            raise AuthenticationException(AuthErrorReason.EMAIL_IN_USE)
        self.accounts[email] = password
        return self._result(email)
