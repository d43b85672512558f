"""Document operations: upload, edit, delete and query, one responsibility each."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import re
from datetime import datetime
from typing import BinaryIO

from app.application.dtos.document import DeleteOutcome, UploadedFile
from app.application.interfaces.repositories import IDocumentRepository
from app.application.interfaces.services import IStorageService
from app.domain.entities.document import Document
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects.core import DocumentFields, StoredFile
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "documents"
DEFAULT_EXTENSION = "bin"
_UNSAFE_EXT_CHARS = re.compile(r"[^A-Za-z0-9]")


def _rewind_if_seekable(file_data: BinaryIO) -> None:
    """Reset file position to start if stream is seekable."""
    if getattr(file_data, "seekable", lambda: False)():
        file_data.seek(0)


def _display_filename(filename: str) -> str:
    """Original name as shown to users: basename only, no NULs or surrounding dots/spaces."""
    name = os.path.basename((filename or "").replace("\\", "/"))
    name = name.replace("\x00", "").strip(". ")
    if not name:
        raise ValidationException("File name is empty or invalid", field="file", rule="invalid")
    return name


def _compute_checksum_sync(file_data: BinaryIO) -> str:
    """Blocking: one pass over file_data (run in a thread)."""
    sha256 = hashlib.sha256()
    while chunk := file_data.read(65536):
        sha256.update(chunk)
    _rewind_if_seekable(file_data)
    return sha256.hexdigest()


def build_storage_key(document_id: str, filename: str, when: datetime | None = None) -> str:
    """Return documents/<document_id>/<timestamp_ms>.<ext>.

    ext is the original extension reduced to ASCII letters and digits, or
    "bin" when nothing is left. The original name is stored separately.
    """
    stamp = int((when or utc_now()).timestamp() * 1000)
    _, dot, ext = (filename or "").rpartition(".")
    ext = _UNSAFE_EXT_CHARS.sub("", ext) if dot else ""
    return f"{STORAGE_PREFIX}/{document_id}/{stamp}.{ext or DEFAULT_EXTENSION}"


class DocumentUploadService:
    """Create a record and, when a file is given, store it and attach it.

    The three steps (create record, upload blob, attach file fields) form one
    compensating unit: on upload failure the new record is deleted; on attach
    failure the blob and the record are deleted. The original error is
    re-raised; compensation errors are only logged.
    """

    def __init__(
        self,
        storage_service: IStorageService,
        document_repo: IDocumentRepository,
    ) -> None:
        self.storage = storage_service
        self.document_repo = document_repo

    @traced("documents.upload_flow")
    async def upload_document(
        self, fields: DocumentFields, file: UploadedFile | None = None
    ) -> Document:
        """Create the document; returns it with its file attached (if any)."""
        display_name = _display_filename(file.filename) if file else None
        document_id = await self.document_repo.create(fields)
        add_span_attributes(**{"document.id": document_id})
        document = Document.from_fields(document_id, fields)
        if file is None:
            return document

        storage_ref = build_storage_key(document_id, display_name)
        try:
            checksum = await asyncio.to_thread(_compute_checksum_sync, file.data)
            await self.storage.upload(
                file_data=file.data,
                storage_ref=storage_ref,
                expected_checksum=checksum,
                content_type=file.content_type or "application/octet-stream",
                metadata={"document_id": document_id},
            )
        except Exception:
            logger.exception("Upload of %s failed; removing record %s", storage_ref, document_id)
            await self._discard_record(document_id)
            raise

        stored = StoredFile(
            file_name=display_name,
            file_url=self.storage.get_public_url(storage_ref),
            file_path=storage_ref,
        )
        try:
            attached = await self.document_repo.attach_file(document_id, stored)
            if not attached:
                raise ResourceNotFoundException("document", document_id)
        except Exception:
            logger.exception("Attaching %s to %s failed; rolling back", storage_ref, document_id)
            await self._discard_blob(storage_ref)
            await self._discard_record(document_id)
            raise
        return document.with_file(stored)

    async def _discard_record(self, document_id: str) -> None:
        try:
            await self.document_repo.delete(document_id)
        except Exception:
            logger.exception("Compensation failed: record %s left without file", document_id)

    async def _discard_blob(self, storage_ref: str) -> None:
        try:
            await self.storage.delete(storage_ref)
        except Exception:
            logger.exception("Compensation failed: orphaned blob %s", storage_ref)


class DocumentEditService:
    """Overwrite the metadata of an existing document; the file is never touched."""

    def __init__(self, document_repo: IDocumentRepository) -> None:
        self.document_repo = document_repo

    async def edit_document(self, document_id: str, fields: DocumentFields) -> None:
        """Raises ResourceNotFoundException if the document no longer exists."""
        if not await self.document_repo.update(document_id, fields):
            raise ResourceNotFoundException("document", document_id)


class DocumentDeleteService:
    """Delete a document: blob first (if any), then the record.

    A blob that cannot be deleted does not stop the record deletion; its key
    is logged at WARNING and returned in DeleteOutcome.orphaned_blob.
    """

    def __init__(
        self,
        storage_service: IStorageService,
        document_repo: IDocumentRepository,
    ) -> None:
        self.storage = storage_service
        self.document_repo = document_repo

    @traced("documents.delete_flow")
    async def delete_document(self, document_id: str) -> DeleteOutcome:
        """Delete the document with the given id.

        The record is read first so the blob key comes from the store, never
        from the caller.
        """
        existing = await self.document_repo.get(document_id)
        file_path = existing.file.file_path if existing and existing.file else None

        orphaned: str | None = None
        if file_path:
            try:
                await self.storage.delete(file_path)
            except Exception as e:
                orphaned = file_path
                add_span_attributes(**{"document.orphaned_blob": file_path})
                logger.warning(
                    "Blob %s of document %s could not be deleted (%s); left for cleanup",
                    file_path,
                    document_id,
                    e,
                )

        await self.document_repo.delete(document_id)
        return DeleteOutcome(document_id=document_id, orphaned_blob=orphaned)


class DocumentQueryService:
    """Read side: the full snapshot and single documents."""

    def __init__(self, document_repo: IDocumentRepository) -> None:
        self.document_repo = document_repo

    async def list_documents(self) -> list[Document]:
        """Return every document, newest received first."""
        return await self.document_repo.list()

    async def get_document(self, document_id: str) -> Document:
        """Return a document; raise ResourceNotFoundException if it does not exist."""
        doc = await self.document_repo.get(document_id)
        if doc is None:
            raise ResourceNotFoundException("document", document_id)
        return doc
