"""Document dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.application.interfaces.services import IStorageService
from app.application.use_cases.documents import (
    DocumentDeleteService,
    DocumentEditService,
    DocumentQueryService,
    DocumentUploadService,
)
from app.infrastructure.exceptions import RecordStoreException
from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.firebase.client import get_firestore_client
from app.infrastructure.firebase.repositories import FirestoreDocumentRepository


def get_storage_service(request: Request) -> IStorageService:
    """Storage backend created at startup (or on first use when lifespan did not run)."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        storage = request.app.state.storage = StorageFactory.create_storage_service()
    return storage


def get_document_repository() -> FirestoreDocumentRepository:
    """Firestore document repository. Raises RecordStoreException when Firestore is not configured."""
    client = get_firestore_client()
    if client is None:
        raise RecordStoreException("connect", "Firestore is not configured")
    return FirestoreDocumentRepository(client)


DocumentRepositoryDep = Annotated[FirestoreDocumentRepository, Depends(get_document_repository)]
StorageDep = Annotated[IStorageService, Depends(get_storage_service)]


def get_document_upload_service(
    storage: StorageDep, document_repo: DocumentRepositoryDep
) -> DocumentUploadService:
    return DocumentUploadService(storage_service=storage, document_repo=document_repo)


def get_document_edit_service(document_repo: DocumentRepositoryDep) -> DocumentEditService:
    return DocumentEditService(document_repo)


def get_document_delete_service(
    storage: StorageDep, document_repo: DocumentRepositoryDep
) -> DocumentDeleteService:
    return DocumentDeleteService(storage_service=storage, document_repo=document_repo)


def get_document_query_service(document_repo: DocumentRepositoryDep) -> DocumentQueryService:
    return DocumentQueryService(document_repo)
