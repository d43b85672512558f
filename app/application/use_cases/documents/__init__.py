"""Document use cases: upload, edit, delete, query."""

from app.application.use_cases.documents.document_operations import (
    DocumentDeleteService,
    DocumentEditService,
    DocumentQueryService,
    DocumentUploadService,
    build_storage_key,
)

__all__ = [
    "DocumentDeleteService",
    "DocumentEditService",
    "DocumentQueryService",
    "DocumentUploadService",
    "build_storage_key",
]
