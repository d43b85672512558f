"""DTOs for document use cases (no dependency on the record store)."""

from dataclasses import dataclass
from typing import BinaryIO

from app.domain.entities.document import Document


@dataclass(frozen=True)
class UploadedFile:
    """A file picked in the upload form: original name, MIME type and a readable stream."""

    filename: str
    content_type: str
    data: BinaryIO


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of deleting a document.

    orphaned_blob is the storage key left behind when the blob could not be
    removed (the record is deleted regardless); None otherwise.
    """

    document_id: str
    orphaned_blob: str | None = None


@dataclass(frozen=True)
class SourceCount:
    """One row of the per-source breakdown (dashboard bar chart)."""

    source: str
    count: int
    share: float = 0.0


@dataclass(frozen=True)
class DashboardStats:
    """Aggregates over one snapshot of the document list."""

    total: int
    this_month: int
    with_files: int
    source_count: int
    top_sources: list[SourceCount]
    recent: list[Document]
