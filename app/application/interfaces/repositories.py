"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.entities.document import Document
    from app.domain.value_objects.core import DocumentFields, StoredFile


# Document repository interface
class IDocumentRepository(Protocol):
    """Protocol for the document-record store (DIP).

    Each call is one round trip; no caching, no optimistic update. Failures
    raise RecordStoreException.
    """

    async def create(self, fields: DocumentFields) -> str:
        """Create a record without file fields; return the store-assigned id."""

    async def list(self) -> list[Document]:
        """Return every document, newest receivedDate first (not paginated)."""

    async def get(self, document_id: str) -> Document | None:
        """Return one document or None."""

    async def update(self, document_id: str, fields: DocumentFields) -> bool:
        """Overwrite metadata fields (file fields untouched). False if missing."""

    async def attach_file(self, document_id: str, file: StoredFile) -> bool:
        """Set fileName/fileUrl/filePath on an existing record. False if missing."""

    async def delete(self, document_id: str) -> None:
        """Delete the record (no-op if already gone)."""
