"""Document domain entity.

Represents one filed case document, independent of persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from app.domain.exceptions import ValidationException
from app.domain.value_objects.core import DocumentFields, StoredFile


@dataclass(frozen=True)
class Document:
    """Domain entity for a filed case document.

    The id is assigned by the record store and never changes. file is either
    a complete StoredFile or None. Validation runs on construction.
    """

    id: str
    complainant_name: str
    subject: str
    source: str
    received_date: datetime
    notes: str = ""
    file: StoredFile | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate document business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Document ID is required", field="id")
        # Re-running DocumentFields keeps one definition of the required-field rules.
        self.fields()

    @classmethod
    def from_fields(
        cls,
        document_id: str,
        fields: DocumentFields,
        file: StoredFile | None = None,
    ) -> Document:
        return cls(
            id=document_id,
            complainant_name=fields.complainant_name,
            subject=fields.subject,
            source=fields.source,
            received_date=fields.received_date,
            notes=fields.notes,
            file=file,
        )

    def fields(self) -> DocumentFields:
        """Return the editable metadata of this document."""
        return DocumentFields(
            complainant_name=self.complainant_name,
            subject=self.subject,
            source=self.source,
            received_date=self.received_date,
            notes=self.notes,
        )

    @property
    def has_file(self) -> bool:
        return self.file is not None

    def with_file(self, file: StoredFile) -> Document:
        """Return a copy with the attached file set."""
        return replace(self, file=file)
