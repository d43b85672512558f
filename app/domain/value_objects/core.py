"""Domain value objects for the casefile application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from datetime import datetime

from app.domain.exceptions import ValidationException


def _require_text(value: str, field_name: str, label: str) -> str:
    """Return value stripped; raise ValidationException when blank."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationException(f"{label} is required", field=field_name)
    return cleaned


@dataclass(frozen=True)
class DocumentFields:
    """The editable metadata of a filed document (SRP: field validation).

    Used for both create and edit; the edit flow overwrites all of these
    and never touches file fields. received_date must be timezone-aware.
    """

    complainant_name: str
    subject: str
    source: str
    received_date: datetime
    notes: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "complainant_name",
            _require_text(self.complainant_name, "complainant_name", "Complainant name"),
        )
        object.__setattr__(
            self, "subject", _require_text(self.subject, "subject", "Subject")
        )
        object.__setattr__(
            self, "source", _require_text(self.source, "source", "Source")
        )
        if not isinstance(self.received_date, datetime):
            raise ValidationException("Received date is required", field="received_date")
        if self.received_date.tzinfo is None:
            raise ValidationException(
                "Received date must carry a timezone", field="received_date", rule="invalid"
            )
        object.__setattr__(self, "notes", (self.notes or "").strip())


@dataclass(frozen=True)
class StoredFile:
    """File attached to a document: display name, public URL and storage key.

    All three parts are required; a document either has a complete
    StoredFile or none at all.
    """

    file_name: str
    file_url: str
    file_path: str

    def __post_init__(self) -> None:
        for name in ("file_name", "file_url", "file_path"):
            if not getattr(self, name):
                raise ValidationException(f"{name} is required", field=name)
