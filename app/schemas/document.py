"""Document form schemas (upload and edit pages)."""

from datetime import datetime, tzinfo

from pydantic import BaseModel

from app.domain.exceptions import ValidationException
from app.domain.value_objects.core import DocumentFields

# Value format of <input type="datetime-local">.
DATETIME_LOCAL_FORMAT = "%Y-%m-%dT%H:%M"


def parse_received_date(value: str, tz: tzinfo) -> datetime:
    """Parse a datetime-local value as wall time in tz.

    Values that already carry an offset keep it. Raises ValidationException
    when empty or unparseable.
    """
    value = (value or "").strip()
    if not value:
        raise ValidationException("Received date is required", field="received_date")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationException(
            f"Invalid received date: {value!r}", field="received_date", rule="invalid"
        ) from e
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=tz)


def format_received_date(value: datetime, tz: tzinfo) -> str:
    """Inverse of parse_received_date: the datetime-local value for value in tz."""
    return value.astimezone(tz).strftime(DATETIME_LOCAL_FORMAT)


class DocumentForm(BaseModel):
    """Form body for the upload and edit pages (the file is a separate part)."""

    complainant_name: str = ""
    subject: str = ""
    source: str = ""
    received_date: str = ""
    notes: str = ""

    def to_fields(self, tz: tzinfo) -> DocumentFields:
        """Validate locally and return DocumentFields. Raises ValidationException."""
        return DocumentFields(
            complainant_name=self.complainant_name,
            subject=self.subject,
            source=self.source,
            received_date=parse_received_date(self.received_date, tz),
            notes=self.notes,
        )
