"""Domain value objects and shared value types."""

from app.domain.value_objects.core import DocumentFields, StoredFile

__all__ = [
    "DocumentFields",
    "StoredFile",
]
