"""Domain entities and aggregates.

Pure domain models; no persistence concerns.
"""

from app.domain.entities.document import Document
from app.domain.entities.session import Session

__all__ = [
    "Document",
    "Session",
]
