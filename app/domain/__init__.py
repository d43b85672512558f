"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import Document, Session
from app.domain.enums import AuthErrorReason
from app.domain.exceptions import (
    AuthenticationException,
    CasefileException,
    LoginRequiredException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import DocumentFields, StoredFile

__all__ = [
    # Entities
    "Document",
    "Session",
    # Enums
    "AuthErrorReason",
    # Exceptions
    "AuthenticationException",
    "CasefileException",
    "LoginRequiredException",
    "ResourceNotFoundException",
    "ValidationException",
    # Value objects
    "DocumentFields",
    "StoredFile",
]
