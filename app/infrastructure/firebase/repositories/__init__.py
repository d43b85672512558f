"""Firestore-backed repository implementations."""

from app.infrastructure.firebase.repositories.document_repo_firestore import (
    FirestoreDocumentRepository,
)

__all__ = [
    "FirestoreDocumentRepository",
]
