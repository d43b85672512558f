"""Firebase integration: Firestore record store and Identity Toolkit auth."""

from app.infrastructure.firebase.client import (
    get_firestore_client,
    init_firebase,
)

__all__ = [
    "get_firestore_client",
    "init_firebase",
]
