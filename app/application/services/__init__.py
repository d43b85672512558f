"""Application services: session store, credentials, document aggregates."""

from app.application.services.credential_service import (
    CredentialService,
    validate_credentials,
    validate_registration,
)
from app.application.services.session_store import SessionStore

__all__ = [
    "CredentialService",
    "SessionStore",
    "validate_credentials",
    "validate_registration",
]
