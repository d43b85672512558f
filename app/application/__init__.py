"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (record store, storage, identity).
"""

from app.application.interfaces import (
    IDocumentRepository,
    IIdentityProvider,
    IStorageService,
)
from app.application.services import CredentialService, SessionStore
from app.application.use_cases.documents import (
    DocumentDeleteService,
    DocumentEditService,
    DocumentQueryService,
    DocumentUploadService,
)

__all__ = [
    "CredentialService",
    "DocumentDeleteService",
    "DocumentEditService",
    "DocumentQueryService",
    "DocumentUploadService",
    "IDocumentRepository",
    "IIdentityProvider",
    "IStorageService",
    "SessionStore",
]
