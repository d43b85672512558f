"""Presentation-layer dependency injection (composition root).

Pages depend only on these providers, never on infrastructure directly.
"""

from app.api.v1.dependencies.documents import (
    get_document_delete_service,
    get_document_edit_service,
    get_document_query_service,
    get_document_repository,
    get_document_upload_service,
    get_storage_service,
)
from app.api.v1.dependencies.session import (
    CurrentSession,
    OptionalSession,
    SessionResolvingException,
    SessionStoreDep,
    apply_session_cookie,
    get_credential_service,
    get_identity_provider,
    get_session_store,
    require_session,
)

__all__ = [
    "CurrentSession",
    "OptionalSession",
    "SessionResolvingException",
    "SessionStoreDep",
    "apply_session_cookie",
    "get_credential_service",
    "get_document_delete_service",
    "get_document_edit_service",
    "get_document_query_service",
    "get_document_repository",
    "get_document_upload_service",
    "get_identity_provider",
    "get_session_store",
    "get_storage_service",
    "require_session",
]
