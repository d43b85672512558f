"""Session gate dependencies.

The session cookie is decoded once per request into a SessionStore. The
store is the only session state views see; a subscriber records changes
made by CredentialService so apply_session_cookie can write or clear the
cookie on the outgoing response.
"""

from __future__ import annotations

import logging
from typing import Annotated

import httpx
from fastapi import Depends, Request, Response

from app.application.services.credential_service import CredentialService
from app.application.services.session_store import SessionStore
from app.core.config import get_settings
from app.domain.entities.session import Session
from app.domain.exceptions import CasefileException, LoginRequiredException
from app.infrastructure.firebase.identity import FirebaseIdentityClient
from app.infrastructure.security.jwt import (
    create_session_token,
    new_session,
    verify_session_token,
)
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_NO_CHANGE = object()


class SessionResolvingException(CasefileException):
    """Raised by require_session while the initial session check is still pending."""

    def __init__(self, path: str = "/") -> None:
        super().__init__("Session is being resolved", "SESSION_RESOLVING", {"path": path})


def get_session_store(request: Request) -> SessionStore:
    """Return this request's SessionStore, resolved from the session cookie.

    An invalid or expired cookie resolves to no session and is cleared on
    the response.
    """
    existing = getattr(request.state, "session_store", None)
    if existing is not None:
        return existing

    settings = get_settings()
    store = SessionStore()
    session: Session | None = None
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        try:
            session = verify_session_token(token)
        except ValueError as e:
            logger.info("Discarding session cookie: %s", e)
            request.state.clear_session_cookie = True
    store.resolve(session)

    def record_change(changed: Session | None) -> None:
        request.state.session_change = changed

    store.subscribe(record_change)
    request.state.session_store = store
    return store


SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_optional_session(store: SessionStoreDep) -> Session | None:
    return store.session


def require_session(request: Request, store: SessionStoreDep) -> Session:
    """Gate for protected pages.

    Raises SessionResolvingException while the check is pending and
    LoginRequiredException when there is no session; handlers turn these into
    a loading page and a redirect to the entry page.
    """
    if store.resolving:
        raise SessionResolvingException(request.url.path)
    if store.session is None:
        raise LoginRequiredException(request.url.path)
    return store.session


OptionalSession = Annotated[Session | None, Depends(get_optional_session)]
CurrentSession = Annotated[Session, Depends(require_session)]


def apply_session_cookie(request: Request, response: Response) -> Response:
    """Write the session cookie for a login, or clear it for a logout or bad cookie."""
    settings = get_settings()
    changed = getattr(request.state, "session_change", _NO_CHANGE)
    if changed is _NO_CHANGE:
        if getattr(request.state, "clear_session_cookie", False):
            response.delete_cookie(settings.session_cookie_name, path="/")
        return response
    if changed is None:
        response.delete_cookie(settings.session_cookie_name, path="/")
        return response
    max_age = max(int((changed.expires_at - utc_now()).total_seconds()), 0)
    response.set_cookie(
        settings.session_cookie_name,
        create_session_token(changed),
        max_age=max_age,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )
    return response


def get_identity_provider(request: Request) -> FirebaseIdentityClient:
    """Identity Toolkit client sharing the app-wide HTTP connection pool."""
    settings = get_settings()
    http_client = getattr(request.app.state, "http_client", None)
    if http_client is None:
        http_client = request.app.state.http_client = httpx.AsyncClient(timeout=30.0)
    api_key = (
        settings.firebase_web_api_key.get_secret_value()
        if settings.firebase_web_api_key
        else ""
    )
    return FirebaseIdentityClient(
        api_key,
        base_url=settings.identity_toolkit_url,
        http_client=http_client,
    )


def get_credential_service(
    store: SessionStoreDep,
    identity_provider: Annotated[FirebaseIdentityClient, Depends(get_identity_provider)],
) -> CredentialService:
    return CredentialService(identity_provider, store, new_session)
