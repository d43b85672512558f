"""Credential service: login, registration and logout over the identity provider.

The only writer of SessionStore after the initial cookie check. Failures
are surfaced once as AuthenticationException; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from app.application.interfaces.services import IIdentityProvider
from app.application.services.session_store import SessionListener, SessionStore
from app.domain.entities.session import Session
from app.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def validate_credentials(email: str, password: str) -> str:
    """Check the login form locally; return the trimmed email."""
    email = (email or "").strip()
    if not email:
        raise ValidationException("Email is required", field="email")
    if not password:
        raise ValidationException("Password is required", field="password")
    return email


def validate_registration(email: str, password: str, confirm_password: str) -> str:
    """Check the registration form locally; return the trimmed email.

    Raises ValidationException before any provider call when a field is
    empty, the passwords differ, or the password is shorter than 6 characters.
    """
    email = validate_credentials(email, password)
    if password != confirm_password:
        raise ValidationException(
            "Passwords do not match", field="confirm_password", rule="mismatch"
        )
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationException(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
            rule="min_length",
        )
    return email


class CredentialService:
    """Login/register/logout against an identity provider, publishing to a SessionStore."""

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        store: SessionStore,
        session_factory: Callable[[str, str], Session],
    ) -> None:
        self.identity_provider = identity_provider
        self.store = store
        self._session_factory = session_factory

    async def login(self, email: str, password: str) -> Session:
        """Sign in. Raises ValidationException or AuthenticationException; the store is unchanged then."""
        email = validate_credentials(email, password)
        result = await self.identity_provider.sign_in(email, password)
        session = self._session_factory(result.uid, result.email)
        self.store.set(session)
        logger.info("User %s signed in", result.uid)
        return session

    async def register(self, email: str, password: str, confirm_password: str) -> Session:
        """Create an account and sign it in."""
        email = validate_registration(email, password, confirm_password)
        result = await self.identity_provider.sign_up(email, password)
        session = self._session_factory(result.uid, result.email)
        self.store.set(session)
        logger.info("User %s registered", result.uid)
        return session

    def logout(self) -> None:
        """Drop the current session."""
        current = self.store.session
        self.store.set(None)
        if current is not None:
            logger.info("User %s signed out", current.uid)

    def current_session(self) -> Session | None:
        return self.store.session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        return self.store.subscribe(listener)
