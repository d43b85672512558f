"""Observable holder of the current Session.

One store per request scope. The session gate resolves it once from the
session cookie; afterwards only CredentialService changes it. Views read
session/resolving; anything that needs to react to changes (the cookie
writer) subscribes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from app.domain.entities.session import Session

logger = logging.getLogger(__name__)

SessionListener = Callable[[Session | None], None]


class SessionStore:
    """Current Session (or None) plus a resolving flag, with change notifications."""

    def __init__(self) -> None:
        self._session: Session | None = None
        self._resolving = True
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def resolving(self) -> bool:
        """True until the initial session check has completed."""
        return self._resolving

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register listener; returns a function that unsubscribes it.

        Once unsubscribed, a listener is never called again, even for a change
        already in progress.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def resolve(self, session: Session | None) -> None:
        """Finish the initial check with its result. Later calls are ignored."""
        if not self._resolving:
            return
        self._resolving = False
        self._session = session

    def set(self, session: Session | None) -> None:
        """Replace the session and notify listeners if it changed."""
        self._resolving = False
        if session == self._session:
            return
        self._session = session
        for listener in list(self._listeners):
            if listener in self._listeners:
                listener(session)
