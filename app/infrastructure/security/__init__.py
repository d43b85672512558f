"""Security: signed session cookie tokens."""

from app.infrastructure.security.jwt import (
    create_session_token,
    new_session,
    verify_session_token,
)

__all__ = [
    "create_session_token",
    "new_session",
    "verify_session_token",
]
