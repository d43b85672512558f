"""Signed session cookie tokens (JWT via python-jose).

The cookie carries only the identity (sub = provider uid, email) and exp.
Uses app.core.config for secret, algorithm and lifetime.
"""

from datetime import timedelta
from typing import cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.domain.entities.session import Session
from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import from_timestamp_utc, utc_now


def new_session(uid: str, email: str, expires_delta: timedelta | None = None) -> Session:
    """Build a Session expiring after expires_delta (default: settings.session_expire_minutes)."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=get_settings().session_expire_minutes)
    return Session(uid=uid, email=email, expires_at=utc_now() + expires_delta)


def create_session_token(session: Session) -> str:
    """Encode a Session as a signed JWT for the session cookie."""
    settings = get_settings()
    encoded = jwt.encode(
        {
            "sub": session.uid,
            "email": session.email,
            "exp": int(session.expires_at.timestamp()),
        },
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_session_token(token: str) -> Session:
    """Verify and decode a session cookie.

    Enforces presence of exp and sub; expiry is checked by jose.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid session token: {e!s}") from e
    try:
        return Session(
            uid=payload["sub"],
            email=str(payload.get("email") or ""),
            expires_at=from_timestamp_utc(payload["exp"]),
        )
    except (KeyError, TypeError, ValidationException) as e:
        raise ValueError("Session token missing required claims") from e
