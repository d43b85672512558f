"""Session cookie tokens (python-jose)."""

from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import get_settings
from app.infrastructure.security.jwt import (
    create_session_token,
    new_session,
    verify_session_token,
)
from app.shared.utils.datetime import utc_now


def test_round_trip() -> None:
    session = new_session("uid-1", "a@example.com")
    decoded = verify_session_token(create_session_token(session))
    assert decoded.uid == "uid-1"
    assert decoded.email == "a@example.com"
    assert int(decoded.expires_at.timestamp()) == int(session.expires_at.timestamp())


def test_default_lifetime_from_settings() -> None:
    session = new_session("u", "a@example.com")
    remaining = session.expires_at - utc_now()
    assert remaining <= timedelta(minutes=get_settings().session_expire_minutes)


def test_expired_token_rejected() -> None:
    token = create_session_token(new_session("u", "a@example.com", timedelta(seconds=-5)))
    with pytest.raises(ValueError):
        verify_session_token(token)


def test_tampered_token_rejected() -> None:
    token = create_session_token(new_session("u", "a@example.com"))
    with pytest.raises(ValueError):
        verify_session_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))


def test_token_signed_with_other_key_rejected() -> None:
    token = jwt.encode({"sub": "u", "exp": 4102444800}, "another-key", algorithm="HS256")
    with pytest.raises(ValueError):
        verify_session_token(token)


def test_missing_subject_rejected() -> None:
    settings = get_settings()
    token = jwt.encode(
        {"email": "a@example.com", "exp": 4102444800},
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    with pytest.raises(ValueError):
        verify_session_token(token)
