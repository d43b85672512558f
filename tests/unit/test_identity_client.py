"""Firebase Identity Toolkit client against a mocked REST API."""

import json

import httpx
import pytest

from app.domain.enums import AuthErrorReason
from app.domain.exceptions import AuthenticationException
from app.infrastructure.firebase.identity import FirebaseIdentityClient, map_provider_error

BASE = "https://identity.test/v1"


def _client(handler, api_key: str = "web-key") -> FirebaseIdentityClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FirebaseIdentityClient(api_key, base_url=BASE, http_client=http)


def _error(message: str) -> httpx.Response:
    return httpx.Response(400, json={"error": {"code": 400, "message": message}})


async def test_sign_in_success() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "localId": "uid-1",
                "email": "a@example.com",
                "idToken": "id-token",
                "refreshToken": "refresh",
                "expiresIn": "3600",
            },
        )

    result = await _client(handler).sign_in("a@example.com", "secret1")
    assert result.uid == "uid-1"
    assert result.expires_in == 3600
    assert seen["url"].path == "/v1/accounts:signInWithPassword"
    assert seen["url"].params["key"] == "web-key"
    assert seen["body"] == {"email": "a@example.com", "password": "secret1", "returnSecureToken": True}


async def test_sign_up_uses_sign_up_endpoint() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        return httpx.Response(200, json={"localId": "u", "idToken": "t"})

    result = await _client(handler).sign_up("new@example.com", "secret1")
    assert seen["path"] == "/v1/accounts:signUp"
    assert result.email == "new@example.com"


@pytest.mark.parametrize(
    ("message", "reason"),
    [
        ("INVALID_LOGIN_CREDENTIALS", AuthErrorReason.INVALID_CREDENTIAL),
        ("EMAIL_NOT_FOUND", AuthErrorReason.INVALID_CREDENTIAL),
        ("EMAIL_EXISTS", AuthErrorReason.EMAIL_IN_USE),
        ("INVALID_EMAIL", AuthErrorReason.INVALID_EMAIL),
        ("TOO_MANY_ATTEMPTS_TRY_LATER : Access disabled", AuthErrorReason.TOO_MANY_ATTEMPTS),
        ("WEAK_PASSWORD : Password should be at least 6 characters", AuthErrorReason.WEAK_PASSWORD),
        ("OPERATION_NOT_ALLOWED", AuthErrorReason.UNKNOWN),
    ],
)
async def test_provider_errors_map_to_reasons(message: str, reason: AuthErrorReason) -> None:
    with pytest.raises(AuthenticationException) as exc_info:
        await _client(lambda request: _error(message)).sign_in("a@example.com", "x")
    assert exc_info.value.reason is reason


async def test_transport_failure_is_unknown() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(AuthenticationException) as exc_info:
        await _client(handler).sign_in("a@example.com", "x")
    assert exc_info.value.reason is AuthErrorReason.UNKNOWN


async def test_non_json_error_is_unknown() -> None:
    with pytest.raises(AuthenticationException) as exc_info:
        await _client(lambda request: httpx.Response(502, text="bad gateway")).sign_in("a@example.com", "x")
    assert exc_info.value.reason is AuthErrorReason.UNKNOWN


async def test_missing_api_key_fails_without_calling_provider() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(AuthenticationException):
        await _client(handler, api_key="").sign_in("a@example.com", "x")
    assert calls == []


def test_map_provider_error_ignores_case_and_suffix() -> None:
    assert map_provider_error("email_exists") is AuthErrorReason.EMAIL_IN_USE
    assert map_provider_error("") is AuthErrorReason.UNKNOWN
