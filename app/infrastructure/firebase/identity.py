"""Firebase Authentication over the Identity Toolkit REST API (email + password).

Only two calls are used: accounts:signInWithPassword and accounts:signUp.
Provider error codes are folded into AuthErrorReason; anything else,
including transport failures, becomes AuthErrorReason.UNKNOWN. No retries.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

import httpx

from app.application.dtos.identity import IdentityResult
from app.domain.enums import AuthErrorReason
from app.domain.exceptions import AuthenticationException
from app.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


def map_provider_error(code: str) -> AuthErrorReason:
    """Map an Identity Toolkit error message to an AuthErrorReason.

    Messages may carry a suffix, e.g. "WEAK_PASSWORD : Password should be at
    least 6 characters"; only the leading code is significant.
    """
    key = code.split(":", 1)[0].strip().upper()
    return FirebaseIdentityClient.ERROR_REASONS.get(key, AuthErrorReason.UNKNOWN)


class FirebaseIdentityClient:
    """Identity provider adapter (email/password) for the credential service."""

    ERROR_REASONS: ClassVar[dict[str, AuthErrorReason]] = {
        "EMAIL_NOT_FOUND": AuthErrorReason.INVALID_CREDENTIAL,
        "INVALID_PASSWORD": AuthErrorReason.INVALID_CREDENTIAL,
        "INVALID_LOGIN_CREDENTIALS": AuthErrorReason.INVALID_CREDENTIAL,
        "USER_DISABLED": AuthErrorReason.INVALID_CREDENTIAL,
        "MISSING_PASSWORD": AuthErrorReason.INVALID_CREDENTIAL,
        "EMAIL_EXISTS": AuthErrorReason.EMAIL_IN_USE,
        "INVALID_EMAIL": AuthErrorReason.INVALID_EMAIL,
        "MISSING_EMAIL": AuthErrorReason.INVALID_EMAIL,
        "TOO_MANY_ATTEMPTS_TRY_LATER": AuthErrorReason.TOO_MANY_ATTEMPTS,
        "WEAK_PASSWORD": AuthErrorReason.WEAK_PASSWORD,
    }

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://identitytoolkit.googleapis.com/v1",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()

    async def _call(self, method: str, email: str, password: str) -> IdentityResult:
        if not self._api_key:
            logger.error("FIREBASE_WEB_API_KEY is not configured")
            raise AuthenticationException(AuthErrorReason.UNKNOWN, "NOT_CONFIGURED")
        try:
            resp = await self._http.post(
                f"{self._base_url}/accounts:{method}",
                params={"key": self._api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
            )
        except httpx.HTTPError as e:
            logger.warning("Identity provider unreachable (%s): %s", method, e)
            raise AuthenticationException(AuthErrorReason.UNKNOWN) from e

        payload: dict[str, Any]
        try:
            payload = resp.json()
        except ValueError:
            payload = {}
        if resp.status_code != 200:
            code = str((payload.get("error") or {}).get("message") or resp.status_code)
            reason = map_provider_error(code)
            logger.info("Identity provider rejected %s: %s -> %s", method, code, reason.value)
            raise AuthenticationException(reason, code)

        uid = payload.get("localId")
        if not uid or not payload.get("idToken"):
            raise AuthenticationException(AuthErrorReason.UNKNOWN, "MALFORMED_RESPONSE")
        return IdentityResult(
            uid=uid,
            email=payload.get("email", email),
            id_token=payload["idToken"],
            refresh_token=payload.get("refreshToken"),
            expires_in=int(payload.get("expiresIn", 3600)),
        )

    @traced("identity.sign_in")
    async def sign_in(self, email: str, password: str) -> IdentityResult:
        """Verify email/password. Raises AuthenticationException on failure."""
        return await self._call("signInWithPassword", email, password)

    @traced("identity.sign_up")
    async def sign_up(self, email: str, password: str) -> IdentityResult:
        """Create an email/password account. Raises AuthenticationException on failure."""
        return await self._call("signUp", email, password)
