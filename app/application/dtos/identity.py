"""DTO returned by the identity provider port."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IdentityResult:
    """Normalized successful sign-in / sign-up response."""

    uid: str
    email: str
    id_token: str
    refresh_token: str | None
    expires_in: int
