"""Domain enumerations for the casefile application.

Enums represent fixed sets of domain values (e.g. auth failure reasons).
"""

from enum import Enum


class AuthErrorReason(str, Enum):
    """Why the identity provider refused a login or registration.

    Fixed set; anything the provider reports outside it maps to UNKNOWN.
    """

    INVALID_CREDENTIAL = "invalid_credential"
    EMAIL_IN_USE = "email_in_use"
    INVALID_EMAIL = "invalid_email"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    WEAK_PASSWORD = "weak_password"
    UNKNOWN = "unknown"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid reason values as strings.

        Returns:
            List of enum value strings (e.g. for message catalogues).
        """
        return [reason.value for reason in cls]
