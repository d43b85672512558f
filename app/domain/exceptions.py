"""Domain exceptions for the casefile application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses or form messages in exception handlers
and views.
"""

from typing import Any

from app.domain.enums import AuthErrorReason


class CasefileException(Exception):
    """Base exception for all casefile application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CasefileException):
    """Raised when local input validation fails (empty field, bad date, password rules)."""

    def __init__(
        self, message: str, field: str | None = None, rule: str = "required"
    ) -> None:
        """Initialize with message, optional field name and the rule that failed.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            rule: Which check failed ("required", "mismatch", "min_length", "invalid").
        """
        details: dict[str, Any] = {"rule": rule}
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)

    @property
    def field(self) -> str | None:
        return self.details.get("field")

    @property
    def rule(self) -> str:
        return self.details["rule"]


class AuthenticationException(CasefileException):
    """Raised when the identity provider rejects a login or registration.

    The reason is one of a fixed set (AuthErrorReason); views translate it
    to a localized message and keep the form usable.
    """

    def __init__(
        self,
        reason: AuthErrorReason = AuthErrorReason.UNKNOWN,
        provider_code: str | None = None,
    ) -> None:
        """Initialize with the failure reason.

        Args:
            reason: Enumerated failure reason.
            provider_code: Raw provider error code, kept for logs only.
        """
        details: dict[str, Any] = {"reason": reason.value}
        if provider_code:
            details["provider_code"] = provider_code
        super().__init__(
            f"Authentication failed: {reason.value}",
            "AUTHENTICATION_ERROR",
            details,
        )
        self.reason = reason


class LoginRequiredException(CasefileException):
    """Raised by the session gate when a protected view is requested without a session."""

    def __init__(self, path: str = "/") -> None:
        super().__init__("Login required", "LOGIN_REQUIRED", {"path": path})


class ResourceNotFoundException(CasefileException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'document').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )
