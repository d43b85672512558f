"""Service interfaces (ports) for the application layer.

Protocols define contracts for external services (DIP): the identity
provider and object storage.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, BinaryIO, Protocol

from app.application.dtos.identity import IdentityResult


# Identity provider interface
class IIdentityProvider(Protocol):
    """Protocol for email/password identity provider calls."""

    async def sign_in(self, email: str, password: str) -> IdentityResult:
        """Verify credentials. Raises AuthenticationException with a reason."""

    async def sign_up(self, email: str, password: str) -> IdentityResult:
        """Create an account. Raises AuthenticationException with a reason."""


# Storage interface
class IStorageService(Protocol):
    """Protocol for object storage backends (local, S3-compatible)."""

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Upload file with checksum verification."""

    def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content."""

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if not found."""

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""

    def get_public_url(self, storage_ref: str) -> str:
        """Return the public URL of an object (no I/O)."""
