"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any, BinaryIO, cast

import aiofiles
import aiofiles.os

from app.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)
from app.shared.utils.datetime import utc_now


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename.
    Metadata stored in .meta.json sidecar. Files are served publicly by the
    app under <base_url>/files/<storage_ref>.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB
    PUBLIC_PREFIX = "/files"

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
            base_url: Public origin of the app (e.g. https://casefile.example.com).
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else ""
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        return full_path

    @staticmethod
    def _meta_path(file_path: Path) -> Path:
        return file_path.with_suffix(file_path.suffix + ".meta.json")

    async def _compute_checksum(self, file_path: Path) -> str:
        """SHA-256 of file."""
        sha256 = hashlib.sha256()
        async with aiofiles.open(file_path, "rb") as f:
            while True:
                chunk = await f.read(self.CHUNK_SIZE)
                if not chunk:
                    break
                sha256.update(chunk)
        return sha256.hexdigest()

    async def _write_metadata(self, file_path: Path, metadata: dict[str, Any]) -> None:
        async with aiofiles.open(self._meta_path(file_path), "w") as f:
            await f.write(json.dumps(metadata, indent=2))
        os.chmod(self._meta_path(file_path), 0o640)

    async def _read_metadata(self, file_path: Path) -> dict[str, Any]:
        meta_path = self._meta_path(file_path)
        if not meta_path.exists():
            return {}
        async with aiofiles.open(meta_path, "r") as f:
            result = json.loads(await f.read())
            return cast(dict[str, Any], result) if isinstance(result, dict) else {}

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Upload with atomic write and checksum validation. Idempotent if same checksum."""
        try:
            target_path = self._get_full_path(storage_ref)
            if target_path.exists():
                existing_checksum = await self._compute_checksum(target_path)
                if existing_checksum != expected_checksum:
                    raise StorageAlreadyExistsError(storage_ref)
                existing_meta = await self._read_metadata(target_path)
                return {
                    "storage_ref": storage_ref,
                    "checksum": existing_checksum,
                    "size": target_path.stat().st_size,
                    "uploaded_at": existing_meta.get("uploaded_at", utc_now().isoformat()),
                }

            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            file_content = file_data.read()

            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(file_content)
                os.chmod(temp_path, 0o640)
                computed = await self._compute_checksum(Path(temp_path))
                if computed != expected_checksum:
                    raise StorageChecksumMismatchError(
                        storage_ref, expected_checksum, computed
                    )
                os.replace(temp_path, target_path)
                upload_meta: dict[str, Any] = {
                    "storage_ref": storage_ref,
                    "checksum": computed,
                    "size": len(file_content),
                    "content_type": content_type,
                    "uploaded_at": utc_now().isoformat(),
                    "custom": metadata or {},
                }
                await self._write_metadata(target_path, upload_meta)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
            return {
                "storage_ref": storage_ref,
                "checksum": computed,
                "size": upload_meta["size"],
                "uploaded_at": upload_meta["uploaded_at"],
            }
        except (
            StorageChecksumMismatchError,
            StorageAlreadyExistsError,
            StoragePermissionError,
        ):
            raise
        except Exception as e:
            raise StorageUploadError(storage_ref, str(e)) from e

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.is_file():
            raise StorageNotFoundError(storage_ref)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                while True:
                    chunk = await f.read(self.CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
        except OSError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e

    async def delete(self, storage_ref: str) -> bool:
        """Delete file and metadata, pruning empty parent dirs. Returns True if deleted."""
        try:
            file_path = self._get_full_path(storage_ref)
            if not file_path.exists():
                return False
            await aiofiles.os.remove(file_path)
            meta_path = self._meta_path(file_path)
            if meta_path.exists():
                await aiofiles.os.remove(meta_path)
            parent = file_path.parent
            while parent != self.storage_root:
                try:
                    if any(parent.iterdir()):
                        break
                    parent.rmdir()
                    parent = parent.parent
                except OSError:
                    break
            return True
        except StoragePermissionError:
            raise
        except Exception as e:
            raise StorageDeleteError(storage_ref, str(e)) from e

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""
        try:
            return self._get_full_path(storage_ref).is_file()
        except StoragePermissionError:
            return False

    async def get_metadata(self, storage_ref: str) -> dict[str, Any]:
        """Return the sidecar metadata (content_type, checksum, size, uploaded_at)."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.is_file():
            raise StorageNotFoundError(storage_ref)
        return await self._read_metadata(file_path)

    def get_public_url(self, storage_ref: str) -> str:
        """Return the app-served URL for storage_ref (no I/O)."""
        return f"{self.base_url}{self.PUBLIC_PREFIX}/{storage_ref.lstrip('/')}"

    def resolve_path(self, storage_ref: str) -> Path:
        """Return the validated on-disk path for storage_ref (used to serve files)."""
        file_path = self._get_full_path(storage_ref)
        name = file_path.name
        if not file_path.is_file() or name.endswith(".meta.json") or name.startswith(".tmp_"):
            raise StorageNotFoundError(storage_ref)
        return file_path
