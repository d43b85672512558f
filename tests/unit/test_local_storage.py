"""Local filesystem storage backend (tmp_path)."""

import hashlib
import io
from pathlib import Path

import pytest

from app.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageNotFoundError,
    StoragePermissionError,
)
from app.infrastructure.external.storage.local_storage import LocalStorageService

KEY = "documents/doc-1/1710063000000.pdf"
CONTENT = b"%PDF-1.4 test"


def _checksum(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorageService:
    return LocalStorageService(str(tmp_path), base_url="https://casefile.test/")


async def _put(storage: LocalStorageService, key: str = KEY, data: bytes = CONTENT) -> dict:
    return await storage.upload(io.BytesIO(data), key, _checksum(data), "application/pdf")


async def test_upload_then_download(storage: LocalStorageService) -> None:
    result = await _put(storage)
    assert result["size"] == len(CONTENT)
    assert await storage.exists(KEY)
    chunks = [chunk async for chunk in storage.download(KEY)]
    assert b"".join(chunks) == CONTENT
    metadata = await storage.get_metadata(KEY)
    assert metadata["content_type"] == "application/pdf"


async def test_same_content_is_idempotent(storage: LocalStorageService) -> None:
    await _put(storage)
    await _put(storage)
    with pytest.raises(StorageAlreadyExistsError):
        await _put(storage, data=b"different")


async def test_checksum_mismatch_leaves_nothing(storage: LocalStorageService) -> None:
    with pytest.raises(StorageChecksumMismatchError):
        await storage.upload(io.BytesIO(CONTENT), KEY, "0" * 64, "application/pdf")
    assert not await storage.exists(KEY)
    assert not any(p.name.startswith(".tmp_") for p in storage.storage_root.rglob("*"))


async def test_delete_prunes_empty_directories(storage: LocalStorageService) -> None:
    await _put(storage)
    assert await storage.delete(KEY) is True
    assert not (storage.storage_root / "documents" / "doc-1").exists()
    assert await storage.delete(KEY) is False


async def test_path_traversal_rejected(storage: LocalStorageService) -> None:
    with pytest.raises(StoragePermissionError):
        await storage.delete("../outside.txt")
    assert not await storage.exists("../../etc/passwd")


async def test_download_missing(storage: LocalStorageService) -> None:
    with pytest.raises(StorageNotFoundError):
        [chunk async for chunk in storage.download("documents/x/1.pdf")]


def test_public_url(storage: LocalStorageService) -> None:
    assert storage.get_public_url(KEY) == f"https://casefile.test/files/{KEY}"


async def test_resolve_path_hides_sidecars(storage: LocalStorageService) -> None:
    await _put(storage)
    assert storage.resolve_path(KEY).read_bytes() == CONTENT
    with pytest.raises(StorageNotFoundError):
        storage.resolve_path(f"{KEY}.meta.json")
