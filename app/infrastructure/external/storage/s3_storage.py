"""S3-compatible object storage (AWS S3, MinIO, Supabase Storage) with checksums."""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import AsyncIterator
from io import BytesIO
from typing import Any, BinaryIO

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StorageUploadError,
)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class S3StorageService:
    """S3-compatible storage with publicly readable objects.

    Uses boto3 (sync) via asyncio.to_thread for async API. Objects are
    expected to be readable at public_base_url/<key>; without one, the AWS
    virtual-host URL of the bucket is used.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO, Supabase S3 gateway).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            public_base_url: Base URL under which object keys are publicly readable.
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.public_base_url = (
            public_base_url.rstrip("/")
            if public_base_url
            else f"https://{bucket}.s3.{region}.amazonaws.com"
        )
        extra = {"endpoint_url": endpoint_url} if endpoint_url else {}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key or None,
            aws_secret_access_key=secret_key or None,
            **extra,
        )

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Upload with checksum validation. Idempotent if same checksum."""
        def _upload() -> dict[str, Any]:
            try:
                head = self._client.head_object(Bucket=self.bucket, Key=storage_ref)
            except ClientError as e:
                if not _is_not_found(e):
                    raise
            else:
                existing = (head.get("Metadata") or {}).get("sha256")
                if existing != expected_checksum:
                    raise StorageAlreadyExistsError(storage_ref)
                return {
                    "storage_ref": storage_ref,
                    "checksum": existing,
                    "size": head["ContentLength"],
                    "uploaded_at": head["LastModified"].isoformat(),
                }

            file_data.seek(0)
            body = file_data.read()
            computed = hashlib.sha256(body).hexdigest()
            if computed != expected_checksum:
                raise StorageChecksumMismatchError(storage_ref, expected_checksum, computed)
            meta = {"sha256": computed, "original-size": str(len(body))}
            for k, v in (metadata or {}).items():
                meta[k.lower().replace("_", "-")] = v

            self._client.put_object(
                Bucket=self.bucket,
                Key=storage_ref,
                Body=body,
                ContentType=content_type,
                Metadata=meta,
            )
            head = self._client.head_object(Bucket=self.bucket, Key=storage_ref)
            return {
                "storage_ref": storage_ref,
                "checksum": computed,
                "size": len(body),
                "uploaded_at": head["LastModified"].isoformat(),
            }

        try:
            return await asyncio.to_thread(_upload)
        except (StorageChecksumMismatchError, StorageAlreadyExistsError):
            raise
        except (ClientError, BotoCoreError) as e:
            raise StorageUploadError(storage_ref, str(e)) from e

    async def download(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream object content."""
        def _get() -> bytes:
            resp = self._client.get_object(Bucket=self.bucket, Key=storage_ref)
            return resp["Body"].read()

        try:
            body = await asyncio.to_thread(_get)
        except ClientError as e:
            if _is_not_found(e):
                raise StorageNotFoundError(storage_ref) from e
            raise StorageDownloadError(storage_ref, str(e)) from e
        except BotoCoreError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e
        buf = BytesIO(body)
        while chunk := buf.read(self.CHUNK_SIZE):
            yield chunk

    async def delete(self, storage_ref: str) -> bool:
        """Delete object. Returns True if deleted, False if it was not there."""
        def _delete() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=storage_ref)
            except ClientError as e:
                if _is_not_found(e):
                    return False
                raise
            self._client.delete_object(Bucket=self.bucket, Key=storage_ref)
            return True

        try:
            return await asyncio.to_thread(_delete)
        except (ClientError, BotoCoreError) as e:
            raise StorageDeleteError(storage_ref, str(e)) from e

    async def exists(self, storage_ref: str) -> bool:
        """Return True if object exists."""
        def _exists() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=storage_ref)
                return True
            except ClientError:
                return False

        return await asyncio.to_thread(_exists)

    def get_public_url(self, storage_ref: str) -> str:
        """Return the public URL for storage_ref (no I/O)."""
        return f"{self.public_base_url}/{storage_ref.lstrip('/')}"
