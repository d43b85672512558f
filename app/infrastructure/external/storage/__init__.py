"""Storage: local filesystem and S3-compatible backends.

Factory creates backend from app.core.config. Implementations are loaded
lazily inside StorageFactory.create_storage_service() so the local backend
never imports boto3.

Implementations satisfy IStorageService (upload, download, delete, exists,
get_public_url).
"""

from app.infrastructure.external.storage.factory import StorageFactory

__all__ = [
    "StorageFactory",
]
