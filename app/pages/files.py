"""Serves blobs of the local storage backend at their public URL (/files/<key>)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from app.api.v1.dependencies.documents import get_storage_service
from app.application.interfaces.services import IStorageService
from app.infrastructure.exceptions import StorageNotFoundError, StoragePermissionError
from app.infrastructure.external.storage.local_storage import LocalStorageService

router = APIRouter(prefix=LocalStorageService.PUBLIC_PREFIX, tags=["files"])


@router.get("/{storage_ref:path}")
async def serve_file(
    storage_ref: str,
    storage: Annotated[IStorageService, Depends(get_storage_service)],
) -> FileResponse:
    """Return the stored file. 404 when missing or when storage is not local."""
    if not isinstance(storage, LocalStorageService):
        raise HTTPException(status_code=404, detail="Not found")
    try:
        path = storage.resolve_path(storage_ref)
        metadata = await storage.get_metadata(storage_ref)
    except (StorageNotFoundError, StoragePermissionError) as e:
        raise HTTPException(status_code=404, detail="Not found") from e
    return FileResponse(path, media_type=metadata.get("content_type"))
