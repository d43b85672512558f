"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from app.core.config import get_settings
from app.infrastructure.firebase.client import get_firestore_client
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok plus whether the record store client is configured (no network call)."""
    return HealthResponse(
        version=get_settings().app_version,
        record_store=get_firestore_client() is not None,
    )
