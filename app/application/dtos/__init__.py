"""Application DTOs (no record-store dependency)."""

from app.application.dtos.document import (
    DashboardStats,
    DeleteOutcome,
    SourceCount,
    UploadedFile,
)
from app.application.dtos.identity import IdentityResult

__all__ = [
    "DashboardStats",
    "DeleteOutcome",
    "IdentityResult",
    "SourceCount",
    "UploadedFile",
]
