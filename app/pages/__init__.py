"""Server-rendered HTML views (Jinja2)."""

from fastapi import APIRouter

from app.pages import auth, dashboard, documents, files, upload

pages_router = APIRouter()
pages_router.include_router(auth.router)
pages_router.include_router(documents.router)
pages_router.include_router(upload.router)
pages_router.include_router(dashboard.router)
pages_router.include_router(files.router)

__all__ = ["pages_router"]
