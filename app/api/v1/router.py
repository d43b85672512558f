"""API v1 router aggregation.

The only JSON surface is the health probe; everything user-facing is a page
(see app.pages).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
