"""Pydantic schemas: page forms and the health API."""

from app.schemas.auth import LoginForm, RegisterForm
from app.schemas.document import DocumentForm
from app.schemas.health import HealthResponse

__all__ = [
    "DocumentForm",
    "HealthResponse",
    "LoginForm",
    "RegisterForm",
]
