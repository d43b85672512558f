"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). API paths (/api/...) get
JSON bodies; page requests get an HTML error page, a redirect to the entry
page (login required) or the loading page (session still resolving).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse, Response
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.dependencies.session import SessionResolvingException
from app.core.config import get_settings
from app.domain.enums import AuthErrorReason
from app.domain.exceptions import CasefileException, LoginRequiredException
from app.pages.messages import auth_error_message, get_messages
from app.pages.rendering import render
from app.schemas.auth import LoginForm, RegisterForm
from app.shared.telemetry.tracing import get_trace_id

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "VALIDATION_ERROR": 400,
    "RECORD_STORE_ERROR": 502,
    "STORAGE_NOT_FOUND": 404,
    "STORAGE_UPLOAD_ERROR": 502,
    "STORAGE_DOWNLOAD_ERROR": 502,
    "STORAGE_DELETE_ERROR": 502,
}

# Auth form pages re-rendered with the too-many-attempts message on 429.
_RATE_LIMITED_FORMS: dict[str, tuple[str, type]] = {
    "/": ("login.html", LoginForm),
    "/register": ("register.html", RegisterForm),
}


def _is_api(request: Request) -> bool:
    return request.url.path.startswith(API_PREFIX)


def _error_page(request: Request, status_code: int, title_key: str, message: str | None = None) -> Response:
    t = get_messages(get_settings().ui_locale)
    return render(
        request,
        "error.html",
        status_code=status_code,
        title=t[title_key],
        message=message,
        trace_id=get_trace_id(),
    )


def _casefile_exception_handler(request: Request, exc: CasefileException) -> Response:
    """JSON from CasefileException.to_dict() for the API; the "operation failed" page otherwise."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if _is_api(request):
        return JSONResponse(status_code=status, content=exc.to_dict())
    if status == 404:
        return _error_page(request, 404, "not_found_title")
    logger.error("Request failed: %s (%s)", exc.message, exc.details, exc_info=exc)
    t = get_messages(get_settings().ui_locale)
    return _error_page(request, status, "error_title", t["operation_failed"])


def _login_required_handler(request: Request, exc: LoginRequiredException) -> Response:
    """Redirect to the entry page and drop any stale session cookie."""
    response = RedirectResponse("/", status_code=303)
    if request.cookies.get(get_settings().session_cookie_name):
        response.delete_cookie(get_settings().session_cookie_name, path="/")
    return response


def _session_resolving_handler(request: Request, exc: SessionResolvingException) -> Response:
    return render(request, "loading.html", retry_path=exc.details.get("path", "/"))


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Auth forms show the localized too-many-attempts message; everything else gets slowapi's 429."""
    form_page = _RATE_LIMITED_FORMS.get(request.url.path)
    if form_page is None or request.method != "POST":
        return _rate_limit_exceeded_handler(request, exc)
    template, form_cls = form_page
    logger.warning("Rate limit exceeded on %s: %s", request.url.path, exc.detail)
    return render(
        request,
        template,
        status_code=429,
        form=form_cls(),
        error=auth_error_message(AuthErrorReason.TOO_MANY_ATTEMPTS, get_settings().ui_locale),
    )


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    """Return 422 with validation error details (API) or a generic error page."""
    if not _is_api(request):
        t = get_messages(get_settings().ui_locale)
        return _error_page(request, 422, "error_title", t["validation_required"])
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Return JSON for the API (status + detail); an HTML error page otherwise."""
    if _is_api(request):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "HTTP_ERROR", "message": exc.detail},
            headers=getattr(exc, "headers", None),
        )
    title_key = "not_found_title" if exc.status_code == 404 else "error_title"
    return _error_page(request, exc.status_code, title_key)


def _generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    if not _is_api(request):
        return _error_page(request, 500, "error_title", detail)
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail, "trace_id": get_trace_id()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Starlette picks the handler by the
    exception MRO, so subclass handlers win over the CasefileException one.
    """
    app.add_exception_handler(LoginRequiredException, _login_required_handler)
    app.add_exception_handler(SessionResolvingException, _session_resolving_handler)
    app.add_exception_handler(CasefileException, _casefile_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
