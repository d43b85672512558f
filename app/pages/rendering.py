"""Jinja2 rendering for the HTML views.

Every page gets the message catalogue (`t`), the current session (or None)
and the app name. render() also writes any pending session cookie change.
"""

from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api.v1.dependencies.session import apply_session_cookie
from app.core.config import get_settings
from app.pages.messages import get_messages
from app.schemas.document import format_received_date

TEMPLATES_DIR = Path(__file__).parent / "templates"
DISPLAY_DATE_FORMAT = "%d/%m/%Y"
DISPLAY_DATETIME_FORMAT = "%d/%m/%Y %H:%M"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _localdate(value: datetime | None, with_time: bool = False) -> str:
    """Format an aware datetime in the display timezone."""
    if value is None:
        return ""
    local = value.astimezone(get_settings().timezone)
    return local.strftime(DISPLAY_DATETIME_FORMAT if with_time else DISPLAY_DATE_FORMAT)


def _datetime_local(value: datetime | None) -> str:
    """Value for <input type="datetime-local"> in the display timezone."""
    if value is None:
        return ""
    return format_received_date(value, get_settings().timezone)


templates.env.filters["localdate"] = _localdate
templates.env.filters["datetime_local"] = _datetime_local


def render(
    request: Request,
    template: str,
    status_code: int = 200,
    **context: Any,
) -> HTMLResponse:
    """Render template with the common page context."""
    settings = get_settings()
    store = getattr(request.state, "session_store", None)
    page_context: dict[str, Any] = {
        "t": get_messages(settings.ui_locale),
        "locale": settings.ui_locale,
        "app_name": settings.app_name,
        "session": store.session if store is not None else None,
        **context,
    }
    response = templates.TemplateResponse(
        request, template, page_context, status_code=status_code
    )
    apply_session_cookie(request, response)
    return response
