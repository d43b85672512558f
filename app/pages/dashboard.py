"""Dashboard view: totals, this month, attachments, top sources and latest documents."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from app.api.v1.dependencies.documents import get_document_query_service
from app.api.v1.dependencies.session import CurrentSession
from app.application.services.document_aggregates import build_dashboard_stats
from app.application.use_cases.documents import DocumentQueryService
from app.core.config import get_settings
from app.domain.exceptions import CasefileException
from app.pages.messages import get_messages
from app.pages.rendering import render
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    session: CurrentSession,
    query: Annotated[DocumentQueryService, Depends(get_document_query_service)],
):
    settings = get_settings()
    load_error = None
    try:
        docs = await query.list_documents()
    except CasefileException:
        logger.exception("Loading dashboard failed")
        docs = []
        load_error = get_messages(settings.ui_locale)["load_failed"]
    # "This month" is the calendar month in the display timezone.
    now = utc_now().astimezone(settings.timezone)
    return render(
        request,
        "dashboard.html",
        stats=build_dashboard_stats(docs, now),
        load_error=load_error,
    )
