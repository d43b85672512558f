"""Document list view with search, source filter, edit and delete actions."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.v1.dependencies.documents import (
    get_document_delete_service,
    get_document_edit_service,
    get_document_query_service,
)
from app.api.v1.dependencies.session import CurrentSession
from app.application.services.document_aggregates import (
    ALL_SOURCES,
    filter_documents,
    source_catalogue,
)
from app.application.use_cases.documents import (
    DocumentDeleteService,
    DocumentEditService,
    DocumentQueryService,
)
from app.core.config import get_settings
from app.domain.exceptions import (
    CasefileException,
    ResourceNotFoundException,
    ValidationException,
)
from app.pages.messages import get_messages, validation_message
from app.pages.rendering import render
from app.schemas.document import DocumentForm, format_received_date
from app.shared.telemetry.tracing import add_span_attributes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

LIST_PATH = "/documents"

# ?notice=<key> -> message key
NOTICES: dict[str, str] = {
    "deleted": "notice_deleted",
    "deleted_orphan": "notice_deleted_orphan",
    "updated": "notice_updated",
    "not_found": "notice_not_found",
    "failed": "operation_failed",
}

QueryServiceDep = Annotated[DocumentQueryService, Depends(get_document_query_service)]


def _to_list(notice: str) -> RedirectResponse:
    return RedirectResponse(f"{LIST_PATH}?notice={notice}", status_code=303)


@router.get("", response_class=HTMLResponse)
async def documents_page(
    request: Request,
    session: CurrentSession,
    query: QueryServiceDep,
    q: str = "",
    source: str = ALL_SOURCES,
    notice: str | None = None,
):
    """Full snapshot, filtered in memory by search term and source."""
    t = get_messages(get_settings().ui_locale)
    load_error = None
    try:
        docs = await query.list_documents()
    except CasefileException:
        logger.exception("Loading documents failed")
        docs = []
        load_error = t["load_failed"]

    shown = filter_documents(docs, q, source)
    add_span_attributes(count=len(shown))
    return render(
        request,
        "documents.html",
        documents=shown,
        total=len(docs),
        sources=source_catalogue(docs),
        q=q,
        source=source,
        all_sources=ALL_SOURCES,
        notice=t[NOTICES[notice]] if notice in NOTICES else None,
        notice_kind="error" if notice in ("failed", "deleted_orphan", "not_found") else "success",
        load_error=load_error,
    )


@router.get("/{document_id}/edit", response_class=HTMLResponse)
async def edit_page(
    request: Request,
    document_id: str,
    session: CurrentSession,
    query: QueryServiceDep,
):
    try:
        doc = await query.get_document(document_id)
    except ResourceNotFoundException:
        return _to_list("not_found")
    form = DocumentForm(
        complainant_name=doc.complainant_name,
        subject=doc.subject,
        source=doc.source,
        received_date=format_received_date(doc.received_date, get_settings().timezone),
        notes=doc.notes,
    )
    return render(request, "document_edit.html", document_id=doc.id, form=form)


@router.post("/{document_id}/edit", response_class=HTMLResponse)
async def edit_document(
    request: Request,
    document_id: str,
    session: CurrentSession,
    form: Annotated[DocumentForm, Form()],
    edits: Annotated[DocumentEditService, Depends(get_document_edit_service)],
):
    """Overwrite the five metadata fields. Errors keep the form open with its values."""
    settings = get_settings()
    t = get_messages(settings.ui_locale)
    try:
        fields = form.to_fields(settings.timezone)
        await edits.edit_document(document_id, fields)
    except ValidationException as e:
        return render(
            request,
            "document_edit.html",
            status_code=400,
            document_id=document_id,
            form=form,
            error=validation_message(e, settings.ui_locale),
        )
    except ResourceNotFoundException:
        return _to_list("not_found")
    except CasefileException:
        logger.exception("Editing document %s failed", document_id)
        return render(
            request,
            "document_edit.html",
            status_code=502,
            document_id=document_id,
            form=form,
            error=t["operation_failed"],
        )
    return _to_list("updated")


@router.get("/{document_id}/delete", response_class=HTMLResponse)
async def delete_page(
    request: Request,
    document_id: str,
    session: CurrentSession,
    query: QueryServiceDep,
):
    """Confirmation step before deleting."""
    try:
        doc = await query.get_document(document_id)
    except ResourceNotFoundException:
        return _to_list("not_found")
    return render(request, "document_delete.html", document=doc)


@router.post("/{document_id}/delete")
async def delete_document(
    document_id: str,
    session: CurrentSession,
    deletes: Annotated[DocumentDeleteService, Depends(get_document_delete_service)],
) -> RedirectResponse:
    try:
        outcome = await deletes.delete_document(document_id)
    except CasefileException:
        logger.exception("Deleting document %s failed", document_id)
        return _to_list("failed")
    return _to_list("deleted_orphan" if outcome.orphaned_blob else "deleted")
