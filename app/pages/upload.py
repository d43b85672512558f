"""Upload view: metadata form plus an optional file."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse

from app.api.v1.dependencies.documents import get_document_upload_service
from app.api.v1.dependencies.session import CurrentSession
from app.application.dtos.document import UploadedFile
from app.application.use_cases.documents import DocumentUploadService
from app.core.config import get_settings
from app.core.limiter import limit_upload
from app.domain.exceptions import CasefileException, ValidationException
from app.pages.messages import get_messages, validation_message
from app.pages.rendering import render
from app.schemas.document import DocumentForm, format_received_date
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

# Seconds the success banner stays before moving to the list.
SUCCESS_REDIRECT_SECONDS = 2


def _blank_form() -> DocumentForm:
    return DocumentForm(received_date=format_received_date(utc_now(), get_settings().timezone))


@router.get("", response_class=HTMLResponse)
async def upload_page(request: Request, session: CurrentSession):
    return render(request, "upload.html", form=_blank_form())


@router.post("", response_class=HTMLResponse)
@limit_upload
async def upload_document(
    request: Request,
    session: CurrentSession,
    uploads: Annotated[DocumentUploadService, Depends(get_document_upload_service)],
    complainant_name: Annotated[str, Form()] = "",
    subject: Annotated[str, Form()] = "",
    source: Annotated[str, Form()] = "",
    received_date: Annotated[str, Form()] = "",
    notes: Annotated[str, Form()] = "",
    file: Annotated[UploadFile | None, File()] = None,
):
    """Create the document (and store its file). On success the form resets and a banner is shown."""
    settings = get_settings()
    t = get_messages(settings.ui_locale)
    form = DocumentForm(
        complainant_name=complainant_name,
        subject=subject,
        source=source,
        received_date=received_date,
        notes=notes,
    )
    # Browsers send an empty part when no file was picked.
    picked = (
        UploadedFile(
            filename=file.filename,
            content_type=file.content_type or "application/octet-stream",
            data=file.file,
        )
        if file is not None and file.filename
        else None
    )
    try:
        fields = form.to_fields(settings.timezone)
        document = await uploads.upload_document(fields, picked)
    except ValidationException as e:
        return render(
            request,
            "upload.html",
            status_code=400,
            form=form,
            error=validation_message(e, settings.ui_locale),
        )
    except CasefileException:
        logger.exception("Upload failed")
        return render(
            request, "upload.html", status_code=502, form=form, error=t["operation_failed"]
        )
    logger.info("Document %s uploaded by %s", document.id, session.uid)
    return render(
        request,
        "upload.html",
        status_code=201,
        form=_blank_form(),
        success=True,
        redirect_after=SUCCESS_REDIRECT_SECONDS,
    )
