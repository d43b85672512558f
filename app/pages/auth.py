"""Entry (sign in), registration and logout views."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.v1.dependencies.session import (
    OptionalSession,
    apply_session_cookie,
    get_credential_service,
)
from app.application.services.credential_service import CredentialService
from app.core.config import get_settings
from app.core.limiter import limit_login, limit_register
from app.domain.exceptions import AuthenticationException, ValidationException
from app.pages.messages import auth_error_message, validation_message
from app.pages.rendering import render
from app.schemas.auth import LoginForm, RegisterForm

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

HOME_PATH = "/dashboard"

CredentialServiceDep = Annotated[CredentialService, Depends(get_credential_service)]


def _redirect(request: Request, url: str) -> RedirectResponse:
    return apply_session_cookie(request, RedirectResponse(url, status_code=303))


@router.get("/", response_class=HTMLResponse)
async def login_page(request: Request, session: OptionalSession):
    """Entry view: sign-in form, or straight to the dashboard when signed in."""
    if session is not None:
        return _redirect(request, HOME_PATH)
    return render(request, "login.html", form=LoginForm())


@router.post("/", response_class=HTMLResponse)
@limit_login
async def login(
    request: Request,
    form: Annotated[LoginForm, Form()],
    credentials: CredentialServiceDep,
):
    """Sign in. Failures re-render the form with the email kept."""
    locale = get_settings().ui_locale
    kept = LoginForm(email=form.email)
    try:
        await credentials.login(form.email, form.password)
    except ValidationException as e:
        return render(
            request, "login.html", status_code=400, form=kept, error=validation_message(e, locale)
        )
    except AuthenticationException as e:
        logger.info("Sign-in rejected: %s", e.reason.value)
        return render(
            request,
            "login.html",
            status_code=401,
            form=kept,
            error=auth_error_message(e.reason, locale),
        )
    return _redirect(request, HOME_PATH)


@router.get("/register", response_class=HTMLResponse)
async def register_page(request: Request, session: OptionalSession):
    if session is not None:
        return _redirect(request, HOME_PATH)
    return render(request, "register.html", form=RegisterForm())


@router.post("/register", response_class=HTMLResponse)
@limit_register
async def register(
    request: Request,
    form: Annotated[RegisterForm, Form()],
    credentials: CredentialServiceDep,
):
    """Create an account and sign in; on success go to the dashboard."""
    locale = get_settings().ui_locale
    kept = RegisterForm(email=form.email)
    try:
        await credentials.register(form.email, form.password, form.confirm_password)
    except ValidationException as e:
        return render(
            request,
            "register.html",
            status_code=400,
            form=kept,
            error=validation_message(e, locale),
        )
    except AuthenticationException as e:
        logger.info("Registration rejected: %s", e.reason.value)
        return render(
            request,
            "register.html",
            status_code=400,
            form=kept,
            error=auth_error_message(e.reason, locale),
        )
    return _redirect(request, HOME_PATH)


@router.post("/logout")
async def logout(request: Request, credentials: CredentialServiceDep) -> RedirectResponse:
    credentials.logout()
    return _redirect(request, "/")
