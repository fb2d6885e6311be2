"""Login, logout and the not-authorized page."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse, Response

from poseidon.api.deps import get_user_repository
from poseidon.api.rendering import redirect, render
from poseidon.core.config import settings
from poseidon.core.errors import InvalidCredentials
from poseidon.repositories.users import UserRepository
from poseidon.services.access import FORBIDDEN_MESSAGE
from poseidon.services.auth import Authenticator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/login")
def login_page(request: Request) -> Response:
    """Login form; ?error after a failed attempt, ?logout after signing out."""
    return render(
        request,
        "login.html",
        {
            "error": "error" in request.query_params,
            "logout": "logout" in request.query_params,
        },
        view="login",
    )


@router.post("/login")
def login(
    request: Request,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> RedirectResponse:
    """
    Check credentials and start a session.

    Unknown user and wrong password take the same path, so the response does
    not reveal which one failed.
    """
    authenticator: Authenticator = request.app.state.authenticator
    try:
        identity = authenticator.authenticate(users, username.strip(), password)
    except InvalidCredentials:
        return redirect("/login?error")
    response = redirect(settings.LOGIN_SUCCESS_URL)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        authenticator.issue_token(identity),
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.APP_ENV == "prod",
    )
    return response


@router.get("/logout")
def logout(request: Request) -> RedirectResponse:
    identity = getattr(request.state, "identity", None)
    if identity is not None and not identity.guest:
        logger.info("Logout", extra={"actor": identity.username})
    response = redirect("/login?logout")
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/error")
def error_page(request: Request) -> Response:
    return render(request, "403.html", {"errorMsg": FORBIDDEN_MESSAGE}, status_code=403, view="403")
