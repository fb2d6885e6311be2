"""Turn workflow outcomes into HTTP responses: Jinja2 pages, redirects and flash cookies."""

from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from poseidon.core.config import settings
from poseidon.core.security import FLASH_EXPIRE_SECONDS, decode_flash, encode_flash
from poseidon.services.outcomes import Flash, Outcome, Redirect

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def form_value(value: Any) -> str:
    """Format a record value for an <input value=...> or a table cell."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    return str(value)


templates.env.filters["form_value"] = form_value
templates.env.globals["admin_role"] = settings.ADMIN_ROLE


def set_flash(response: Response, flash: Flash) -> None:
    response.set_cookie(
        settings.FLASH_COOKIE_NAME,
        encode_flash(flash.kind, flash.message),
        max_age=FLASH_EXPIRE_SECONDS,
        httponly=True,
        samesite="lax",
    )


def render(
    request: Request,
    template: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
    view: str | None = None,
) -> Response:
    """
    Render a page and consume the pending flash message, if any.

    The flash cookie is deleted on this response, so each message shows exactly once.
    """
    page: dict[str, Any] = dict(context or {})
    page["view"] = view or template.removesuffix(".html")
    page["identity"] = getattr(request.state, "identity", None)
    raw_flash = request.cookies.get(settings.FLASH_COOKIE_NAME)
    decoded = decode_flash(raw_flash) if raw_flash else None
    if decoded is not None:
        kind, message = decoded
        page["flash"] = Flash(kind, message)
    response = templates.TemplateResponse(request, template, page, status_code=status_code)
    if raw_flash is not None:
        response.delete_cookie(settings.FLASH_COOKIE_NAME)
    return response


def redirect(url: str, flash: Flash | None = None) -> RedirectResponse:
    """303 See Other, so a POSTed form is followed by a GET."""
    response = RedirectResponse(url, status_code=303)
    if flash is not None:
        set_flash(response, flash)
    return response


def to_response(request: Request, outcome: Outcome) -> Response:
    if isinstance(outcome, Redirect):
        return redirect(outcome.url, outcome.flash)
    return render(
        request,
        outcome.template,
        outcome.context,
        status_code=outcome.status_code,
        view=outcome.view,
    )
