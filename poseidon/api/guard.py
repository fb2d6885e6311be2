"""HTTP middleware applying the access guard to every request."""

import logging

from fastapi import Request
from fastapi.responses import RedirectResponse, Response
from starlette.middleware.base import RequestResponseEndpoint

from poseidon.api.rendering import render
from poseidon.core.config import settings
from poseidon.services.access import FORBIDDEN_MESSAGE, AccessGuard, Decision
from poseidon.services.auth import Authenticator

logger = logging.getLogger(__name__)

LOGIN_URL = "/login"


async def access_guard(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """
    Resolve the request identity, then allow, redirect to login, or answer 403.

    The identity is stored on request.state for this request only; routes read it
    through the get_identity dependency.
    """
    authenticator: Authenticator = request.app.state.authenticator
    guard: AccessGuard = request.app.state.access_guard

    identity = authenticator.resolve(request.cookies.get(settings.SESSION_COOKIE_NAME))
    request.state.identity = identity

    path = request.url.path
    decision = guard.decide(path, identity)
    if decision is Decision.LOGIN:
        logger.info("Anonymous request to %s redirected to login", path)
        return RedirectResponse(LOGIN_URL, status_code=302)
    if decision is Decision.FORBIDDEN:
        logger.info(
            "Access denied to %s",
            path,
            extra={"actor": identity.username if identity else "-"},
        )
        return render(
            request,
            "403.html",
            {"errorMsg": FORBIDDEN_MESSAGE},
            status_code=403,
            view="403",
        )
    return await call_next(request)
