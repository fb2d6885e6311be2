"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from poseidon.api import router
from poseidon.api.guard import access_guard
from poseidon.api.rendering import TEMPLATES_DIR
from poseidon.core.config import settings
from poseidon.core.logging import setup_logging
from poseidon.services.access import AccessGuard, default_rules
from poseidon.services.auth import build_authenticator

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

STATIC_DIR = TEMPLATES_DIR.parent / "static"

app = FastAPI(
    title="Poseidon",
    version="0.1.0",
    docs_url="/docs" if settings.APP_ENV == "dev" else None,
    redoc_url=None,
    openapi_url="/openapi.json" if settings.APP_ENV == "dev" else None,
)

# Both are immutable after startup and shared by all requests.
app.state.authenticator = build_authenticator(settings)
app.state.access_guard = AccessGuard(default_rules(settings.ADMIN_ROLE))

app.middleware("http")(access_guard)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(router)

logger.info(
    "Poseidon started (env=%s, auth_mode=%s)",
    settings.APP_ENV,
    app.state.authenticator.mode,
)
