"""FastAPI application serving the token link form backend."""

import logging

from fastapi import FastAPI

from jwt_redirect.api.v1 import generate_router
from jwt_redirect.services.auth.keys import key_pair_from_settings
from jwt_redirect.services.settings import Settings, get_settings, setup_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    In asymmetric mode the RS256 key pair is loaded here, so missing or
    malformed keys stop the process at startup with ``KeyResolutionError``.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(__name__)

    key_pair = None
    if settings.signing_mode == "asymmetric":
        key_pair = key_pair_from_settings(settings)

    app = FastAPI(title="jwt-redirect")
    app.state.settings = settings
    app.state.key_pair = key_pair
    app.include_router(generate_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "mode": settings.signing_mode}

    logger.info("jwt-redirect ready in %s mode", settings.signing_mode)
    return app


def app_factory() -> FastAPI:
    """Build the application from environment settings with logging configured.

    Serve with ``uvicorn --factory jwt_redirect.main:app_factory`` or through
    the root ``asgi.py``.
    """
    settings = get_settings()
    setup_logging(settings)
    return create_app(settings)
