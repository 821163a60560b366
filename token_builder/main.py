"""
FastAPI application for the token builder editors.

Run locally:
    uvicorn token_builder.main:app --reload
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from . import __version__
from .api.router import router
from .core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with logging configured from settings."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="Token Builder",
        description="Token configuration model for tokenized-asset editors",
        version=__version__,
    )
    app.include_router(router, prefix=settings.api_prefix)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info(f"Token builder API mounted at {settings.api_prefix or '/'}")
    return app


app = create_app()
