"""FastAPI application factory and entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI

from pitchcraft.api.middleware import CorrelationIdMiddleware, add_exception_handlers
from pitchcraft.api.routes import pitch, system
from pitchcraft.config import Settings
from pitchcraft.logging import configure_logging
from pitchcraft.research import ResearchSynthesizer

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load settings and build the research synthesizer on startup."""
    settings = Settings()

    configure_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
    )

    app.state.settings = settings
    app.state.synthesizer = ResearchSynthesizer.from_settings(settings)

    logger.info("Pitchcraft API started", host=settings.api_host, port=settings.api_port)
    yield
    logger.info("Pitchcraft API shut down")


def include_routes(app: FastAPI) -> None:
    """Mount all routers under /api/v1."""
    prefix = "/api/v1"
    app.include_router(system.router, prefix=prefix)
    app.include_router(pitch.router, prefix=prefix)


def create_app() -> FastAPI:
    """Application factory."""
    app = FastAPI(
        title="Pitchcraft",
        description="Startup pitch deck generation API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(CorrelationIdMiddleware)
    add_exception_handlers(app)

    # Prometheus metrics endpoint
    from prometheus_client import make_asgi_app

    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    include_routes(app)
    return app


def main() -> None:
    """Entry point for `pitchcraft-api` command."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "pitchcraft.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )
