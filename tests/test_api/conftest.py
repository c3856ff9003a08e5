"""FastAPI test client fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pitchcraft.api.app import include_routes
from pitchcraft.api.middleware import CorrelationIdMiddleware, add_exception_handlers

if TYPE_CHECKING:
    from pitchcraft.config import Settings
    from pitchcraft.research import ResearchSynthesizer


def _create_test_app(settings: Settings, synthesizer: ResearchSynthesizer) -> FastAPI:
    """Create a FastAPI app with injected test settings (no lifespan)."""
    app = FastAPI(title="Pitchcraft Test")

    app.state.settings = settings
    app.state.synthesizer = synthesizer

    app.add_middleware(CorrelationIdMiddleware)
    add_exception_handlers(app)
    include_routes(app)

    return app


@pytest.fixture()
def app(settings: Settings, offline_synthesizer: ResearchSynthesizer) -> FastAPI:
    return _create_test_app(settings, offline_synthesizer)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
