"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog
from pydantic_ai import models

from pitchcraft.clients.brave import BraveSearchClient
from pitchcraft.config import Settings
from pitchcraft.research import ResearchSynthesizer

if TYPE_CHECKING:
    from collections.abc import Callable

    from pitchcraft.clients.brave import BraveWebResult

# Safety net: block all real LLM API calls during tests.
# TestModel and FunctionModel are exempt from this check.
models.ALLOW_MODEL_REQUESTS = False


@pytest.fixture(autouse=True)
def _silence_structlog():
    """Route log output nowhere so CLI output stays parseable."""
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    yield
    structlog.reset_defaults()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        brave_api_key="",
        anthropic_api_key="",
        log_level="DEBUG",
        log_format="console",
        _env_file=None,
    )


class FakeSearchClient(BraveSearchClient):
    """Search client that returns canned hits or raises, without HTTP."""

    def __init__(
        self,
        hits: list[BraveWebResult] | None = None,
        error: Exception | None = None,
        api_key: str = "fake-key",
    ) -> None:
        super().__init__(api_key=api_key)
        self.hits = hits or []
        self.error = error
        self.queries: list[tuple[str, int]] = []

    def search(self, query: str, count: int = 10) -> list[BraveWebResult]:
        self.queries.append((query, count))
        if self.error is not None:
            raise self.error
        return list(self.hits)


@pytest.fixture()
def offline_synthesizer() -> ResearchSynthesizer:
    """Synthesizer without an API key: always uses the fallback table."""
    return ResearchSynthesizer(BraveSearchClient(api_key=""))


@pytest.fixture()
def make_synthesizer() -> Callable[..., tuple[ResearchSynthesizer, FakeSearchClient]]:
    """Factory for a synthesizer backed by a FakeSearchClient."""

    def _make(
        hits: list[BraveWebResult] | None = None,
        error: Exception | None = None,
    ) -> tuple[ResearchSynthesizer, FakeSearchClient]:
        client = FakeSearchClient(hits=hits, error=error)
        return ResearchSynthesizer(client), client

    return _make
