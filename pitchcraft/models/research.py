"""Models for competitor research."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MAX_COMPETITORS = 5
MAX_SOURCES = 5


class ResearchResult(BaseModel):
    """Bounded competitor research handed to the agent, API and exporter."""

    model_config = ConfigDict(frozen=True)

    competitors: list[str] = Field(
        min_length=1,
        max_length=MAX_COMPETITORS,
        description='Entries of the form "<company> - <short description>"',
    )
    insights: str = Field(min_length=1, description="One paragraph of market insight")
    sources: list[str] = Field(default_factory=list, max_length=MAX_SOURCES)
