"""API request/response schemas (separate from domain models)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pitchcraft.models.pitch import LogoResult, PitchDeck
from pitchcraft.models.research import ResearchResult

# --- Requests ---


class ResearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    query: str = Field(min_length=1, description="Startup idea or market to research")


class PitchSectionsRequest(BaseModel):
    """Raw pitch sections as written by the agent or the founder."""

    model_config = ConfigDict(frozen=True)

    problem: str
    solution: str
    market: str
    business_model: str
    tech_stack: str
    startup_name: str


class LogoRequest(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, description="Startup name to generate a logo for")


class ExportRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    pitch: PitchDeck
    logo: LogoResult | None = None
    research: ResearchResult | None = None


# --- Responses ---


class HealthResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    version: str


class ConfigCheckResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    configured: dict[str, bool]
