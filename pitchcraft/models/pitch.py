"""Models for the pitch deck, its inputs and its logo."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pitchcraft.models.research import ResearchResult


class StartupContext(BaseModel):
    """What the founder filled in about their startup."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    audience: str = ""
    problem: str = ""
    business_model: str = ""


class PitchDeck(BaseModel):
    """The six written sections of an investor pitch."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    problem: str = Field(min_length=1, description="The core problem being solved")
    solution: str = Field(min_length=1, description="The proposed solution")
    market: str = Field(min_length=1, description="Target market and opportunity size")
    business_model: str = Field(min_length=1, description="How the business makes money")
    tech_stack: str = Field(min_length=1, description="Technology and implementation approach")
    startup_name: str = Field(min_length=1, description="Generated or extracted startup name")


class LogoResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    logo_url: str = Field(description="URL of the generated logo")
    name: str = Field(description="The startup name used for the logo")


class GeneratedPitch(BaseModel):
    """Everything one agent run produced."""

    model_config = ConfigDict(frozen=True)

    message: str
    research: ResearchResult | None = None
    pitch: PitchDeck | None = None
    logo: LogoResult | None = None
