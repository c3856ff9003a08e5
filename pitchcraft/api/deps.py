"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from pitchcraft.agent import PitchAgent
from pitchcraft.config import Settings
from pitchcraft.research import ResearchSynthesizer


def _get_settings(request: Request) -> Settings:
    """Get the settings instance from app state."""
    return request.app.state.settings  # type: ignore[no-any-return]


def _get_synthesizer(request: Request) -> ResearchSynthesizer:
    """Get the research synthesizer from app state."""
    return request.app.state.synthesizer  # type: ignore[no-any-return]


def get_pitch_agent(
    settings: Annotated[Settings, Depends(_get_settings)],
    synthesizer: Annotated[ResearchSynthesizer, Depends(_get_synthesizer)],
) -> PitchAgent:
    return PitchAgent(settings, synthesizer=synthesizer)


SettingsDep = Annotated[Settings, Depends(_get_settings)]
SynthesizerDep = Annotated[ResearchSynthesizer, Depends(_get_synthesizer)]
PitchAgentDep = Annotated[PitchAgent, Depends(get_pitch_agent)]
