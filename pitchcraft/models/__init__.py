"""Re-exports all Pydantic models."""

from pitchcraft.models.pitch import GeneratedPitch, LogoResult, PitchDeck, StartupContext
from pitchcraft.models.research import ResearchResult

__all__ = [
    "GeneratedPitch",
    "LogoResult",
    "PitchDeck",
    "ResearchResult",
    "StartupContext",
]
