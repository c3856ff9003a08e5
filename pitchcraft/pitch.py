"""Pitch-section formatter tool.

The agent writes every section itself; this tool only validates the
sections and hands them back as a structured ``PitchDeck``.
"""

from __future__ import annotations

import structlog

from pitchcraft.models.pitch import PitchDeck

logger = structlog.get_logger()

PITCH_FORMATTER_DESCRIPTION = (
    "Creates a comprehensive pitch deck by generating detailed content for each "
    "section: Problem (the core issue being solved), Solution (unique approach and "
    "differentiators), Market (target customers and market size with estimates), "
    "Business Model (revenue streams and monetization), Tech Stack (specific "
    "technologies and architecture), and Startup Name (memorable brand name). "
    "Provide fully written, investor-ready content of 2-3 sentences for every "
    "section, never placeholders."
)


def format_pitch(
    problem: str,
    solution: str,
    market: str,
    business_model: str,
    tech_stack: str,
    startup_name: str,
) -> PitchDeck:
    """Validate the six pitch sections.

    Raises:
        pydantic.ValidationError: If any section is blank.
    """
    pitch = PitchDeck(
        problem=problem,
        solution=solution,
        market=market,
        business_model=business_model,
        tech_stack=tech_stack,
        startup_name=startup_name,
    )
    logger.info("Pitch formatted", startup_name=pitch.startup_name)
    return pitch
