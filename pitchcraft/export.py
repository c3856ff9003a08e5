"""Pitch deck document export (Markdown)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pitchcraft.models.pitch import LogoResult, PitchDeck
    from pitchcraft.models.research import ResearchResult

FOOTER = "Generated with Pitchcraft"

_FILENAME_RE = re.compile(r"[^a-zA-Z0-9]")


def export_filename(name: str) -> str:
    return f"{_FILENAME_RE.sub('_', name)}_Pitch_Deck.md"


def render_markdown(
    pitch: PitchDeck,
    logo: LogoResult | None = None,
    research: ResearchResult | None = None,
) -> str:
    """Render a pitch deck as a Markdown document.

    Sections follow deck order: title and logo, the five written sections,
    then market research when available.
    """
    title = logo.name if logo is not None else pitch.startup_name
    sections: list[str] = [f"# {title}"]

    if logo is not None:
        sections.append(f"![{logo.name} logo]({logo.logo_url})")

    for heading, body in (
        ("Problem", pitch.problem),
        ("Solution", pitch.solution),
        ("Market", pitch.market),
        ("Business Model", pitch.business_model),
        ("Tech Stack", pitch.tech_stack),
    ):
        sections.append(f"## {heading}\n\n{body}")

    if research is not None:
        lines = ["## Market Research", "", research.insights, "", "### Key Competitors", ""]
        lines.extend(f"- {competitor}" for competitor in research.competitors)
        if research.sources:
            lines.extend(["", "### Sources", ""])
            lines.extend(f"- {source}" for source in research.sources)
        sections.append("\n".join(lines))

    sections.append(f"---\n\n_{FOOTER}_")
    return "\n\n".join(sections) + "\n"
