"""Pitch tool endpoints: research, formatting, logo, agent run and export."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from pitchcraft.api.deps import PitchAgentDep, SynthesizerDep
from pitchcraft.api.schemas import (
    ExportRequest,
    LogoRequest,
    PitchSectionsRequest,
    ResearchRequest,
)
from pitchcraft.export import export_filename, render_markdown
from pitchcraft.logo import generate_logo
from pitchcraft.models.pitch import GeneratedPitch, LogoResult, PitchDeck, StartupContext
from pitchcraft.models.research import ResearchResult
from pitchcraft.pitch import format_pitch

router = APIRouter(tags=["pitch"])


@router.post("/research", response_model=ResearchResult)
def research_competitors(body: ResearchRequest, synthesizer: SynthesizerDep) -> ResearchResult:
    return synthesizer.research(body.query)


@router.post("/pitch/format", response_model=PitchDeck)
def format_pitch_sections(body: PitchSectionsRequest) -> PitchDeck:
    # ValidationError is a ValueError, so blank sections surface as 400
    return format_pitch(**body.model_dump())


@router.post("/logo", response_model=LogoResult)
def create_logo(body: LogoRequest) -> LogoResult:
    return generate_logo(body.name)


@router.post("/pitch/generate", response_model=GeneratedPitch)
async def generate_pitch(body: StartupContext, agent: PitchAgentDep) -> GeneratedPitch:
    return await agent.arun(body)


@router.post("/pitch/export", response_class=PlainTextResponse)
def export_pitch(body: ExportRequest) -> PlainTextResponse:
    document = render_markdown(body.pitch, logo=body.logo, research=body.research)
    filename = export_filename(body.logo.name if body.logo else body.pitch.startup_name)
    return PlainTextResponse(
        document,
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
