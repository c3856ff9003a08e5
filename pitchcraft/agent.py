"""Pitch agent: an LLM consultant that drives the three pitch tools.

The agent reads the founder's context, researches competitors, writes the
pitch sections and asks for a logo. Tool results are recorded on a
per-run ``PitchSession`` so callers get structured data back alongside the
agent's closing message.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError
from pydantic_ai import Agent, ModelRetry, RunContext, Tool
from pydantic_ai.models.anthropic import AnthropicModelSettings

from pitchcraft.config import Settings
from pitchcraft.logo import generate_logo
from pitchcraft.metrics import llm_tokens_total
from pitchcraft.models.pitch import GeneratedPitch, LogoResult, PitchDeck, StartupContext
from pitchcraft.models.research import ResearchResult
from pitchcraft.pitch import PITCH_FORMATTER_DESCRIPTION, format_pitch
from pitchcraft.research import ResearchSynthesizer

if TYPE_CHECKING:
    import random

    from pydantic_ai.models import Model
    from pydantic_ai.usage import RunUsage

logger = structlog.get_logger()

INSTRUCTIONS = """\
You are an expert startup pitch consultant and business analyst. You help
founders refine their startup ideas into compelling, investor-ready pitch decks.

When asked to generate a pitch deck:

1. GET CONTEXT: call get_startup_context to read what the founder provided
   (name, description, audience, problem, business model).

2. RESEARCH: call research_tool with a query combining the startup name and
   description, e.g. "{name} - {description}".

3. POLISH & STRUCTURE: call pitch_formatter_tool with fully written sections:
   - problem: 2-3 compelling, relatable sentences.
   - solution: 2-3 sentences on the unique solution and key differentiators.
   - market: 2-3 sentences on market size, customer segments and opportunity,
     with estimates such as "$X billion market".
   - business_model: expand the founder's model, or suggest a practical one
     (SaaS -> subscriptions, marketplace -> commission, ...).
   - tech_stack: 2-3 sentences of specific, modern, industry-standard technology.
   - startup_name: the name from get_startup_context.

4. GENERATE LOGO: call generate_logo_tool with the startup name.

The founder already knows their idea: refine it, do not invent a new one. Use
the research for credibility, be specific with numbers and technologies, and
think like a Y Combinator partner.
"""


class LLMNotConfiguredError(Exception):
    """The pitch agent has no LLM API key to work with."""


@dataclass
class PitchSession:
    """Per-run dependencies and the tool results collected during the run."""

    context: StartupContext
    synthesizer: ResearchSynthesizer
    rng: random.Random | None = None
    research: ResearchResult | None = None
    pitch: PitchDeck | None = None
    logo: LogoResult | None = None


def get_startup_context(ctx: RunContext[PitchSession]) -> StartupContext:
    """Get the structured startup information the founder filled in."""
    return ctx.deps.context


def research_tool(ctx: RunContext[PitchSession], query: str) -> ResearchResult:
    """Research similar startups and competitors in a given market or idea space.

    Args:
        query: Startup idea or market to research.
    """
    result = ctx.deps.synthesizer.research(query)
    ctx.deps.research = result
    return result


def pitch_formatter_tool(
    ctx: RunContext[PitchSession],
    problem: str,
    solution: str,
    market: str,
    business_model: str,
    tech_stack: str,
    startup_name: str,
) -> PitchDeck:
    try:
        pitch = format_pitch(
            problem=problem,
            solution=solution,
            market=market,
            business_model=business_model,
            tech_stack=tech_stack,
            startup_name=startup_name,
        )
    except ValidationError as exc:
        raise ModelRetry(f"Every section must be written out: {exc}") from exc
    ctx.deps.pitch = pitch
    return pitch


def generate_logo_tool(ctx: RunContext[PitchSession], name: str) -> LogoResult:
    """Generate a logo image for a startup based on its name.

    Args:
        name: Startup name to generate the logo for.
    """
    logo = generate_logo(name, rng=ctx.deps.rng)
    ctx.deps.logo = logo
    return logo


TOOLS = [
    Tool(get_startup_context, takes_ctx=True),
    Tool(research_tool, takes_ctx=True),
    Tool(pitch_formatter_tool, takes_ctx=True, description=PITCH_FORMATTER_DESCRIPTION),
    Tool(generate_logo_tool, takes_ctx=True),
]


def _get_or_create_event_loop() -> asyncio.AbstractEventLoop:
    """Get the current event loop or create a new one."""
    try:
        loop = asyncio.get_event_loop()
        if loop.is_closed():
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
        return loop
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        return loop


def build_prompt(context: StartupContext) -> str:
    return f"Generate an investor-ready pitch deck for my startup {context.name}."


class PitchAgent:
    """Runs the pitch consultant agent with Anthropic Claude via PydanticAI."""

    def __init__(
        self,
        settings: Settings | None = None,
        synthesizer: ResearchSynthesizer | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.synthesizer = synthesizer or ResearchSynthesizer.from_settings(self.settings)
        self.rng = rng
        self._model: Model | None = None

    @property
    def is_available(self) -> bool:
        return self._model is not None or bool(self.settings.anthropic_api_key)

    @property
    def model(self) -> Model:
        if self._model is None:
            if not self.settings.anthropic_api_key:
                raise LLMNotConfiguredError("ANTHROPIC_API_KEY is not set")
            from pydantic_ai.models.anthropic import AnthropicModel
            from pydantic_ai.providers.anthropic import AnthropicProvider

            provider = AnthropicProvider(api_key=self.settings.anthropic_api_key)
            self._model = AnthropicModel(self.settings.llm_model, provider=provider)
        return self._model

    def _build_agent(self) -> Agent[PitchSession, str]:
        return Agent(
            self.model,
            deps_type=PitchSession,
            output_type=str,
            system_prompt=INSTRUCTIONS,
            tools=TOOLS,
        )

    def _model_settings(self) -> AnthropicModelSettings:
        return AnthropicModelSettings(
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.llm_max_tokens,
            anthropic_cache_instructions=True,
        )

    def _record_usage(self, usage: RunUsage) -> None:
        logger.info(
            "LLM response",
            model=self.settings.llm_model,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            requests=usage.requests,
        )
        model_label = self.settings.llm_model
        llm_tokens_total.labels(model=model_label, token_type="request").inc(
            usage.input_tokens or 0
        )
        llm_tokens_total.labels(model=model_label, token_type="response").inc(
            usage.output_tokens or 0
        )

    async def arun(self, context: StartupContext) -> GeneratedPitch:
        """Run the agent for one startup and collect what its tools produced.

        Raises:
            LLMNotConfiguredError: If no model is set and no API key is configured.
        """
        agent = self._build_agent()
        session = PitchSession(context=context, synthesizer=self.synthesizer, rng=self.rng)

        logger.info("Pitch agent started", startup=context.name)
        result = await agent.run(
            build_prompt(context),
            deps=session,
            model_settings=self._model_settings(),
        )
        self._record_usage(result.usage())

        return GeneratedPitch(
            message=result.output,
            research=session.research,
            pitch=session.pitch,
            logo=session.logo,
        )

    def generate(self, context: StartupContext) -> GeneratedPitch:
        """Blocking variant of :meth:`arun` for the CLI."""
        loop = _get_or_create_event_loop()
        return loop.run_until_complete(self.arun(context))
