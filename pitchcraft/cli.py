"""Click CLI entry point for Pitchcraft."""

from __future__ import annotations

import json
import random
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from pitchcraft.config import Settings
from pitchcraft.logging import bind_command, configure_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Pitchcraft: startup idea to investor-ready pitch deck."""
    ctx.ensure_object(dict)
    settings = Settings()
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, log_format=settings.log_format)
    bind_command(ctx.invoked_subcommand)
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="Print the raw result as JSON")
@click.pass_context
def research(ctx: click.Context, query: str, as_json: bool) -> None:
    """Research competitors for a startup idea or market."""
    from pitchcraft.research import ResearchSynthesizer

    if not query.strip():
        raise click.BadParameter("query must not be empty", param_hint="QUERY")

    synthesizer = ResearchSynthesizer.from_settings(ctx.obj["settings"])
    result = synthesizer.research(query)

    if as_json:
        click.echo(result.model_dump_json(indent=2))
        return

    click.echo(result.insights)
    click.echo("\nCompetitors:")
    for competitor in result.competitors:
        click.echo(f"  - {competitor}")
    if result.sources:
        click.echo("\nSources:")
        for source in result.sources:
            click.echo(f"  {source}")


@cli.command()
@click.argument("name")
@click.option("--seed", type=int, default=None, help="Seed for a reproducible colour")
def logo(name: str, seed: int | None) -> None:
    """Generate a placeholder logo URL for a startup name."""
    from pitchcraft.logo import generate_logo

    rng = random.Random(seed) if seed is not None else None
    click.echo(generate_logo(name, rng=rng).logo_url)


@cli.command()
@click.option("--name", required=True, help="Startup name")
@click.option("--description", required=True, help="What the product does")
@click.option("--audience", default="", help="Target customers")
@click.option("--problem", default="", help="Problem being solved")
@click.option("--business-model", default="", help="Revenue model, if known")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the pitch deck Markdown here (default: <name>_Pitch_Deck.md)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the agent result as JSON")
@click.pass_context
def generate(
    ctx: click.Context,
    name: str,
    description: str,
    audience: str,
    problem: str,
    business_model: str,
    output: Path | None,
    as_json: bool,
) -> None:
    """Run the pitch agent and export the resulting deck."""
    from pitchcraft.agent import LLMNotConfiguredError, PitchAgent
    from pitchcraft.export import export_filename, render_markdown
    from pitchcraft.models.pitch import StartupContext

    try:
        context = StartupContext(
            name=name,
            description=description,
            audience=audience,
            problem=problem,
            business_model=business_model,
        )
    except ValidationError as exc:
        click.echo(f"Error: invalid startup context: {exc}", err=True)
        sys.exit(1)

    agent = PitchAgent(ctx.obj["settings"])
    try:
        result = agent.generate(context)
    except LLMNotConfiguredError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        click.echo(result.message)

    if result.pitch is None:
        click.echo("The agent did not produce a pitch deck; nothing exported.", err=True)
        sys.exit(1)

    document = render_markdown(result.pitch, logo=result.logo, research=result.research)
    path = output or Path(export_filename(result.pitch.startup_name))
    path.write_text(document, encoding="utf-8")
    click.echo(f"Pitch deck written to {path}", err=as_json)


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the HTTP API server."""
    import uvicorn

    settings = ctx.obj["settings"]
    uvicorn.run(
        "pitchcraft.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )
