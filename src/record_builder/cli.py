"""CLI entry point for the record builder demos."""

from __future__ import annotations

import json

import click

from .core.config import OUTPUT_FORMATS, SCENARIOS


@click.group()
def main() -> None:
    """Immutable records with builders and copy helpers."""


@main.command()
@click.option("--config", default=None, help="Config file path")
@click.option(
    "--format", "output_format",
    type=click.Choice(OUTPUT_FORMATS), default=None,
    help="Output format override",
)
@click.option(
    "--scenario", "scenarios",
    type=click.Choice(SCENARIOS), multiple=True,
    help="Scenario to run (repeatable, default: all configured)",
)
def demo(config: str | None, output_format: str | None, scenarios: tuple[str, ...]) -> None:
    """Run the builder and copy-mutation demonstrations."""
    from .core.config import load_settings
    from .core.errors import ConfigError
    from .observability.logger import get_logger, new_trace_id, setup_logging
    from .service.person_service import run_demo

    overrides: dict = {}
    if output_format:
        overrides.setdefault("demo", {})["output_format"] = output_format
    if scenarios:
        overrides.setdefault("demo", {})["scenarios"] = list(scenarios)

    settings = load_settings(config_path=config, overrides=overrides)
    try:
        settings.validate_demo()
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )
    new_trace_id()
    log = get_logger(__name__)
    log.info("demo.start", scenarios=settings.demo.scenarios)

    if settings.demo.output_format == "json":
        results = run_demo(echo=lambda line: None, scenarios=settings.demo.scenarios)
        payload = {r.name: r.as_dict() for r in results}
        click.echo(json.dumps(payload, indent=2))
    else:
        run_demo(echo=click.echo, scenarios=settings.demo.scenarios)
