"""
cli.py — Click CLI entrypoint for the report pipeline.

Usage:
    dpwh-pipeline load data/dpwh_flood_control_projects.csv
    dpwh-pipeline report --output-dir output
    dpwh-pipeline --log-format json summary
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn

import click
import structlog

from dpwh_shared.config import settings
from dpwh_pipeline.errors import PipelineError
from dpwh_pipeline.pipelines.flood_control import PipelineSession, generate_reports, load
from dpwh_pipeline.reports.summary import summarize
from dpwh_pipeline.utils.logging import configure_logging

log = structlog.get_logger(__name__)

_source_argument = click.argument(
    "source",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)


def _fail(exc: PipelineError) -> NoReturn:
    log.error("pipeline_failed", reason=exc.reason, error=str(exc))
    click.secho(f"Error ({exc.reason}): {exc}", fg="red", err=True)
    raise SystemExit(1)


def _load(source: Path | None, *, err: bool = False) -> PipelineSession:
    """Load SOURCE and print diagnostics (to stderr when `err` is set)."""
    click.echo("Processing dataset...", err=err)
    try:
        session = load(source)
    except PipelineError as exc:
        _fail(exc)
    diag = session.diagnostics
    if diag.row_errors:
        click.echo(
            f"Validation errors detected: {diag.error_count} invalid records", err=err
        )
        for line in diag.preview():
            click.echo(f"  - {line}" if not line.startswith("...") else f"  {line}", err=err)
        click.echo(f"Valid records: {diag.rows_valid} out of {diag.rows_loaded}", err=err)
    click.echo(
        f"({diag.rows_loaded} rows loaded, {diag.rows_retained} filtered for "
        f"{session.start_year}-{session.end_year})",
        err=err,
    )
    return session


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level",
)
@click.option(
    "--log-format",
    default=settings.log_format,
    type=click.Choice(["console", "json"]),
    help="Log output format",
)
def main(log_level: str, log_format: str) -> None:
    """DPWH flood-control project report pipeline."""
    configure_logging(log_level, log_format)


@main.command("load")
@_source_argument
def load_command(source: Path | None) -> None:
    """Load and validate SOURCE without writing reports."""
    _load(source)


@main.command()
@_source_argument
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Report directory (default: settings.output_dir)",
)
def report(source: Path | None, output_dir: Path | None) -> None:
    """Load SOURCE and write all reports."""
    session = _load(source)
    click.echo("Generating reports...")
    try:
        paths = generate_reports(session, output_dir)
    except PipelineError as exc:
        _fail(exc)
    for path in paths:
        click.echo(f"  wrote {path}")
    click.echo("Summary Stats (summary.json):")
    click.echo(paths[-1].read_text(encoding="utf-8").strip())


@main.command()
@_source_argument
def summary(source: Path | None) -> None:
    """Print summary statistics for SOURCE as JSON on stdout."""
    session = _load(source, err=True)
    click.echo(json.dumps(summarize(session.records).model_dump(), indent=2))


if __name__ == "__main__":
    main()
