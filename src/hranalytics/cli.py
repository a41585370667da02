"""Typer CLI entrypoint for the analytics report."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from .config import load_settings
from .container import create_container
from .core import AnalyticsRequest
from .core.window import WINDOW_PRESETS
from .logging import configure_logging

app = typer.Typer(help="Screening analytics and fairness audit CLI.")


@app.command()
def report(
    applications: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Applications JSON/JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output report JSON path.",
    ),
    jobs: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Jobs JSON/JSONL path."),
    sources: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Candidate sources JSON/JSONL path."),
    feedback: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Reviewer feedback JSON/JSONL path."),
    window: int = typer.Option(30, help="Window in days (7, 30, 90 or 365); 0 covers the whole snapshot."),
    start: Optional[str] = typer.Option(None, help="Explicit range start (ISO-8601); overrides --window."),
    end: Optional[str] = typer.Option(None, help="Explicit range end (ISO-8601); a date-only value includes that whole day."),
    granularity: str = typer.Option("week", help="Trend bucket size: week or month."),
    now: Optional[str] = typer.Option(None, help="Reference instant (ISO-8601) for the window."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    workers: Optional[int] = typer.Option(None, min=1, help="Run aggregators on a thread pool of this size."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Generate the analytics report for a record snapshot."""
    if window and window not in WINDOW_PRESETS:
        raise typer.BadParameter(
            f"Window must be one of {', '.join(map(str, WINDOW_PRESETS))} or 0",
            param_name="window",
        )

    settings: dict[str, Any] = {}
    if config:
        try:
            settings = load_settings(config)
        except ValidationError as exc:
            raise typer.BadParameter(f"Invalid config file: {exc}", param_name="config") from exc
    if workers:
        settings.setdefault("engine", {})["max_workers"] = workers

    try:
        request = AnalyticsRequest(
            window_days=window or None,
            start=start,
            end=end,
            granularity=granularity,
            now=now,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()

    result = pipeline.run(
        applications_path=applications,
        jobs_path=jobs,
        sources_path=sources,
        feedback_path=feedback,
        output_path=output,
        request=request,
    )
    typer.echo(
        f"Analyzed {result.stats.total} applications "
        f"(fairness grade {result.bias_analysis.fairness_grade}). Report saved to {output}."
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
