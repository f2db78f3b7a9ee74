"""
Tech Health Recommender — CLI entry point.

A thin local shell around the recommendation engine. All commands follow
this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Read inputs.
  4. Run the engine.
  5. Report result to stdout.

Install and run::

    pip install -e .
    tech-health --help
    tech-health validate-config
    tech-health recommend data/analysis.json
    tech-health recommend data/analysis.json --json --now 2026-01-01T00:00:00Z
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="tech-health",
    help="Tech Health Recommender — ranked improvement recommendations from an analysis report.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from tech_health.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from tech_health.utils.logging import configure_logging
    configure_logging(config.logging)


def _read_analysis_or_exit(path: Path):
    """Read a JSON analysis file, exiting with code 1 if unreadable."""
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        typer.echo(f"[ERROR] Analysis file not found: {path}", err=True)
        raise typer.Exit(code=1)
    except json.JSONDecodeError as exc:
        typer.echo(f"[ERROR] Analysis file is not valid JSON: {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("recommend")
def recommend(
    analysis_file: Path = typer.Argument(
        ...,
        help="Path to the analysis result JSON file.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the ranked recommendations as a JSON array.",
    ),
    now: Optional[str] = typer.Option(
        None,
        "--now",
        help="Reference time (ISO-8601) for staleness and ids. Defaults to now (UTC).",
    ),
) -> None:
    """Generate ranked recommendations for one analysis result.

    \b
    Table columns:
      #, priority, score (priority score), ROI, urgency (1-5), category, title
    """
    from tech_health.recommendations.engine import RecommendationEngine
    from tech_health.recommendations.ranker import identify_quick_wins
    from tech_health.utils.time_utils import parse_timestamp

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    reference_time = None
    if now is not None:
        reference_time = parse_timestamp(now)
        if reference_time is None:
            typer.echo(f"[ERROR] Cannot parse --now value '{now}'.", err=True)
            raise typer.Exit(code=1)

    analysis = _read_analysis_or_exit(analysis_file)
    engine = RecommendationEngine.from_config(config)
    recommendations = engine.generate(analysis, now=reference_time)

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in recommendations], indent=2))
        return

    typer.echo(f"{len(recommendations)} recommendations for {analysis_file.name}")
    typer.echo("")
    typer.echo(f"  {'#':>2}  {'Priority':<8}  {'Score':>6}  {'ROI':>5}  {'Urg':>3}  {'Category':<13}  Title")
    for i, rec in enumerate(recommendations, start=1):
        typer.echo(
            f"  {i:>2}  {rec.priority:<8}  {rec.priority_score:>6.2f}  {rec.roi:>5.2f}  "
            f"{rec.urgency:>3}  {rec.category:<13}  {rec.title}"
        )

    typer.echo("")
    typer.echo("Quick wins:")
    for title in identify_quick_wins(recommendations):
        typer.echo(f"  - {title}")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print the effective thresholds.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    t = config.thresholds

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Complexity:      avg > {t.complexity.average_max:g} "
               f"(High above {t.complexity.average_escalate:g}), "
               f"files > {t.complexity.high_complexity_files_max}")
    typer.echo(f"  Coverage:        < {t.coverage.minimum:g}% "
               f"(High below {t.coverage.escalate_below:g}%)")
    typer.echo(f"  Documentation:   score < {t.documentation.minimum_score:g}, "
               f"description < {t.documentation.description_min_length} chars")
    typer.echo(f"  Staleness:       > {t.staleness.max_days:g} days")
    typer.echo(f"  Vulnerabilities: > {t.vulnerabilities.max_total} total")
    typer.echo(f"  Dependencies:    > {t.dependencies.max_outdated} outdated")
    typer.echo(f"  Failure rate:    > {t.failure_rate.max_pct:g}%")
    typer.echo(f"  Health score:    < {t.health_score.overall_min:g} overall, "
               f"< {t.health_score.performance_min:g} performance")
    typer.echo(f"  Log level:       {config.logging.level}")
    typer.echo(f"  Debug mode:      {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


if __name__ == "__main__":
    app()
