"""
Sitio Recommender — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the community profile.
  4. Score it with a ``ScoringEngine`` built from ``config.engine``.
  5. Report result to stdout (tables or JSON) and optionally a JSON file.

Install and run::

    pip install -e .
    sitio-recommender --help
    sitio-recommender validate-config
    sitio-recommender list-candidates --category infrastructure
    sitio-recommender evaluate data/profiles/sitio.json --top 5
    sitio-recommender evaluate data/profiles/sitio.json --min-priority High --json
    sitio-recommender explain data/profiles/sitio.json sanitary-toilet
    sitio-recommender report data/profiles/sitio.json --output data/outputs/report.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="sitio-recommender",
    help="Needs-based PPA recommendations for community (sitio) profiles.",
    add_completion=False,
)

_CATEGORY_SHORTCUTS = {
    "infrastructure":   "Infrastructure",
    "infra":            "Infrastructure",
    "service":          "Service Delivery & Social",
    "services":         "Service Delivery & Social",
    "service_delivery": "Service Delivery & Social",
}


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from sitio_recommender.config import load_config

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
    from sitio_recommender.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_profile_or_exit(profile_path: str):
    from sitio_recommender.ingestion.profile_loader import load_profile

    try:
        return load_profile(Path(profile_path))
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        # pydantic.ValidationError is a ValueError subclass.
        typer.echo(f"[ERROR] Invalid profile {profile_path}:\n{exc}", err=True)
        raise typer.Exit(code=1)


def _category_or_exit(category: Optional[str]):
    from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory

    if category is None:
        return None
    value = _CATEGORY_SHORTCUTS.get(category.lower(), category)
    try:
        return PPACategory(value)
    except ValueError:
        valid = sorted(_CATEGORY_SHORTCUTS) + [c.value for c in PPACategory]
        typer.echo(f"[ERROR] Unknown category '{category}'. Valid: {valid}", err=True)
        raise typer.Exit(code=1)


def _priority_or_exit(priority: Optional[str]):
    from sitio_recommender.taxonomy.ppa_taxonomy import PriorityLevel

    if priority is None:
        return None
    for level in PriorityLevel:
        if level.value.lower() == priority.lower():
            return level
    valid = [p.value for p in PriorityLevel]
    typer.echo(f"[ERROR] Unknown priority '{priority}'. Valid: {valid}", err=True)
    raise typer.Exit(code=1)


def _evaluate_or_exit(engine, profile):
    from sitio_recommender.recommendations.errors import RecommendationError

    try:
        return engine.evaluate_all(profile)
    except RecommendationError as exc:
        typer.echo(f"[ERROR] Evaluation failed: {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

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
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Default top N:       {config.engine.default_top_n}")
    disabled = ", ".join(config.engine.disabled_candidates) or "(none)"
    typer.echo(f"  Disabled candidates: {disabled}")
    typer.echo(f"  Disabled criteria:   {sum(len(v) for v in config.engine.disabled_criteria.values())}")
    typer.echo(f"  Output dir:          {config.output.output_dir}")
    typer.echo(f"  Log level:           {config.logging.level}")
    typer.echo(f"  Debug mode:          {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")


@app.command("list-candidates")
def list_candidates(
    category: Optional[str] = typer.Option(
        None,
        "--category",
        help="Only show one category: infrastructure | service.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """List the PPA catalog with each candidate's enabled state and max points."""
    from sitio_recommender.recommendations.engine import ScoringEngine
    from sitio_recommender.reporting.formatters import format_candidate_list

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    wanted = _category_or_exit(category)

    engine = ScoringEngine.from_config(config.engine)
    configs = engine.list_candidates()
    if wanted is not None:
        configs = [c for c in configs if c.category == wanted]

    typer.echo(format_candidate_list(configs))


@app.command("evaluate")
def evaluate(
    profile_path: str = typer.Argument(..., help="Community profile JSON file."),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        help="Number of recommendations to show (default: engine.default_top_n).",
    ),
    category: Optional[str] = typer.Option(
        None,
        "--category",
        help="Only rank one category: infrastructure | service.",
    ),
    min_priority: Optional[str] = typer.Option(
        None,
        "--min-priority",
        help="Drop candidates below this tier: Critical | High | Moderate | Low.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print recommendations as JSON instead of a table.",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        help="Also write the ranked list to this JSON file.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score a profile against the catalog and print ranked recommendations."""
    from sitio_recommender.recommendations.engine import ScoringEngine
    from sitio_recommender.reporting.export import export_to_json
    from sitio_recommender.reporting.formatters import format_recommendations_table
    from sitio_recommender.taxonomy.ppa_taxonomy import PRIORITY_RANK

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    limit = config.engine.default_top_n if top is None else top
    if limit < 1:
        typer.echo(f"[ERROR] --top must be >= 1, got {limit}.", err=True)
        raise typer.Exit(code=1)
    wanted_category = _category_or_exit(category)
    wanted_priority = _priority_or_exit(min_priority)

    profile = _load_profile_or_exit(profile_path)
    engine = ScoringEngine.from_config(config.engine)
    recommendations = _evaluate_or_exit(engine, profile)

    if wanted_category is not None:
        recommendations = [r for r in recommendations if r.ppa.category == wanted_category]
    if wanted_priority is not None:
        min_rank = PRIORITY_RANK[wanted_priority]
        recommendations = [r for r in recommendations if PRIORITY_RANK[r.priority] >= min_rank]
    recommendations = recommendations[:limit]

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in recommendations], indent=2, ensure_ascii=False))
    else:
        typer.echo(format_recommendations_table(recommendations, profile.sitio_name))

    if output:
        out_path = export_to_json([r.to_dict() for r in recommendations], Path(output))
        typer.echo(f"[OK] Wrote {len(recommendations)} recommendation(s) to {out_path}", err=True)


@app.command("explain")
def explain(
    profile_path: str = typer.Argument(..., help="Community profile JSON file."),
    candidate: str = typer.Argument(..., help="Candidate id or display name."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Show the per-criterion breakdown for one candidate."""
    from sitio_recommender.recommendations.engine import ScoringEngine
    from sitio_recommender.recommendations.errors import RecommendationError
    from sitio_recommender.reporting.formatters import format_recommendation_detail

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    profile = _load_profile_or_exit(profile_path)
    engine = ScoringEngine.from_config(config.engine)

    try:
        rec = engine.evaluate_candidate(profile, candidate)
    except KeyError as exc:
        typer.echo(f"[ERROR] {exc.args[0]}", err=True)
        raise typer.Exit(code=1)
    except RecommendationError as exc:
        typer.echo(f"[ERROR] Evaluation failed: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_recommendation_detail(rec))


@app.command("report")
def report(
    profile_path: str = typer.Argument(..., help="Community profile JSON file."),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        help="Entries in top_recommendations (default: engine.default_top_n).",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        help="Write the full JSON report here (default: <output_dir>/<sitio>_report.json).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Build the full evaluation report, print its summary and save it as JSON."""
    from sitio_recommender.recommendations.engine import ScoringEngine
    from sitio_recommender.reporting.export import export_to_json
    from sitio_recommender.reporting.formatters import format_report_summary
    from sitio_recommender.reporting.summary import build_evaluation_report

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    profile = _load_profile_or_exit(profile_path)
    engine = ScoringEngine.from_config(config.engine)
    recommendations = _evaluate_or_exit(engine, profile)

    top_n = config.engine.default_top_n if top is None else top
    report_dict = build_evaluation_report(profile, recommendations, top_n=top_n)

    if output:
        out_path = Path(output)
    else:
        stem = (profile.sitio_name or "sitio").strip().lower().replace(" ", "_")
        out_path = Path(config.output.output_dir) / f"{stem}_report.json"
    export_to_json(report_dict, out_path)

    typer.echo(format_report_summary(report_dict))
    typer.echo("")
    typer.echo(f"[OK] Report written to {out_path}")


if __name__ == "__main__":
    app()
