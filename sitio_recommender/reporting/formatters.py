"""
ASCII terminal formatters for CLI commands.

All formatters accept recommendation objects or report dicts and return
plain multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Priority tags
-------------
Every ranked row carries a fixed-width tier tag so a reader scanning the
table sees urgency before the score::

  [CRIT]  >= 8.0      [HIGH]  >= 6.0      [MOD ]  >= 4.0      [LOW ]
"""

from __future__ import annotations

from typing import Any, Sequence

from sitio_recommender.models.recommendation import PPARecommendation
from sitio_recommender.recommendations.criteria import PPAConfig
from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory, PriorityLevel

_PRIORITY_TAGS: dict[PriorityLevel, str] = {
    PriorityLevel.CRITICAL: "[CRIT]",
    PriorityLevel.HIGH:     "[HIGH]",
    PriorityLevel.MODERATE: "[MOD ]",
    PriorityLevel.LOW:      "[LOW ]",
}


def format_priority_tag(priority: PriorityLevel) -> str:
    return _PRIORITY_TAGS[priority]


def format_score_bar(need_score: float, width: int = 10) -> str:
    """``7.4`` -> ``"#######..."`` (one cell per point, truncated)."""
    filled = max(0, min(width, int(need_score * width / 10.0)))
    return "#" * filled + "." * (width - filled)


# ── Ranked recommendations ────────────────────────────────────────────────────


def format_recommendations_table(
    recommendations: Sequence[PPARecommendation],
    sitio_name:      str,
    title:           str = "Recommended PPAs",
) -> str:
    """Format ranked recommendations as an ASCII table.

    Columns: rank, priority tag, score, score bar, category, project name::

        Rank  Tier    Score  Need        Category     Project
        ------------------------------------------------------------------
           1  [CRIT]    9.5  #########.  Infra        Construction of Sanitary ...

    Args:
        recommendations: Ranked list (already ordered).
        sitio_name:      Shown in the header.
        title:           Header line text.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== {title} ===")
    lines.append(f"  Sitio: {sitio_name or '(unnamed)'}")

    if not recommendations:
        lines.append("")
        lines.append("  (no recommendations — catalog empty or all candidates filtered out)")
        return "\n".join(lines)

    lines.append("")
    header = (
        f"  {'Rank':>4}  {'Tier':<6}  {'Score':>5}  {'Need':<10}  "
        f"{'Category':<8}  {'Project':<50}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, rec in enumerate(recommendations, start=1):
        category = "Infra" if rec.ppa.category == PPACategory.INFRASTRUCTURE else "Service"
        lines.append(
            f"  {rank:>4}  {format_priority_tag(rec.priority):<6}  "
            f"{rec.need_score:>5.1f}  {format_score_bar(rec.need_score):<10}  "
            f"{category:<8}  {rec.ppa.name[:50]:<50}".rstrip()
        )

    return "\n".join(lines)


# ── Single-candidate breakdown ────────────────────────────────────────────────


def format_recommendation_detail(rec: PPARecommendation) -> str:
    """Format one recommendation with its per-criterion justification.

    Every enabled criterion is listed, including zero-point ones, so the
    reader can see why the score is what it is::

        Construction of Sanitary Toilet Facilities  (sanitary-toilet)
          Category: Infrastructure
          Need:     9.5 / 10  [CRIT] Critical
          Points:   9.5 of 10.0

            Points    Max  Criterion
            4.0       4.0  Open Defecation Practice
                           Open defecation is practiced - critical health risk
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"{rec.ppa.name}  ({rec.ppa.id})")
    lines.append(f"  Category: {rec.ppa.category.value}")
    lines.append(
        f"  Need:     {rec.need_score:.1f} / 10  "
        f"{format_priority_tag(rec.priority)} {rec.priority.value}"
    )
    lines.append(f"  Points:   {rec.total_points:.1f} of {rec.max_possible_points:.1f}")

    if not rec.score_breakdown:
        lines.append("")
        lines.append("  (all criteria disabled — need score defaults to 0)")
        return "\n".join(lines)

    lines.append("")
    lines.append(f"    {'Points':>6}  {'Max':>5}  Criterion")
    for score in rec.score_breakdown:
        marker = "*" if score.points_awarded > 0 else " "
        lines.append(
            f"  {marker} {score.points_awarded:>6.1f}  {score.max_points:>5.1f}  "
            f"{score.criteria_name}"
        )
        lines.append(f"    {'':>6}  {'':>5}  {score.reason}")

    return "\n".join(lines)


# ── Catalog listing ───────────────────────────────────────────────────────────


def format_candidate_list(configs: Sequence[PPAConfig]) -> str:
    """Format the catalog: id, enabled state, criteria count, max points, name."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== PPA Catalog ===")

    if not configs:
        lines.append("")
        lines.append("  (catalog is empty)")
        return "\n".join(lines)

    lines.append("")
    header = f"  {'ID':<30}  {'On':<3}  {'Crit':>4}  {'Max':>5}  {'Name'}"
    lines.append(header)
    lines.append("  " + "-" * 90)
    for config in configs:
        enabled_count = len(config.enabled_criteria)
        lines.append(
            f"  {config.id:<30}  {'yes' if config.enabled else 'no':<3}  "
            f"{enabled_count:>4}  {config.max_possible_points:>5.1f}  {config.name}"
        )
    lines.append("")
    lines.append(f"  {len(configs)} candidate(s); Crit/Max count enabled criteria only.")
    return "\n".join(lines)


# ── Evaluation report ─────────────────────────────────────────────────────────


def format_report_summary(report: dict[str, Any]) -> str:
    """Format the header sections of ``build_evaluation_report()`` output."""
    info    = report.get("sitio_info", {})
    summary = report.get("summary", {})

    lines: list[str] = []
    lines.append("")
    lines.append("=== Sitio Evaluation Report ===")
    lines.append(f"  Sitio:        {info.get('name', '')}")
    lines.append(f"  Barangay:     {info.get('barangay', '')}")
    lines.append(f"  Municipality: {info.get('municipality', '')}")
    lines.append(f"  Population:   {info.get('population', 0)}")
    lines.append(f"  Households:   {info.get('households', 0)}")
    lines.append("")
    lines.append(
        f"  Projects: {summary.get('total_projects', 0)}  "
        f"(Critical {summary.get('critical_projects', 0)}, "
        f"High {summary.get('high_projects', 0)}, "
        f"Moderate {summary.get('moderate_projects', 0)}, "
        f"Low {summary.get('low_projects', 0)})"
    )
    lines.append(f"  Average need score: {report.get('average_need_score', 0.0):.1f}")

    top = report.get("top_recommendations", [])
    if top:
        lines.append("")
        lines.append("  Top recommendations:")
        for item in top:
            lines.append(
                f"    {item.get('rank', ''):>2}. {item.get('project', '')}  "
                f"{item.get('score', 0.0):.1f} ({item.get('priority', '')})"
            )
            for reason in item.get("key_reasons", []):
                lines.append(f"          - {reason}")

    return "\n".join(lines)
