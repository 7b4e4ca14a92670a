"""
Evaluation summary report for one community profile.

``build_evaluation_report()`` turns a ranked recommendation list into a
single JSON-serialisable dict that report generators and the CLI consume.

Report structure
----------------
    {
      "schema_version": "v1.0.0",
      "generated_at":   ISO-8601 UTC timestamp,
      "sitio_info":     {name, barangay, municipality, population, households},
      "summary":        {total_projects, critical_projects, high_projects,
                         moderate_projects, low_projects},
      "average_need_score": float (1 decimal, 0.0 when empty),
      "top_recommendations": [
          {rank, project_id, project, category, score, priority, key_reasons}
      ],
      "by_category":    {"infrastructure": [...], "service_delivery": [...]},
      "detailed_recommendations": [PPARecommendation.to_dict(), ...]
    }

``key_reasons`` holds at most three reasons, taken from criteria that
awarded points, in breakdown order.  The input list is assumed to be
already ranked (``ScoringEngine.evaluate_all`` output); order is preserved
everywhere.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Sequence

from sitio_recommender.models.profile import CommunityProfile
from sitio_recommender.models.recommendation import PPARecommendation
from sitio_recommender.recommendations.indicators import total_population
from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory, PriorityLevel

SCHEMA_VERSION = "v1.0.0"
MAX_KEY_REASONS = 3

_CATEGORY_KEYS: dict[PPACategory, str] = {
    PPACategory.INFRASTRUCTURE:   "infrastructure",
    PPACategory.SERVICE_DELIVERY: "service_delivery",
}


def average_need_score(recommendations: Sequence[PPARecommendation]) -> float:
    """Mean need score rounded half-up to one decimal; 0.0 for an empty list."""
    if not recommendations:
        return 0.0
    mean = sum(r.need_score for r in recommendations) / len(recommendations)
    return math.floor(mean * 10.0 + 0.5) / 10.0


def count_by_priority(recommendations: Sequence[PPARecommendation]) -> dict[PriorityLevel, int]:
    """Recommendation count per tier; every tier is present (possibly 0)."""
    counts = {level: 0 for level in PriorityLevel}
    for rec in recommendations:
        counts[rec.priority] += 1
    return counts


def summarize_recommendation(rec: PPARecommendation, rank: int) -> dict[str, Any]:
    return {
        "rank":        rank,
        "project_id":  rec.ppa.id,
        "project":     rec.ppa.name,
        "category":    rec.ppa.category.value,
        "score":       rec.need_score,
        "priority":    rec.priority.value,
        "key_reasons": rec.key_reasons[:MAX_KEY_REASONS],
    }


def build_evaluation_report(
    profile: CommunityProfile,
    recommendations: Sequence[PPARecommendation],
    top_n: int = 5,
) -> dict[str, Any]:
    """Build the full evaluation report dict.

    Args:
        profile:         The profile that was evaluated.
        recommendations: Ranked recommendations for ``profile``.
        top_n:           How many entries go into ``top_recommendations``.

    Returns:
        JSON-serialisable dict (see module docstring).
    """
    counts = count_by_priority(recommendations)

    by_category: dict[str, list[dict[str, Any]]] = {key: [] for key in _CATEGORY_KEYS.values()}
    for rec in recommendations:
        by_category[_CATEGORY_KEYS[rec.ppa.category]].append(rec.to_dict())

    return {
        "schema_version": SCHEMA_VERSION,
        "generated_at":   datetime.now(tz=timezone.utc).isoformat(),
        "sitio_info": {
            "name":         profile.sitio_name,
            "barangay":     profile.barangay,
            "municipality": profile.municipality,
            "population":   total_population(profile),
            "households":   profile.total_households,
        },
        "summary": {
            "total_projects":    len(recommendations),
            "critical_projects": counts[PriorityLevel.CRITICAL],
            "high_projects":     counts[PriorityLevel.HIGH],
            "moderate_projects": counts[PriorityLevel.MODERATE],
            "low_projects":      counts[PriorityLevel.LOW],
        },
        "average_need_score": average_need_score(recommendations),
        "top_recommendations": [
            summarize_recommendation(rec, rank)
            for rank, rec in enumerate(recommendations[:max(top_n, 0)], start=1)
        ],
        "by_category": by_category,
        "detailed_recommendations": [rec.to_dict() for rec in recommendations],
    }
