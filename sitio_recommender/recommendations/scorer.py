"""
Recommendation scoring: evaluates one PPAConfig against one CommunityProfile
and produces a PPARecommendation with need score, priority and breakdown.

Need score formula
------------------
    total_points        = sum(points awarded by each ENABLED criterion)
    max_possible_points = sum(max_points of each ENABLED criterion)

    need_score = round_half_up(total_points / max_possible_points * 10, 1)
               = 0.0 when max_possible_points == 0 (all criteria disabled)

Disabled criteria are skipped entirely: they contribute neither points nor
denominator, so disabling a zero-scoring criterion can raise the need score.

Priority classification (on the rounded need score, first match wins)
---------------------------------------------------------------------
    Critical : need_score >= 8.0
    High     : need_score >= 6.0
    Moderate : need_score >= 4.0
    Low      : everything else

The unrounded ratio never reaches ``classify_priority``: a raw 7.96 is
shown as 8.0 and classified Critical, not High.
"""

from __future__ import annotations

import logging
import math

from sitio_recommender.models.profile import CommunityProfile
from sitio_recommender.models.recommendation import CriteriaScore, PPARecommendation
from sitio_recommender.recommendations.criteria import PPAConfig
from sitio_recommender.taxonomy.ppa_taxonomy import PRIORITY_THRESHOLDS, PriorityLevel

logger = logging.getLogger(__name__)


def normalize_score(total_points: float, max_possible_points: float) -> float:
    """Scale ``total / max`` to 0–10 and round half-up to one decimal.

    Returns 0.0 when ``max_possible_points`` is 0.
    """
    if max_possible_points <= 0:
        return 0.0
    raw = total_points / max_possible_points * 10.0
    # Half-up, not round()'s half-to-even: 7.25 -> 7.3.
    return _clamp(math.floor(raw * 10.0 + 0.5) / 10.0, 0.0, 10.0)


def classify_priority(need_score: float) -> PriorityLevel:
    """Map a 0–10 need score to its priority tier (boundaries inclusive)."""
    for min_score, level in PRIORITY_THRESHOLDS:
        if need_score >= min_score:
            return level
    return PriorityLevel.LOW


def score_candidate(config: PPAConfig, profile: CommunityProfile) -> PPARecommendation:
    """Evaluate every enabled criterion of ``config`` against ``profile``.

    Args:
        config:  Candidate configuration; its ``enabled`` flag is not checked
                 here (the engine filters disabled candidates).
        profile: Community profile to score.

    Returns:
        A new PPARecommendation.

    Raises:
        CriterionEvaluationError: If any enabled criterion fails.
    """
    breakdown: list[CriteriaScore] = []
    total_points = 0.0
    max_possible_points = 0.0

    for criterion in config.criteria:
        if not criterion.enabled:
            continue
        result = criterion.evaluate(profile, candidate_id=config.id)
        total_points += result.points
        max_possible_points += criterion.max_points
        breakdown.append(
            CriteriaScore(
                criterion_id=criterion.id,
                criteria_name=criterion.name,
                points_awarded=result.points,
                max_points=criterion.max_points,
                reason=result.reason,
            )
        )

    need_score = normalize_score(total_points, max_possible_points)
    priority = classify_priority(need_score)

    logger.debug(
        "Scored '%s': %.1f/%.1f points -> need_score=%.1f (%s)",
        config.id, total_points, max_possible_points, need_score, priority.value,
    )

    return PPARecommendation(
        ppa=config,
        need_score=need_score,
        priority=priority,
        score_breakdown=tuple(breakdown),
    )


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
