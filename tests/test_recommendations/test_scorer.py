"""
Tests for sitio_recommender/recommendations/scorer.py.

What we test
------------
normalize_score():
  - Rounds half-up to one decimal (7.25 -> 7.3, not banker's rounding).
  - Returns 0.0 when max_possible_points is 0.
  - Stays inside [0, 10].

classify_priority():
  - Boundaries are inclusive: 8.0 Critical, 6.0 High, 4.0 Moderate.
  - 3.9 and 0.0 are Low.

score_candidate():
  - Disabled criteria contribute neither points nor denominator.
  - All criteria disabled -> 0.0 / Low with an empty breakdown.
  - Breakdown preserves criterion definition order.
  - Priority is derived from the rounded score (7.96 rounds to 8.0 -> Critical).
  - More points never lowers the score; flipping a profile field the only
    criterion reads moves the score from 0.0 to 10.0.
"""

from __future__ import annotations

import pytest

from sitio_recommender.models.profile import CommunityProfile
from sitio_recommender.recommendations.criteria import Criterion, CriterionResult, PPAConfig
from sitio_recommender.recommendations.errors import CriterionEvaluationError
from sitio_recommender.recommendations.scorer import (
    classify_priority,
    normalize_score,
    score_candidate,
)
from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory, PriorityLevel


# ── Helpers ────────────────────────────────────────────────────────────────────

def _fixed(points: float):
    def _rule(profile: CommunityProfile) -> CriterionResult:
        return CriterionResult(points, f"awarded {points}")
    return _rule


def _config(*specs: tuple[str, float, float, bool]) -> PPAConfig:
    """specs: (criterion_id, points, max_points, enabled)."""
    return PPAConfig(
        id="test",
        name="Test Project",
        category=PPACategory.INFRASTRUCTURE,
        description="",
        criteria=tuple(
            Criterion(cid, cid.title(), "", max_pts, _fixed(pts), enabled=enabled)
            for cid, pts, max_pts, enabled in specs
        ),
    )


# ── normalize_score ───────────────────────────────────────────────────────────

class TestNormalizeScore:
    def test_full_marks(self):
        assert normalize_score(12.0, 12.0) == 10.0

    def test_one_decimal(self):
        assert normalize_score(10.0, 12.0) == pytest.approx(8.3)

    def test_half_rounds_up(self):
        # 1.25 exactly: round() would give 1.2.
        assert normalize_score(1.0, 8.0) == pytest.approx(1.3)

    def test_zero_denominator(self):
        assert normalize_score(0.0, 0.0) == 0.0

    def test_zero_points(self):
        assert normalize_score(0.0, 9.0) == 0.0


# ── classify_priority ─────────────────────────────────────────────────────────

class TestClassifyPriority:
    @pytest.mark.parametrize("score,expected", [
        (10.0, PriorityLevel.CRITICAL),
        (8.0, PriorityLevel.CRITICAL),
        (7.9, PriorityLevel.HIGH),
        (6.0, PriorityLevel.HIGH),
        (5.9, PriorityLevel.MODERATE),
        (4.0, PriorityLevel.MODERATE),
        (3.9, PriorityLevel.LOW),
        (0.0, PriorityLevel.LOW),
    ])
    def test_tiers(self, score, expected):
        assert classify_priority(score) == expected


# ── score_candidate ───────────────────────────────────────────────────────────

class TestScoreCandidate:
    def test_basic_score(self):
        rec = score_candidate(_config(("a", 2.0, 4.0, True), ("b", 1.0, 6.0, True)),
                              CommunityProfile())
        assert rec.total_points == pytest.approx(3.0)
        assert rec.max_possible_points == pytest.approx(10.0)
        assert rec.need_score == pytest.approx(3.0)
        assert rec.priority == PriorityLevel.LOW

    def test_disabled_criterion_excluded_from_denominator(self):
        enabled = score_candidate(_config(("a", 3.0, 4.0, True), ("b", 0.0, 4.0, True)),
                                  CommunityProfile())
        disabled = score_candidate(_config(("a", 3.0, 4.0, True), ("b", 0.0, 4.0, False)),
                                   CommunityProfile())
        assert enabled.need_score == pytest.approx(3.8)
        assert disabled.need_score == pytest.approx(7.5)
        assert [s.criterion_id for s in disabled.score_breakdown] == ["a"]

    def test_all_disabled_is_low(self):
        rec = score_candidate(_config(("a", 1.0, 2.0, False)), CommunityProfile())
        assert rec.need_score == 0.0
        assert rec.priority == PriorityLevel.LOW
        assert rec.score_breakdown == ()

    def test_breakdown_order_matches_definition(self):
        rec = score_candidate(
            _config(("z", 1.0, 1.0, True), ("a", 0.0, 1.0, True), ("m", 1.0, 1.0, True)),
            CommunityProfile(),
        )
        assert [s.criterion_id for s in rec.score_breakdown] == ["z", "a", "m"]

    def test_priority_uses_rounded_score(self):
        # 7.96 rounds to 8.0 which is Critical.
        rec = score_candidate(_config(("a", 7.96, 10.0, True)), CommunityProfile())
        assert rec.need_score == pytest.approx(8.0)
        assert rec.priority == PriorityLevel.CRITICAL

    def test_more_points_never_lowers_score(self):
        scores = [
            score_candidate(_config(("a", pts, 5.0, True)), CommunityProfile()).need_score
            for pts in (0.0, 0.5, 1.0, 2.5, 4.0, 5.0)
        ]
        assert scores == sorted(scores)

    def test_profile_field_flip_moves_score_from_zero_to_ten(self, make_profile):
        def _open_defecation(profile: CommunityProfile) -> CriterionResult:
            if profile.sanitation_types.open_defecation:
                return CriterionResult(4.0, "Open defecation is practiced")
            return CriterionResult(0.0, "No open defecation reported")

        config = PPAConfig(
            id="od-only",
            name="Open Defecation Only",
            category=PPACategory.INFRASTRUCTURE,
            description="",
            criteria=(Criterion("od", "Open Defecation", "", 4.0, _open_defecation),),
        )
        without = score_candidate(config, make_profile(sanitationTypes={"openDefecation": False}))
        with_od = score_candidate(config, make_profile(sanitationTypes={"openDefecation": True}))

        assert without.need_score == 0.0
        assert without.priority == PriorityLevel.LOW
        assert with_od.need_score == 10.0
        assert with_od.priority == PriorityLevel.CRITICAL

    def test_reason_carried_into_breakdown(self):
        rec = score_candidate(_config(("a", 1.0, 2.0, True)), CommunityProfile())
        assert rec.score_breakdown[0].reason == "awarded 1.0"
        assert rec.score_breakdown[0].criteria_name == "A"

    def test_out_of_range_points_raise(self):
        with pytest.raises(CriterionEvaluationError, match="test/a"):
            score_candidate(_config(("a", 3.0, 2.0, True)), CommunityProfile())
