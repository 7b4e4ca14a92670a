"""Tests for CriteriaScore and PPARecommendation models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from sitio_recommender.models.recommendation import CriteriaScore, PPARecommendation
from sitio_recommender.taxonomy.ppa_taxonomy import PriorityLevel


def _score(points: float = 2.0, max_points: float = 4.0, reason: str = "why") -> CriteriaScore:
    return CriteriaScore(
        criterion_id="c1",
        criteria_name="Criterion One",
        points_awarded=points,
        max_points=max_points,
        reason=reason,
    )


class TestCriteriaScore:
    def test_valid_construction(self):
        s = _score()
        assert s.points_awarded == 2.0
        assert s.max_points == 4.0

    def test_points_above_max_raises(self):
        with pytest.raises(ValidationError, match="points_awarded"):
            _score(points=5.0)

    def test_negative_points_raises(self):
        with pytest.raises(ValidationError, match="points_awarded"):
            _score(points=-0.5)

    def test_empty_reason_raises(self):
        with pytest.raises(ValidationError, match="reason"):
            _score(reason="  ")


class TestPPARecommendation:
    def _rec(self, make_config, scores=None, need_score=5.0):
        return PPARecommendation(
            ppa=make_config("demo"),
            need_score=need_score,
            priority=PriorityLevel.MODERATE,
            score_breakdown=tuple(scores or (_score(2.0), _score(0.0, reason="none"))),
        )

    def test_totals_from_breakdown(self, make_config):
        rec = self._rec(make_config)
        assert rec.total_points == pytest.approx(2.0)
        assert rec.max_possible_points == pytest.approx(8.0)

    def test_key_reasons_only_scoring_criteria(self, make_config):
        rec = self._rec(make_config)
        assert rec.key_reasons == ["why"]

    def test_need_score_above_ten_raises(self, make_config):
        with pytest.raises(ValidationError, match="need_score"):
            self._rec(make_config, need_score=10.1)

    def test_ppa_instance_kept_as_is(self, make_config):
        config = make_config("same")
        rec = PPARecommendation(
            ppa=config, need_score=0.0, priority=PriorityLevel.LOW, score_breakdown=()
        )
        assert rec.ppa is config

    def test_to_dict_is_json_serialisable(self, make_config):
        d = self._rec(make_config).to_dict()
        text = json.dumps(d)
        assert "evaluator" not in text
        assert d["ppa"]["id"] == "demo"
        assert d["ppa"]["category"] == "Infrastructure"
        assert d["ppa"]["criteria"][0]["rule"] == "_fixed"
        assert d["priority"] == "Moderate"
        assert d["score_breakdown"][0]["criteria_name"] == "Criterion One"
