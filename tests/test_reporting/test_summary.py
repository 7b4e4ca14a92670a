"""
Tests for sitio_recommender/reporting/summary.py.

What we test
------------
- Report has every documented top-level key.
- sitio_info uses male + female population.
- Priority counts add up to total_projects.
- top_recommendations respects top_n and caps key_reasons at three.
- by_category splits the ranked list without reordering.
- average_need_score rounds half-up and is 0.0 for an empty list.
- The whole report is JSON-serialisable.
"""

from __future__ import annotations

import json

import pytest

from sitio_recommender.reporting.summary import (
    MAX_KEY_REASONS,
    SCHEMA_VERSION,
    average_need_score,
    build_evaluation_report,
    count_by_priority,
)
from sitio_recommender.taxonomy.ppa_taxonomy import PriorityLevel


class TestBuildEvaluationReport:
    def test_top_level_keys(self, engine, remote_profile):
        report = build_evaluation_report(remote_profile, engine.evaluate_all(remote_profile))
        assert set(report) == {
            "schema_version", "generated_at", "sitio_info", "summary",
            "average_need_score", "top_recommendations", "by_category",
            "detailed_recommendations",
        }
        assert report["schema_version"] == SCHEMA_VERSION

    def test_sitio_info(self, engine, remote_profile):
        report = build_evaluation_report(remote_profile, engine.evaluate_all(remote_profile))
        info = report["sitio_info"]
        assert info["name"] == "Sitio Kalamansig"
        assert info["municipality"] == "Datu Piang"
        assert info["population"] == 600
        assert info["households"] == 120

    def test_summary_counts_add_up(self, engine, remote_profile):
        report = build_evaluation_report(remote_profile, engine.evaluate_all(remote_profile))
        s = report["summary"]
        assert s["total_projects"] == 15
        assert (
            s["critical_projects"] + s["high_projects"]
            + s["moderate_projects"] + s["low_projects"]
        ) == 15

    def test_top_recommendations(self, engine, remote_profile):
        recs = engine.evaluate_all(remote_profile)
        report = build_evaluation_report(remote_profile, recs, top_n=3)
        top = report["top_recommendations"]
        assert [t["rank"] for t in top] == [1, 2, 3]
        assert [t["project_id"] for t in top] == [r.ppa.id for r in recs[:3]]
        assert all(len(t["key_reasons"]) <= MAX_KEY_REASONS for t in top)

    def test_by_category_preserves_order(self, engine, remote_profile):
        recs = engine.evaluate_all(remote_profile)
        report = build_evaluation_report(remote_profile, recs)
        infra = report["by_category"]["infrastructure"]
        services = report["by_category"]["service_delivery"]
        assert len(infra) == 9
        assert len(services) == 6
        scores = [d["need_score"] for d in infra]
        assert scores == sorted(scores, reverse=True)

    def test_empty_recommendations(self, empty_profile):
        report = build_evaluation_report(empty_profile, [])
        assert report["summary"]["total_projects"] == 0
        assert report["average_need_score"] == 0.0
        assert report["top_recommendations"] == []
        assert report["by_category"] == {"infrastructure": [], "service_delivery": []}

    def test_json_serialisable(self, engine, sanitation_profile):
        report = build_evaluation_report(
            sanitation_profile, engine.evaluate_all(sanitation_profile)
        )
        decoded = json.loads(json.dumps(report))
        assert decoded["detailed_recommendations"][0]["ppa"]["id"] == "sanitary-toilet"


class TestAggregates:
    def test_average_need_score(self, make_config, empty_profile):
        from sitio_recommender.recommendations.engine import ScoringEngine

        engine = ScoringEngine([
            make_config("a", points=2.5),
            make_config("b", points=3.0),
        ])
        # mean 2.75 rounds half-up to 2.8
        assert average_need_score(engine.evaluate_all(empty_profile)) == pytest.approx(2.8)

    def test_average_empty(self):
        assert average_need_score([]) == 0.0

    def test_count_by_priority_has_every_tier(self):
        counts = count_by_priority([])
        assert set(counts) == set(PriorityLevel)
        assert all(v == 0 for v in counts.values())
