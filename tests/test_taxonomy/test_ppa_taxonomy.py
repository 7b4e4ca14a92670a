"""Tests for PPA taxonomy integrity — enums, rank ordering, thresholds."""

from __future__ import annotations

from sitio_recommender.taxonomy.ppa_taxonomy import (
    PRIORITY_RANK,
    PRIORITY_THRESHOLDS,
    PPACategory,
    PriorityLevel,
    PriorityName,
    StudentsPerRoom,
)


class TestPPACategoryEnum:
    def test_two_categories(self):
        assert {c.value for c in PPACategory} == {
            "Infrastructure",
            "Service Delivery & Social",
        }

    def test_string_comparison(self):
        assert PPACategory.INFRASTRUCTURE == "Infrastructure"


class TestPriorityLevelEnum:
    def test_all_four_tiers_present(self):
        assert [p.value for p in PriorityLevel] == ["Critical", "High", "Moderate", "Low"]

    def test_rank_covers_every_level(self):
        assert set(PRIORITY_RANK) == set(PriorityLevel)

    def test_ranks_unique_and_ordered(self):
        ranks = [PRIORITY_RANK[p] for p in PriorityLevel]
        assert len(set(ranks)) == len(ranks)
        assert ranks == sorted(ranks, reverse=True)


class TestPriorityThresholds:
    def test_thresholds_descending(self):
        bounds = [b for b, _ in PRIORITY_THRESHOLDS]
        assert bounds == [8.0, 6.0, 4.0]

    def test_low_has_no_threshold(self):
        assert PriorityLevel.LOW not in {level for _, level in PRIORITY_THRESHOLDS}


class TestSurveyEnums:
    def test_priority_names_use_survey_keys(self):
        assert PriorityName.SOLAR_STREET_LIGHTS == "solarStreetLights"
        assert PriorityName.FARM_TOOLS == "farmTools"
        assert PriorityName.ROAD_OPENING == "roadOpening"

    def test_students_per_room_values(self):
        assert StudentsPerRoom("no_classroom") is StudentsPerRoom.NO_CLASSROOM
        assert StudentsPerRoom("46_50") is StudentsPerRoom.FROM_46_TO_50
