"""
Tests for the built-in PPA catalog (catalog.py and its two category modules).

What we test
------------
Catalog shape:
  - 15 configs: 9 Infrastructure then 6 Service Delivery & Social.
  - Unique ids and names; every criterion has positive max points.
  - default_configs() returns a new list on each call.

Rules (spot checks on realistic profiles):
  - Sanitation crisis scores Critical on the sanitary toilet config.
  - Non-Muslim community scores 0 / Low on the Madrasah config.
  - Zero-household profiles score coverage criteria 0 with a reason.
  - Boundary thresholds are inclusive.
  - Reason strings format numbers without a trailing ".0".

Optional extras:
  - ROAD_OPENING_PRIORITY and SPORTS_FACILITY_CONFIG score as documented.
"""

from __future__ import annotations

import pytest

from sitio_recommender.recommendations.catalog import (
    ROAD_OPENING_PRIORITY,
    SPORTS_FACILITY_CONFIG,
    default_configs,
)
from sitio_recommender.recommendations.catalog_infrastructure import (
    MADRASAH_FACILITY_CONFIG,
    POTABLE_WATER_SYSTEM_CONFIG,
    ROAD_OPENING_CONFIG,
    SANITARY_TOILET_CONFIG,
    SCHOOL_BUILDING_CONFIG,
    SOLAR_STREET_LIGHTS_CONFIG,
)
from sitio_recommender.recommendations.catalog_services import (
    AGRICULTURAL_INPUTS_CONFIG,
    CIVIL_REGISTRY_CONFIG,
    FEEDING_PROGRAM_CONFIG,
    LIVELIHOOD_ASSISTANCE_CONFIG,
    SERVICE_CARAVAN_CONFIG,
    SOCIAL_PREPARATION_CONFIG,
)
from sitio_recommender.recommendations.scorer import score_candidate
from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory, PriorityLevel


def _reasons(rec) -> dict[str, str]:
    return {s.criterion_id: s.reason for s in rec.score_breakdown}


def _points(rec) -> dict[str, float]:
    return {s.criterion_id: s.points_awarded for s in rec.score_breakdown}


# ── Catalog shape ─────────────────────────────────────────────────────────────

class TestCatalogShape:
    def test_fifteen_configs(self):
        assert len(default_configs()) == 15

    def test_category_split_and_order(self):
        categories = [c.category for c in default_configs()]
        assert categories == [PPACategory.INFRASTRUCTURE] * 9 + [PPACategory.SERVICE_DELIVERY] * 6

    def test_ids_and_names_unique(self):
        configs = default_configs()
        assert len({c.id for c in configs}) == 15
        assert len({c.name for c in configs}) == 15

    def test_first_and_last_ids(self):
        ids = [c.id for c in default_configs()]
        assert ids[0] == "potable-water-system"
        assert ids[-1] == "social-preparation"

    def test_all_criteria_positive(self):
        for config in default_configs():
            assert config.criteria, f"{config.id} has no criteria"
            for criterion in config.criteria:
                assert criterion.max_points > 0
                assert criterion.enabled

    def test_returns_new_list(self):
        first = default_configs()
        first.clear()
        assert len(default_configs()) == 15

    @pytest.mark.parametrize("config,expected_max", [
        (POTABLE_WATER_SYSTEM_CONFIG, 11.0),
        (SANITARY_TOILET_CONFIG, 10.0),
        (MADRASAH_FACILITY_CONFIG, 10.0),
        (CIVIL_REGISTRY_CONFIG, 10.0),
    ])
    def test_max_possible_points(self, config, expected_max):
        assert config.max_possible_points == pytest.approx(expected_max)

    def test_every_rule_runs_on_empty_profile(self, empty_profile):
        for config in default_configs():
            rec = score_candidate(config, empty_profile)
            assert 0.0 <= rec.need_score <= 10.0
            assert all(s.reason for s in rec.score_breakdown)


# ── Infrastructure rules ──────────────────────────────────────────────────────

class TestSanitaryToilet:
    def test_sanitation_crisis_is_critical(self, sanitation_profile):
        rec = score_candidate(SANITARY_TOILET_CONFIG, sanitation_profile)
        assert rec.total_points == pytest.approx(9.5)
        assert rec.need_score == pytest.approx(9.5)
        assert rec.priority == PriorityLevel.CRITICAL

    def test_coverage_reason(self, sanitation_profile):
        rec = score_candidate(SANITARY_TOILET_CONFIG, sanitation_profile)
        assert _reasons(rec)["low_toilet_coverage"] == "Only 10% of households have toilets"

    def test_zero_households(self, make_profile):
        rec = score_candidate(SANITARY_TOILET_CONFIG, make_profile(totalHouseholds=0))
        assert _points(rec)["low_toilet_coverage"] == 0.0
        assert _reasons(rec)["low_toilet_coverage"] == "No household data to assess coverage"

    def test_coverage_bands(self, make_profile):
        pts = lambda n: _points(score_candidate(
            SANITARY_TOILET_CONFIG, make_profile(totalHouseholds=100, householdsWithToilet=n)
        ))["low_toilet_coverage"]
        assert pts(24) == 3.0
        assert pts(25) == 2.0
        assert pts(74) == 1.0
        assert pts(75) == 0.0

    def test_pit_latrine_without_water_sealed(self, make_profile):
        score = lambda types: _points(score_candidate(
            SANITARY_TOILET_CONFIG, make_profile(sanitationTypes=types)
        ))["pit_latrine_use"]
        assert score({"pitLatrine": True}) == 0.5
        assert score({"pitLatrine": True, "waterSealed": True}) == 0.0
        assert score({}) == 0.0


class TestMadrasah:
    def test_non_muslim_community_scores_zero(self, sanitation_profile):
        rec = score_candidate(MADRASAH_FACILITY_CONFIG, sanitation_profile)
        assert rec.need_score == 0.0
        assert rec.priority == PriorityLevel.LOW
        assert rec.key_reasons == []
        assert _reasons(rec)["no_madrasah_exists"] == "Not applicable - non-Muslim community"

    def test_large_muslim_community_without_madrasah(self, remote_profile):
        rec = score_candidate(MADRASAH_FACILITY_CONFIG, remote_profile)
        reasons = _reasons(rec)
        assert reasons["muslim_population"] == "150 Muslims need Madrasah facility"
        assert reasons["distance_to_madrasah"] == "Nearest Madrasah is 6.5km away"
        assert rec.need_score == pytest.approx(8.0)
        assert rec.priority == PriorityLevel.CRITICAL

    def test_muslim_threshold_inclusive(self, make_profile):
        rec = score_candidate(
            MADRASAH_FACILITY_CONFIG, make_profile(vulnerableGroups={"muslimCount": 100})
        )
        assert _points(rec)["muslim_population"] == 4.0


class TestWaterAndSchool:
    def test_potable_water_remote(self, remote_profile):
        rec = score_candidate(POTABLE_WATER_SYSTEM_CONFIG, remote_profile)
        assert rec.total_points == pytest.approx(9.5)
        assert rec.need_score == pytest.approx(8.6)
        assert _reasons(rec)["large_population"] == "Large population (600) would benefit"

    def test_functional_level3_scores_zero_on_first_rule(self, make_profile):
        p = make_profile(waterSources={"level3": {"exists": "yes", "functioningCount": 1}})
        rec = score_candidate(POTABLE_WATER_SYSTEM_CONFIG, p)
        assert _points(rec)["no_functional_water"] == 0.0

    def test_school_distance_reason(self, remote_profile):
        rec = score_candidate(SCHOOL_BUILDING_CONFIG, remote_profile)
        assert _reasons(rec)["distance_to_school"] == "Nearest school is 4km away"
        assert _points(rec)["insufficient_classrooms"] == 3.5
        assert rec.need_score == pytest.approx(8.0)

    def test_solar_lights_remote(self, remote_profile):
        rec = score_candidate(SOLAR_STREET_LIGHTS_CONFIG, remote_profile)
        assert rec.need_score == pytest.approx(10.0)
        assert _reasons(rec)["low_electrification"] == "Only 8% of households have electricity"


# ── Service delivery rules ────────────────────────────────────────────────────

class TestServiceDelivery:
    def test_civil_registry_maxed(self, remote_profile):
        rec = score_candidate(CIVIL_REGISTRY_CONFIG, remote_profile)
        assert rec.need_score == pytest.approx(10.0)
        assert _reasons(rec)["no_philsys_id"] == "120 adults without National ID"

    def test_feeding_program_income_reason(self, remote_profile):
        rec = score_candidate(FEEDING_PROGRAM_CONFIG, remote_profile)
        assert _reasons(rec)["extreme_poverty"] == (
            "Average daily income ₱120 indicates extreme poverty"
        )
        assert rec.need_score == pytest.approx(7.5)
        assert rec.priority == PriorityLevel.HIGH

    def test_zero_income_is_not_poverty(self, make_profile):
        rec = score_candidate(FEEDING_PROGRAM_CONFIG, make_profile(averageDailyIncome=0))
        assert _points(rec)["extreme_poverty"] == 0.0

    def test_livelihood_unemployment(self, remote_profile):
        rec = score_candidate(LIVELIHOOD_ASSISTANCE_CONFIG, remote_profile)
        assert _reasons(rec)["high_unemployment"] == "35% unemployment rate"
        assert rec.need_score == pytest.approx(9.0)

    def test_livelihood_no_labor_force(self, empty_profile):
        rec = score_candidate(LIVELIHOOD_ASSISTANCE_CONFIG, empty_profile)
        assert _reasons(rec)["high_unemployment"] == "No labor force data"

    def test_agricultural_inputs_maxed(self, remote_profile):
        rec = score_candidate(AGRICULTURAL_INPUTS_CONFIG, remote_profile)
        assert rec.need_score == pytest.approx(10.0)
        assert _reasons(rec)["large_farm_area"] == "140 hectares of farmland"

    def test_farm_priority_needs_farmers(self, make_profile):
        p = make_profile(priorities=[{"name": "farmTools", "rating": 3}])
        rec = score_candidate(AGRICULTURAL_INPUTS_CONFIG, p)
        assert _points(rec)["no_seeds_support"] == 0.0

    def test_service_caravan_health_center_distance(self, remote_profile):
        rec = score_candidate(SERVICE_CARAVAN_CONFIG, remote_profile)
        assert _reasons(rec)["health_distance"] == "Nearest health center is 12km away"

    def test_social_preparation_empty_profile(self, empty_profile):
        rec = score_candidate(SOCIAL_PREPARATION_CONFIG, empty_profile)
        assert rec.need_score == pytest.approx(2.5)
        assert rec.priority == PriorityLevel.LOW


# ── Optional extras ───────────────────────────────────────────────────────────

class TestOptionalExtras:
    def test_road_priority_criterion(self, remote_profile):
        config = ROAD_OPENING_CONFIG.with_criterion(ROAD_OPENING_PRIORITY)
        rec = score_candidate(config, remote_profile)
        assert _points(rec)["custom_market_access"] == 2.0
        assert config.max_possible_points == pytest.approx(ROAD_OPENING_CONFIG.max_possible_points + 2.0)

    def test_road_priority_not_in_default_catalog(self):
        road = next(c for c in default_configs() if c.id == "road-opening-rehabilitation")
        assert road.get_criterion("custom_market_access") is None

    def test_sports_facility(self, remote_profile):
        rec = score_candidate(SPORTS_FACILITY_CONFIG, remote_profile)
        assert _reasons(rec)["youth_population"] == "Estimated 180 youth need recreation facility"
        assert rec.need_score == pytest.approx(10.0)
