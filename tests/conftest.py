"""
Shared pytest fixtures for the Sitio Recommender test suite.

Provides:
  - ``make_profile``: factory building a ``CommunityProfile`` from camelCase
    survey keys, starting from an all-defaults record.
  - Scenario profiles used across modules (empty, sanitation crisis,
    remote indigenous farming community).
  - ``engine``: a fresh ``ScoringEngine`` over the built-in catalog.
  - ``make_config``: factory for small synthetic ``PPAConfig`` entries whose
    points are fixed, so ordering tests do not depend on catalog thresholds.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from sitio_recommender.models.profile import CommunityProfile
from sitio_recommender.recommendations.criteria import Criterion, CriterionResult, PPAConfig
from sitio_recommender.recommendations.engine import ScoringEngine
from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory


# ── Profile factories ─────────────────────────────────────────────────────────

@pytest.fixture
def make_profile() -> Callable[..., CommunityProfile]:
    """Return a builder: ``make_profile(totalHouseholds=10, ...)``."""

    def _build(**fields: Any) -> CommunityProfile:
        raw: dict[str, Any] = {
            "municipality": "Datu Piang",
            "barangay": "Poblacion",
            "sitioName": "Sitio Test",
        }
        raw.update(fields)
        return CommunityProfile.model_validate(raw)

    return _build


@pytest.fixture
def empty_profile() -> CommunityProfile:
    """A profile with nothing reported beyond its name."""
    return CommunityProfile(sitio_name="Sitio Blank")


@pytest.fixture
def sanitation_profile(make_profile) -> CommunityProfile:
    """200 households, 20 with toilets, open defecation, flooding, no Muslim residents."""
    return make_profile(
        sitioName="Sitio Malinao",
        totalHouseholds=200,
        householdsWithToilet=20,
        sanitationTypes={"openDefecation": True},
        hazards={"flood": {"frequency": 3}},
        vulnerableGroups={"muslimCount": 0},
    )


@pytest.fixture
def remote_profile(make_profile) -> CommunityProfile:
    """GIDA, indigenous, conflict-affected farming sitio with no services."""
    return make_profile(
        sitioName="Sitio Kalamansig",
        sitioClassification={"gida": True, "indigenous": True, "conflict": True},
        mainAccess={"footpath": True},
        totalHouseholds=120,
        householdsWithToilet=30,
        householdsWithElectricity=10,
        laborForceCount=200,
        population={"totalMale": 310, "totalFemale": 290},
        vulnerableGroups={
            "muslimCount": 150,
            "ipCount": 400,
            "unemployedCount": 70,
            "noBirthCertCount": 60,
            "noNationalIDCount": 120,
            "outOfSchoolYouth": 35,
        },
        facilities={
            "healthCenter": {"exists": "no", "distanceToNearest": 12},
            "madrasah": {"exists": "no", "distanceToNearest": 6.5},
            "elementarySchool": {"exists": "no", "distanceToNearest": 4},
        },
        infrastructure={"natural": {"exists": "yes", "length": 3.2, "condition": 1}},
        studentsPerRoom="no_classroom",
        waterSources={"natural": {"exists": "yes", "functioningCount": 2}},
        sanitationTypes={"openDefecation": True},
        averageDailyIncome=120,
        agriculture={
            "numberOfFarmers": 85,
            "numberOfAssociations": 1,
            "estimatedFarmAreaHectares": 140,
        },
        hazards={"flood": {"frequency": 2}, "landslide": {"frequency": 1}},
        foodSecurity="critical_shortage",
        priorities=[
            {"name": "solarStreetLights", "rating": 3},
            {"name": "farmTools", "rating": 3},
            {"name": "roadOpening", "rating": 3},
        ],
    )


# ── Engine fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def engine() -> ScoringEngine:
    """A fresh engine over the 15 built-in candidates."""
    return ScoringEngine()


@pytest.fixture
def make_config() -> Callable[..., PPAConfig]:
    """Return a builder for a one-criterion config awarding fixed points.

    ``make_config("a", points=3.0, max_points=4.0)`` scores 7.5 on any profile.
    """

    def _build(
        config_id: str,
        points: float = 1.0,
        max_points: float = 10.0,
        name: str | None = None,
        category: PPACategory = PPACategory.INFRASTRUCTURE,
    ) -> PPAConfig:
        def _fixed(profile: CommunityProfile) -> CriterionResult:
            return CriterionResult(points, f"fixed {points}")

        return PPAConfig(
            id=config_id,
            name=name or f"Project {config_id}",
            category=category,
            description="",
            criteria=(Criterion("fixed", "Fixed Points", "", max_points, _fixed),),
        )

    return _build
