"""
Default PPA catalog assembly.

``default_configs()`` returns the 15 built-in candidates in canonical order:
the nine Infrastructure configs followed by the six Service Delivery &
Social configs.  Because ranking ties keep catalog order, this order is also
the tie-break order of a freshly constructed engine.

Optional extras (not part of the default catalog)
-------------------------------------------------
``ROAD_OPENING_PRIORITY``  : extra criterion for the road-opening config
                             scoring the community's own road priority.
``SPORTS_FACILITY_CONFIG`` : a sports / recreation facility candidate.

Usage example::

    from sitio_recommender.recommendations.catalog import (
        ROAD_OPENING_PRIORITY, SPORTS_FACILITY_CONFIG, default_configs,
    )
    from sitio_recommender.recommendations.engine import ScoringEngine

    engine = ScoringEngine()
    road = engine.get_candidate("road-opening-rehabilitation")
    engine.upsert_candidate(road.with_criterion(ROAD_OPENING_PRIORITY))
    engine.upsert_candidate(SPORTS_FACILITY_CONFIG)
"""

from __future__ import annotations

import math

from sitio_recommender.models.profile import CommunityProfile
from sitio_recommender.recommendations.catalog_infrastructure import (
    INFRASTRUCTURE_CONFIGS,
    ROAD_OPENING_PRIORITY,
)
from sitio_recommender.recommendations.catalog_services import SERVICE_DELIVERY_CONFIGS
from sitio_recommender.recommendations.criteria import (
    Criterion,
    CriterionResult,
    PPAConfig,
)
from sitio_recommender.recommendations.indicators import total_population
from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory

__all__ = [
    "ROAD_OPENING_PRIORITY",
    "SPORTS_FACILITY_CONFIG",
    "default_configs",
]

# Share of the population assumed to be youth when no age breakdown exists.
_YOUTH_SHARE = 0.3


def default_configs() -> list[PPAConfig]:
    """Return a new list of the 15 built-in configurations."""
    return [*INFRASTRUCTURE_CONFIGS, *SERVICE_DELIVERY_CONFIGS]


def _youth_population(profile: CommunityProfile) -> CriterionResult:
    estimated = total_population(profile) * _YOUTH_SHARE
    shown = math.floor(estimated + 0.5)
    if estimated >= 150:
        return CriterionResult(3.0, f"Estimated {shown} youth need recreation facility")
    if estimated >= 75:
        return CriterionResult(2.0, f"Estimated {shown} youth in community")
    if estimated >= 30:
        return CriterionResult(1.0, f"Estimated {shown} youth present")
    return CriterionResult(0.0, "Small youth population")


def _osy_sports_engagement(profile: CommunityProfile) -> CriterionResult:
    osy = profile.vulnerable_groups.out_of_school_youth
    if osy >= 20:
        return CriterionResult(2.0, f"{osy} OSY need positive activities")
    if osy >= 10:
        return CriterionResult(1.0, f"{osy} OSY would benefit")
    return CriterionResult(0.0, "No significant OSY population")


SPORTS_FACILITY_CONFIG = PPAConfig(
    id="sports-facility",
    name="Construction of Sports Facility",
    category=PPACategory.INFRASTRUCTURE,
    description=(
        "Construction of sports and recreation facilities to provide physical "
        "activity opportunities and positive engagement for youth and "
        "out-of-school youth."
    ),
    criteria=(
        Criterion(
            "youth_population", "Large Youth Population",
            "Many young people would benefit",
            3.0, _youth_population,
        ),
        Criterion(
            "osy_engagement", "Out of School Youth Need Activities",
            "OSY would benefit from sports programs",
            2.0, _osy_sports_engagement,
        ),
    ),
)
