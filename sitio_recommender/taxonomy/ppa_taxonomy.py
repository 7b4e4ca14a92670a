"""
PPA (Program / Project / Activity) taxonomy for sitio recommendations.

Two orthogonal dimensions describe every scored recommendation:
  - ``PPACategory``   — the *what*: which family of intervention is this?
  - ``PriorityLevel`` — the *how urgent*: which tier did the need score land in?

``PriorityName`` lists the community-rated priority interventions captured in
Section J of the sitio survey (rating scale 0-3).

The ``PRIORITY_RANK`` dict is the canonical ordering contract used by
``ScoringEngine.by_minimum_priority()``:
  - Every ``PriorityLevel`` must have an entry.
  - Ranks are unique and ``Critical > High > Moderate > Low``.

Usage example::

    from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory, PriorityLevel

    category = PPACategory.INFRASTRUCTURE
    tier     = PriorityLevel.CRITICAL

This module has NO imports from any other ``sitio_recommender`` package.
"""

from enum import StrEnum


class PPACategory(StrEnum):
    """Top-level family of a candidate intervention."""

    INFRASTRUCTURE = "Infrastructure"
    """Physical works: water systems, roads, community buildings, lighting."""

    SERVICE_DELIVERY = "Service Delivery & Social"
    """Programs and activities: caravans, registration, feeding, livelihood."""


class PriorityLevel(StrEnum):
    """Priority tier derived from a normalised 0-10 need score."""

    CRITICAL = "Critical"
    """Need score >= 8.0."""

    HIGH = "High"
    """Need score >= 6.0."""

    MODERATE = "Moderate"
    """Need score >= 4.0."""

    LOW = "Low"
    """Everything below 4.0, including degenerate (all-disabled) configs."""


class PriorityName(StrEnum):
    """Community-rated priority interventions (Section J of the survey)."""

    WATER_SYSTEM = "waterSystem"
    COMMUNITY_CR = "communityCR"
    SOLAR_STREET_LIGHTS = "solarStreetLights"
    ROAD_OPENING = "roadOpening"
    FARM_TOOLS = "farmTools"
    HEALTH_SERVICES = "healthServices"
    EDUCATION_SUPPORT = "educationSupport"


class FoodSecurity(StrEnum):
    """Primary food security concern reported for the sitio."""

    SECURE = "secure"
    SEASONAL_SCARCITY = "seasonal_scarcity"
    CRITICAL_SHORTAGE = "critical_shortage"


class StudentsPerRoom(StrEnum):
    """Classroom crowding band (Section F of the survey)."""

    LESS_THAN_46 = "less_than_46"
    FROM_46_TO_50 = "46_50"
    FROM_51_TO_55 = "51_55"
    MORE_THAN_56 = "more_than_56"
    NO_CLASSROOM = "no_classroom"


class MobileSignal(StrEnum):
    """Best available mobile signal in the sitio."""

    NONE = "none"
    G2 = "2g"
    G3 = "3g"
    G4 = "4g"
    G5 = "5g"


# ── Ordering contract ─────────────────────────────────────────────────────────

PRIORITY_RANK: dict[PriorityLevel, int] = {
    PriorityLevel.CRITICAL: 4,
    PriorityLevel.HIGH:     3,
    PriorityLevel.MODERATE: 2,
    PriorityLevel.LOW:      1,
}

# (min_score, level) pairs checked top-down; the first satisfied bound wins.
PRIORITY_THRESHOLDS: tuple[tuple[float, PriorityLevel], ...] = (
    (8.0, PriorityLevel.CRITICAL),
    (6.0, PriorityLevel.HIGH),
    (4.0, PriorityLevel.MODERATE),
)
