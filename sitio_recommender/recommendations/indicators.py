"""
Profile indicators shared by the built-in scoring rules.

Pure functions of a ``CommunityProfile`` (or one of its sections).  They
never raise on missing data: absent optional counts read as 0 and absent
conditions are skipped.

Formatting helpers ``format_number`` and ``format_percent`` keep reason
strings stable: whole numbers print without a trailing ``.0`` and
percentages round half-up to a whole number.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from sitio_recommender.models.profile import (
    CommunityProfile,
    RoadDetails,
    WaterSources,
)
from sitio_recommender.taxonomy.ppa_taxonomy import PriorityName

WATER_LEVELS: tuple[str, ...] = ("level1", "level2", "level3", "natural")
IMPROVED_WATER_LEVELS: tuple[str, ...] = ("level1", "level2", "level3")
PIPED_WATER_LEVELS: tuple[str, ...] = ("level2", "level3")


# ── Priorities ────────────────────────────────────────────────────────────────

def priority_rating(profile: CommunityProfile, name: PriorityName | str) -> int:
    """Community rating (0-3) for a Section J priority; 0 when not listed."""
    for item in profile.priorities:
        if item.name == name:
            return item.rating
    return 0


# ── Population ────────────────────────────────────────────────────────────────

def total_population(profile: CommunityProfile) -> int:
    """Male + female headcount (the survey's ``total_population`` is not used)."""
    return profile.population.total_male + profile.population.total_female


def coverage_pct(value: int, total: int) -> Optional[float]:
    """``value / total * 100``, or ``None`` when ``total`` is 0."""
    if total == 0:
        return None
    return value / total * 100.0


# ── Water ─────────────────────────────────────────────────────────────────────

def count_functional_water_sources(
    sources: WaterSources,
    levels: Sequence[str] = WATER_LEVELS,
) -> int:
    """Sum of functioning counts over the existing sources in ``levels``."""
    total = 0
    for level in levels:
        source = getattr(sources, level)
        if source.exists == "yes":
            total += source.functioning_count or 0
    return total


def has_water_source_needing_repair(sources: WaterSources) -> bool:
    return any(
        getattr(sources, level).exists == "yes"
        and (getattr(sources, level).not_functioning_count or 0) > 0
        for level in WATER_LEVELS
    )


def has_functional_improved_water(sources: WaterSources) -> bool:
    """True when any Level 1-3 source exists with at least one working unit."""
    return any(
        getattr(sources, level).exists == "yes"
        and (getattr(sources, level).functioning_count or 0) > 0
        for level in IMPROVED_WATER_LEVELS
    )


# ── Roads ─────────────────────────────────────────────────────────────────────

def has_paved_roads(profile: CommunityProfile) -> bool:
    infra = profile.infrastructure
    return infra.asphalt.exists == "yes" or infra.concrete.exists == "yes"


def assessed_roads(profile: CommunityProfile) -> list[RoadDetails]:
    """Existing road surfaces that carry a condition rating."""
    infra = profile.infrastructure
    roads = (infra.asphalt, infra.concrete, infra.gravel, infra.natural)
    return [r for r in roads if r.exists == "yes" and r.condition]


def worst_road_condition(profile: CommunityProfile) -> Optional[int]:
    """Lowest condition rating among assessed roads; ``None`` if none rated."""
    roads = assessed_roads(profile)
    if not roads:
        return None
    return min(r.condition for r in roads)


def road_lengths(profile: CommunityProfile) -> tuple[float, float]:
    """Return ``(paved_km, total_km)``.  Missing lengths count as 0."""
    infra = profile.infrastructure
    paved = (infra.asphalt.length or 0.0) + (infra.concrete.length or 0.0)
    total = paved + (infra.gravel.length or 0.0) + (infra.natural.length or 0.0)
    return paved, total


# ── Formatting ────────────────────────────────────────────────────────────────

def format_number(value: float) -> str:
    """``5.0`` -> ``"5"``, ``2.5`` -> ``"2.5"``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_percent(value: float) -> str:
    """Whole-number percentage, rounded half-up (``12.5`` -> ``"13"``)."""
    return str(math.floor(value + 0.5))
