"""
Recommendation output models.

``CriteriaScore`` is the per-criterion line of a justification: what the rule
was called, how many points it awarded out of how many, and why.

``PPARecommendation`` is one scored candidate intervention for one sitio:
the candidate itself, its 0–10 need score (1 decimal), the derived priority
tier and the ordered score breakdown (enabled criteria only, in definition
order).

Both models are frozen and produced fresh on every evaluation call; callers
can keep them without worrying about later catalog edits.

Serialisation
-------------
``model_dump(mode="json")`` (or the ``to_dict()`` shorthand) is fully
JSON-serialisable.  The ``ppa`` field is rendered through
``PPAConfig.describe()``, so evaluator functions never leak into exports.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator, model_validator

from sitio_recommender.recommendations.criteria import PPAConfig
from sitio_recommender.taxonomy.ppa_taxonomy import PriorityLevel


class CriteriaScore(BaseModel):
    """Points awarded by a single enabled criterion.

    Attributes:
        criterion_id:   ``Criterion.id`` within the owning PPA.
        criteria_name:  ``Criterion.name`` (display label).
        points_awarded: In ``[0, max_points]``.
        max_points:     The criterion's ``max_points`` at evaluation time.
        reason:         Non-empty explanation, also when 0 points were awarded.
    """

    model_config = ConfigDict(frozen=True)

    criterion_id: str
    criteria_name: str
    points_awarded: float
    max_points: float
    reason: str

    @field_validator("reason")
    @classmethod
    def validate_reason_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("reason must not be empty.")
        return v

    @model_validator(mode="after")
    def validate_points_range(self) -> "CriteriaScore":
        if not 0.0 <= self.points_awarded <= self.max_points:
            raise ValueError(
                f"points_awarded must be in [0, {self.max_points}], "
                f"got {self.points_awarded}."
            )
        return self


class PPARecommendation(BaseModel):
    """A scored candidate intervention for one community profile.

    Attributes:
        ppa:             The candidate configuration that was scored.
        need_score:      Normalised score in ``[0, 10]``, one decimal place.
        priority:        Tier derived from ``need_score``.
        score_breakdown: One ``CriteriaScore`` per enabled criterion.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ppa: PPAConfig
    need_score: float
    priority: PriorityLevel
    score_breakdown: tuple[CriteriaScore, ...]

    @field_validator("need_score")
    @classmethod
    def validate_need_score_range(cls, v: float) -> float:
        if not 0.0 <= v <= 10.0:
            raise ValueError(f"need_score must be in [0.0, 10.0], got {v}.")
        return v

    @field_serializer("ppa")
    def serialize_ppa(self, ppa: PPAConfig) -> dict[str, Any]:
        return ppa.describe()

    @property
    def total_points(self) -> float:
        return sum(s.points_awarded for s in self.score_breakdown)

    @property
    def max_possible_points(self) -> float:
        return sum(s.max_points for s in self.score_breakdown)

    @property
    def key_reasons(self) -> list[str]:
        """Reasons of the criteria that awarded points, in breakdown order."""
        return [s.reason for s in self.score_breakdown if s.points_awarded > 0]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
