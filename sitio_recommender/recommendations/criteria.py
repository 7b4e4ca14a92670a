"""
Criterion and PPA configuration data model.

A ``Criterion`` is one named scoring rule.  Its logic lives in a plain,
module-level evaluator function ``(CommunityProfile) -> CriterionResult``;
the criterion wraps that function with its metadata (id, name, max points,
enabled flag) and enforces the result contract:

    0 <= points <= max_points      and      reason is non-empty

A ``PPAConfig`` is an intervention (Program / Project / Activity) with an
ordered tuple of criteria.  Both types are frozen; edits go through the
copy-on-write helpers (``with_criterion``, ``with_criterion_enabled``, ...)
so the built-in catalog constants are never mutated by one engine instance
behind another's back.

Usage example::

    from sitio_recommender.recommendations.criteria import (
        Criterion, CriterionResult, PPAConfig,
    )
    from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory

    def _has_boat_access(profile):
        if profile.main_access.boat:
            return CriterionResult(1.0, "Boat access")
        return CriterionResult(0.0, "No water-based access")

    config = PPAConfig(
        id="river-crossing",
        name="Construction of River Crossing",
        category=PPACategory.INFRASTRUCTURE,
        description="",
        criteria=(
            Criterion("boat_access", "Water-Based Access", "", 1.0, _has_boat_access),
        ),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, NamedTuple

from sitio_recommender.models.profile import CommunityProfile
from sitio_recommender.recommendations.errors import (
    CriterionEvaluationError,
    InvalidCandidateError,
)
from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory


class CriterionResult(NamedTuple):
    """Points awarded by one criterion and the reason they were awarded."""

    points: float
    reason: str


Evaluator = Callable[[CommunityProfile], CriterionResult]


@dataclass(frozen=True)
class Criterion:
    """A single scoring rule within a PPA configuration.

    Attributes:
        id:          Unique within its owning ``PPAConfig``.
        name:        Display name, copied into ``CriteriaScore.criteria_name``.
        description: What the rule looks at.
        max_points:  Upper bound on awarded points; must be > 0.
        evaluator:   Pure function of the profile.
        enabled:     Disabled criteria are skipped entirely during scoring.
    """

    id: str
    name: str
    description: str
    max_points: float
    evaluator: Evaluator = field(repr=False, compare=False)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise InvalidCandidateError("Criterion id must not be empty.")
        if not self.max_points > 0:
            raise InvalidCandidateError(
                f"Criterion '{self.id}' max_points must be > 0, got {self.max_points}."
            )
        if not callable(self.evaluator):
            raise InvalidCandidateError(f"Criterion '{self.id}' evaluator is not callable.")

    @property
    def rule_name(self) -> str:
        """Name of the evaluator function, for introspection and reports."""
        return getattr(self.evaluator, "__name__", type(self.evaluator).__name__)

    def evaluate(self, profile: CommunityProfile, candidate_id: str = "") -> CriterionResult:
        """Run the evaluator and check the result contract.

        Raises:
            CriterionEvaluationError: The evaluator raised, or returned
                non-numeric points, points outside ``[0, max_points]`` or an
                empty reason.
        """
        try:
            points, reason = self.evaluator(profile)
            points = float(points)
        except Exception as exc:
            raise CriterionEvaluationError(
                candidate_id, self.id, f"{type(exc).__name__}: {exc}"
            ) from exc

        if not 0.0 <= points <= self.max_points:
            raise CriterionEvaluationError(
                candidate_id,
                self.id,
                f"points {points} outside [0, {self.max_points}]",
            )
        if not isinstance(reason, str) or not reason.strip():
            raise CriterionEvaluationError(candidate_id, self.id, "empty reason")
        return CriterionResult(points, reason)

    def describe(self) -> dict[str, Any]:
        """JSON-serialisable metadata (the evaluator itself is not exported)."""
        return {
            "id":          self.id,
            "name":        self.name,
            "description": self.description,
            "max_points":  self.max_points,
            "enabled":     self.enabled,
            "rule":        self.rule_name,
        }


@dataclass(frozen=True)
class PPAConfig:
    """A candidate intervention and its ordered scoring rules.

    Attributes:
        id:          Stable catalog key, e.g. ``"potable-water-system"``.
        name:        Display name, unique across a catalog.
        category:    ``PPACategory``.
        description: Free text shown in reports.
        criteria:    Evaluated in this order; the order is preserved in the
                     recommendation's score breakdown.
        enabled:     Disabled configs produce no recommendation.
    """

    id: str
    name: str
    category: PPACategory
    description: str
    criteria: tuple[Criterion, ...]
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise InvalidCandidateError("PPAConfig id must not be empty.")
        if not self.name or not self.name.strip():
            raise InvalidCandidateError(f"PPAConfig '{self.id}' name must not be empty.")
        if not isinstance(self.category, PPACategory):
            try:
                object.__setattr__(self, "category", PPACategory(self.category))
            except ValueError:
                raise InvalidCandidateError(
                    f"PPAConfig '{self.id}' has unknown category {self.category!r}."
                ) from None
        # Accept any iterable of criteria but store an immutable tuple.
        object.__setattr__(self, "criteria", tuple(self.criteria))
        seen: set[str] = set()
        for criterion in self.criteria:
            if not isinstance(criterion, Criterion):
                raise InvalidCandidateError(
                    f"PPAConfig '{self.id}' contains a non-Criterion entry: {criterion!r}."
                )
            if criterion.id in seen:
                raise InvalidCandidateError(
                    f"PPAConfig '{self.id}' has duplicate criterion id '{criterion.id}'."
                )
            seen.add(criterion.id)

    # ── Lookups ───────────────────────────────────────────────────────────────

    def get_criterion(self, criterion_id: str) -> Criterion | None:
        return next((c for c in self.criteria if c.id == criterion_id), None)

    @property
    def enabled_criteria(self) -> tuple[Criterion, ...]:
        return tuple(c for c in self.criteria if c.enabled)

    @property
    def max_possible_points(self) -> float:
        """Normalisation denominator: sum of enabled criteria max points."""
        return sum(c.max_points for c in self.criteria if c.enabled)

    # ── Copy-on-write edits ──────────────────────────────────────────────────

    def with_criterion(self, criterion: Criterion) -> "PPAConfig":
        """Return a copy with ``criterion`` replacing the same id, else appended."""
        if self.get_criterion(criterion.id) is None:
            return replace(self, criteria=self.criteria + (criterion,))
        return replace(
            self,
            criteria=tuple(criterion if c.id == criterion.id else c for c in self.criteria),
        )

    def without_criterion(self, criterion_id: str) -> "PPAConfig":
        """Return a copy without ``criterion_id`` (unchanged if absent)."""
        return replace(
            self, criteria=tuple(c for c in self.criteria if c.id != criterion_id)
        )

    def with_criterion_enabled(self, criterion_id: str, enabled: bool) -> "PPAConfig":
        """Return a copy with one criterion enabled or disabled.

        Raises:
            KeyError: If ``criterion_id`` is not part of this config.
        """
        criterion = self.get_criterion(criterion_id)
        if criterion is None:
            available = [c.id for c in self.criteria]
            raise KeyError(
                f"Criterion '{criterion_id}' not found in '{self.id}'.  "
                f"Available criteria: {available}"
            )
        return self.with_criterion(replace(criterion, enabled=enabled))

    def with_enabled(self, enabled: bool) -> "PPAConfig":
        return replace(self, enabled=enabled)

    def describe(self) -> dict[str, Any]:
        """JSON-serialisable metadata for reports and exports."""
        return {
            "id":          self.id,
            "name":        self.name,
            "category":    self.category.value,
            "description": self.description,
            "enabled":     self.enabled,
            "criteria":    [c.describe() for c in self.criteria],
        }
