"""
ScoringEngine: scores a community profile against the PPA catalog and
exposes catalog mutation and query operations.

Catalog registry
----------------
The catalog is an ordered list of ``PPAConfig`` entries.  Every lookup
(``get_candidate``, ``remove_candidate``, ``set_candidate_enabled``, ...)
accepts either the stable ``id`` or the display ``name``; the id is tried
first.

``upsert_candidate(config)`` resolves the target entry in this order:
    1. an entry with the same ``id``   -> replaced in place
    2. an entry with the same ``name`` -> replaced in place (WARNING logged)
    3. otherwise                       -> appended to the end
If the id matches one entry and the name matches a different one, the
upsert is rejected with ``InvalidCandidateError`` and the catalog is left
unchanged.

Ordering
--------
``evaluate_all`` sorts by need score descending with a stable sort, so
ties keep catalog order.  Replacing an entry keeps its catalog position.

Concurrency
-----------
Catalog mutations hold an ``RLock``.  Evaluations copy the catalog under the
lock and score the copy outside it, so a concurrent mutation is seen either
entirely or not at all.

Usage example::

    from sitio_recommender.models.profile import CommunityProfile
    from sitio_recommender.recommendations.engine import ScoringEngine

    engine  = ScoringEngine()
    profile = CommunityProfile.model_validate(raw_survey_dict)

    for rec in engine.top_recommendations(profile, limit=5):
        print(rec.ppa.name, rec.need_score, rec.priority)
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Iterable, Optional

from sitio_recommender.models.profile import CommunityProfile
from sitio_recommender.models.recommendation import PPARecommendation
from sitio_recommender.recommendations.catalog import default_configs
from sitio_recommender.recommendations.criteria import PPAConfig
from sitio_recommender.recommendations.errors import InvalidCandidateError
from sitio_recommender.recommendations.scorer import score_candidate
from sitio_recommender.taxonomy.ppa_taxonomy import PRIORITY_RANK, PPACategory, PriorityLevel

if TYPE_CHECKING:
    from sitio_recommender.config import EngineConfig

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Rule-based multi-criteria scorer over a mutable PPA catalog.

    Args:
        custom_configs: Initial catalog.  ``None`` loads the 15 built-in
                        configurations; an empty iterable yields an empty
                        catalog.

    Raises:
        InvalidCandidateError: If any entry of ``custom_configs`` is not a
                               ``PPAConfig``.
    """

    def __init__(self, custom_configs: Optional[Iterable[PPAConfig]] = None) -> None:
        self._lock = threading.RLock()
        self._catalog: list[PPAConfig] = []
        configs = default_configs() if custom_configs is None else list(custom_configs)
        for config in configs:
            self._upsert(config)
        logger.debug("ScoringEngine initialised with %d candidates.", len(self._catalog))

    @classmethod
    def from_config(cls, engine_config: "EngineConfig") -> "ScoringEngine":
        """Build an engine over the default catalog with config-driven switches.

        Candidates listed in ``disabled_candidates`` and criteria listed in
        ``disabled_criteria`` are disabled.  Unknown keys are logged at
        WARNING and otherwise ignored.
        """
        engine = cls()
        for key in engine_config.disabled_candidates:
            if engine.get_candidate(key) is None:
                logger.warning("Config disables unknown candidate '%s'; ignored.", key)
                continue
            engine.set_candidate_enabled(key, False)

        for key, criterion_ids in engine_config.disabled_criteria.items():
            candidate = engine.get_candidate(key)
            if candidate is None:
                logger.warning("Config disables criteria of unknown candidate '%s'; ignored.", key)
                continue
            for criterion_id in criterion_ids:
                if candidate.get_criterion(criterion_id) is None:
                    logger.warning(
                        "Config disables unknown criterion '%s' of '%s'; ignored.",
                        criterion_id, candidate.id,
                    )
                    continue
                engine.set_criterion_enabled(key, criterion_id, False)
        return engine

    # ── Catalog queries ──────────────────────────────────────────────────────

    def list_candidates(self) -> list[PPAConfig]:
        """Return the catalog in order, as a new list on every call."""
        with self._lock:
            return list(self._catalog)

    def get_candidate(self, key: str) -> Optional[PPAConfig]:
        """Look up a candidate by id, then by name.  ``None`` when absent."""
        with self._lock:
            index = self._index_of(key)
            return None if index is None else self._catalog[index]

    # ── Catalog mutations ────────────────────────────────────────────────────

    def upsert_candidate(self, config: PPAConfig) -> None:
        """Add ``config`` or replace the entry it matches (see module docstring).

        Raises:
            InvalidCandidateError: ``config`` is not a ``PPAConfig``, or its id
                and name match two different entries.
        """
        with self._lock:
            replaced = self._upsert(config)
        logger.info(
            "%s candidate '%s' (%s).",
            "Replaced" if replaced else "Added", config.id, config.name,
        )

    def remove_candidate(self, key: str) -> bool:
        """Remove the candidate matching ``key`` (id, then name).

        Returns:
            True if an entry was removed; False (no-op) if none matched.
        """
        with self._lock:
            index = self._index_of(key)
            if index is None:
                return False
            removed = self._catalog.pop(index)
        logger.info("Removed candidate '%s' (%s).", removed.id, removed.name)
        return True

    def set_candidate_enabled(self, key: str, enabled: bool) -> PPAConfig:
        """Enable or disable a candidate in place; returns the updated entry.

        Raises:
            KeyError: If no candidate matches ``key``.
        """
        with self._lock:
            index = self._require_index(key)
            updated = self._catalog[index].with_enabled(enabled)
            self._catalog[index] = updated
        logger.info("Candidate '%s' %s.", updated.id, "enabled" if enabled else "disabled")
        return updated

    def set_criterion_enabled(self, key: str, criterion_id: str, enabled: bool) -> PPAConfig:
        """Enable or disable one criterion of a candidate; returns the updated entry.

        Raises:
            KeyError: If the candidate or the criterion does not exist.
        """
        with self._lock:
            index = self._require_index(key)
            updated = self._catalog[index].with_criterion_enabled(criterion_id, enabled)
            self._catalog[index] = updated
        logger.info(
            "Criterion '%s/%s' %s.",
            updated.id, criterion_id, "enabled" if enabled else "disabled",
        )
        return updated

    # ── Evaluation ───────────────────────────────────────────────────────────

    def evaluate_all(self, profile: CommunityProfile) -> list[PPARecommendation]:
        """Score every enabled candidate; sorted by need score descending.

        Raises:
            TypeError: If ``profile`` is not a ``CommunityProfile``.
            CriterionEvaluationError: If any enabled criterion fails.
        """
        _check_profile(profile)
        with self._lock:
            snapshot = [c for c in self._catalog if c.enabled]

        recommendations = [score_candidate(config, profile) for config in snapshot]
        # sorted() is stable: equal scores keep catalog order.
        recommendations = sorted(recommendations, key=lambda r: -r.need_score)
        logger.debug(
            "Evaluated %d candidates for sitio '%s'.",
            len(recommendations), profile.sitio_name,
        )
        return recommendations

    def evaluate_candidate(self, profile: CommunityProfile, key: str) -> PPARecommendation:
        """Score a single candidate (even if it is disabled).

        Raises:
            KeyError: If no candidate matches ``key``.
        """
        _check_profile(profile)
        with self._lock:
            config = self._catalog[self._require_index(key)]
        return score_candidate(config, profile)

    def top_recommendations(
        self,
        profile: CommunityProfile,
        limit: int = 5,
    ) -> list[PPARecommendation]:
        """Return the first ``limit`` recommendations of ``evaluate_all``.

        ``limit <= 0`` returns an empty list; a limit larger than the catalog
        returns everything.

        Raises:
            TypeError: If ``limit`` is not a number (``bool`` is rejected too).
            ValueError: If ``limit`` is a float with a fractional part.
        """
        if isinstance(limit, bool) or not isinstance(limit, (int, float)):
            raise TypeError(f"limit must be a number, got {type(limit).__name__}.")
        if isinstance(limit, float):
            if not limit.is_integer():
                raise ValueError(f"limit must be a whole number, got {limit}.")
            limit = int(limit)
        if limit <= 0:
            return []
        return self.evaluate_all(profile)[:limit]

    def by_category(
        self,
        profile: CommunityProfile,
        category: PPACategory | str,
    ) -> list[PPARecommendation]:
        """Recommendations whose candidate is in ``category``, order preserved.

        Raises:
            ValueError: If ``category`` is not a known PPACategory value.
        """
        wanted = _parse_category(category)
        return [r for r in self.evaluate_all(profile) if r.ppa.category == wanted]

    def by_minimum_priority(
        self,
        profile: CommunityProfile,
        min_priority: PriorityLevel | str,
    ) -> list[PPARecommendation]:
        """Recommendations at or above ``min_priority``, order preserved.

        Raises:
            ValueError: If ``min_priority`` is not a known PriorityLevel value.
        """
        min_rank = PRIORITY_RANK[_parse_priority(min_priority)]
        return [
            r for r in self.evaluate_all(profile)
            if PRIORITY_RANK[r.priority] >= min_rank
        ]

    # ── Internals (caller holds the lock) ────────────────────────────────────

    def _index_of(self, key: str) -> Optional[int]:
        for i, config in enumerate(self._catalog):
            if config.id == key:
                return i
        for i, config in enumerate(self._catalog):
            if config.name == key:
                return i
        return None

    def _require_index(self, key: str) -> int:
        index = self._index_of(key)
        if index is None:
            available = [c.id for c in self._catalog]
            raise KeyError(
                f"Candidate '{key}' not found in catalog.  "
                f"Available candidates: {available}"
            )
        return index

    def _upsert(self, config: PPAConfig) -> bool:
        """Insert or replace ``config``; returns True when an entry was replaced."""
        if not isinstance(config, PPAConfig):
            raise InvalidCandidateError(
                f"Expected a PPAConfig, got {type(config).__name__}."
            )

        id_index = next(
            (i for i, c in enumerate(self._catalog) if c.id == config.id), None
        )
        name_index = next(
            (i for i, c in enumerate(self._catalog) if c.name == config.name), None
        )

        if id_index is not None and name_index is not None and id_index != name_index:
            raise InvalidCandidateError(
                f"Candidate id '{config.id}' and name '{config.name}' match two "
                f"different catalog entries ('{self._catalog[id_index].name}' and "
                f"'{self._catalog[name_index].id}')."
            )

        if id_index is not None:
            self._catalog[id_index] = config
            return True
        if name_index is not None:
            logger.warning(
                "Candidate name '%s' already used by id '%s'; replacing it with id '%s'.",
                config.name, self._catalog[name_index].id, config.id,
            )
            self._catalog[name_index] = config
            return True
        self._catalog.append(config)
        return False


# ── Argument checks ───────────────────────────────────────────────────────────

def _check_profile(profile: CommunityProfile) -> None:
    if not isinstance(profile, CommunityProfile):
        raise TypeError(
            f"profile must be a CommunityProfile, got {type(profile).__name__}."
        )


def _parse_category(category: PPACategory | str) -> PPACategory:
    try:
        return PPACategory(category)
    except ValueError:
        valid = [c.value for c in PPACategory]
        raise ValueError(f"Unknown category {category!r}.  Valid: {valid}") from None


def _parse_priority(priority: PriorityLevel | str) -> PriorityLevel:
    try:
        return PriorityLevel(priority)
    except ValueError:
        valid = [p.value for p in PriorityLevel]
        raise ValueError(f"Unknown priority {priority!r}.  Valid: {valid}") from None
