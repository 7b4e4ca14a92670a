"""
Exceptions raised by the recommendation engine.

Only structurally invalid calls raise.  Missing profile data and degenerate
configurations (every criterion disabled) are scored normally: 0 points,
need score 0, priority Low.
"""

from __future__ import annotations


class RecommendationError(RuntimeError):
    """Base class for recommendation engine errors."""


class InvalidCandidateError(RecommendationError, ValueError):
    """Raised when a catalog mutation receives a malformed candidate.

    The catalog is left unchanged when this is raised.
    """


class CriterionEvaluationError(RecommendationError):
    """Raised when a criterion fails or returns an out-of-contract result.

    Wraps the original exception (available as ``__cause__``) so the caller
    can see which candidate and criterion broke.

    Attributes:
        candidate_id: ID of the PPA being scored, or ``""`` when the criterion
                      was evaluated on its own.
        criterion_id: ID of the failing criterion.
    """

    def __init__(self, candidate_id: str, criterion_id: str, detail: str) -> None:
        self.candidate_id = candidate_id
        self.criterion_id = criterion_id
        where = f"{candidate_id}/{criterion_id}" if candidate_id else criterion_id
        super().__init__(f"Criterion '{where}' failed: {detail}")
