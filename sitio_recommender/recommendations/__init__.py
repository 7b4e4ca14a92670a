"""
Recommendation engine: scores a community profile against the catalog of
Programs, Projects and Activities (PPAs) and ranks them by need.

Modules
-------
criteria               : Criterion + PPAConfig frozen dataclasses, CriterionResult.
errors                 : RecommendationError hierarchy.
indicators             : Shared profile helpers (population, water, roads, formatting).
catalog_infrastructure : The nine infrastructure PPA configurations.
catalog_services       : The six service delivery & social PPA configurations.
catalog                : default_configs() + optional extra configurations.
scorer                 : normalize_score() + classify_priority() + score_candidate().
engine                 : ScoringEngine — catalog registry, evaluation and filters.
"""
