"""Scoring modules for the Burnout Assessment Tool."""

from scoring.bat import (
    BATScorer,
    Band,
    Catalog,
    Cutoff,
    IncompleteInput,
    Item,
    ScoreResult,
    Subscale,
    SubscaleScore,
    classify,
    compute_mean,
    compute_overall_mean,
    compute_subscale_means,
    cutoff_for,
    score_responses,
    validate_complete,
)

__all__ = [
    "BATScorer",
    "Band",
    "Catalog",
    "Cutoff",
    "IncompleteInput",
    "Item",
    "ScoreResult",
    "Subscale",
    "SubscaleScore",
    "classify",
    "compute_mean",
    "compute_overall_mean",
    "compute_subscale_means",
    "cutoff_for",
    "score_responses",
    "validate_complete",
]
