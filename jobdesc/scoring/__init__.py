"""Deterministic, explainable AI-likelihood scoring."""

from .scorer import MAX_SCORE, MIN_SCORE, ScoreBreakdown, SignalHit, ai_score, explain, score
from .signals import DEFAULT_WEIGHTS, ScoringWeights

__all__ = [
    "score",
    "ai_score",
    "explain",
    "ScoreBreakdown",
    "SignalHit",
    "ScoringWeights",
    "DEFAULT_WEIGHTS",
    "MIN_SCORE",
    "MAX_SCORE",
]
