"""Normalization, AI-likelihood scoring and humanization of job descriptions."""

from jobdesc.formatting import detect, needs_formatting, render, sanitize, sanitize_and_format
from jobdesc.humanizer import humanize
from jobdesc.scoring import ai_score, score

__version__ = "1.0.0"

__all__ = [
    "sanitize_and_format",
    "needs_formatting",
    "ai_score",
    "humanize",
    "sanitize",
    "detect",
    "render",
    "score",
]
