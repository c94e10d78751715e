"""Additive AI-likelihood scorer.

The score is the clamped sum of fixed per-signal weights. It has no notion
of a threshold; callers decide what counts as "needs humanization".

Sentence-level signals only look at terminated sentences (pieces ending in
., ! or ?). Appending text can extend that list but never change an
existing entry, so every signal, and therefore the total, can only grow
when text is appended.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from jobdesc.formatting.sanitizer import sanitize
from jobdesc.formatting.service import ensure_text

from . import signals
from .signals import DEFAULT_WEIGHTS, ScoringWeights

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass(frozen=True)
class SignalHit:
    """One contribution to a score."""

    family: str
    name: str
    points: int


@dataclass(frozen=True)
class ScoreBreakdown:
    """Explainable score: the clamped total and every contribution."""

    total: int
    hits: List[SignalHit] = field(default_factory=list)

    @property
    def raw_total(self) -> int:
        """Sum of contributions before clamping."""
        return sum(hit.points for hit in self.hits)

    def points_for(self, family: str) -> int:
        return sum(hit.points for hit in self.hits if hit.family == family)


def score(sanitized: str, weights: Optional[ScoringWeights] = None) -> int:
    """Compute the AI-likelihood score of sanitized text.

    Args:
        sanitized: Sanitized description text
        weights: Family weights (defaults to ``DEFAULT_WEIGHTS``)

    Returns:
        Integer in [0, 100]
    """
    return explain(sanitized, weights).total


def ai_score(text: Any, weights: Optional[ScoringWeights] = None) -> int:
    """Sanitize arbitrary description text and score it.

    Raises:
        MalformedInputError: If the input is not text
    """
    return score(sanitize(ensure_text(text)), weights)


def explain(sanitized: str, weights: Optional[ScoringWeights] = None) -> ScoreBreakdown:
    """Score text and report which signals contributed.

    Args:
        sanitized: Sanitized description text
        weights: Family weights (defaults to ``DEFAULT_WEIGHTS``)

    Returns:
        ScoreBreakdown with the clamped total and per-signal hits
    """
    if not sanitized or not sanitized.strip():
        return ScoreBreakdown(total=MIN_SCORE)

    weights = weights or DEFAULT_WEIGHTS
    family_weights = {
        signals.BUZZWORD: weights.buzzword,
        signals.FILLER: weights.filler,
        signals.WORDY_PHRASE: weights.wordy_phrase,
        signals.PARALLELISM: weights.parallelism,
    }

    hits: List[SignalHit] = []
    for signal in signals.LEXICAL_SIGNALS:
        if signal.pattern.search(sanitized):
            hits.append(SignalHit(signal.family, signal.name, family_weights[signal.family]))

    sentences = terminated_sentences(sanitized)
    openers = [_first_word(s) for s in sentences]
    lengths = [len(signals.WORD.findall(s)) for s in sentences]

    repeated = sum(
        1 for a, b in zip(openers, openers[1:]) if a is not None and a == b
    )
    if repeated:
        hits.append(
            SignalHit(
                signals.REPEATED_OPENER,
                "repeated sentence openers",
                min(repeated * weights.repeated_opener, weights.repeated_opener_cap),
            )
        )

    uniform = sum(
        1
        for a, b in zip(lengths, lengths[1:])
        if min(a, b) >= signals.UNIFORM_MIN_WORDS and abs(a - b) <= signals.UNIFORM_TOLERANCE
    )
    if uniform:
        hits.append(
            SignalHit(
                signals.UNIFORM_LENGTH,
                "uniform sentence length",
                min(uniform * weights.uniform_length, weights.uniform_length_cap),
            )
        )

    excess_dashes = sanitized.count(signals.EM_DASH_CHAR) - weights.em_dash_allowance
    if excess_dashes > 0:
        hits.append(
            SignalHit(
                signals.EM_DASH,
                "em dash overuse",
                min(excess_dashes * weights.em_dash, weights.em_dash_cap),
            )
        )

    if (
        hits
        and len(sentences) >= signals.IMPERSONAL_MIN_SENTENCES
        and not signals.FIRST_PERSON.search(sanitized)
        and not signals.DIGIT.search(sanitized)
    ):
        hits.append(SignalHit(signals.IMPERSONAL, "no first-person or concrete detail", weights.impersonal))

    hits = [hit for hit in hits if hit.points > 0]
    total = max(MIN_SCORE, min(MAX_SCORE, sum(hit.points for hit in hits)))
    return ScoreBreakdown(total=total, hits=hits)


def terminated_sentences(text: str) -> List[str]:
    """Split text into sentences, keeping only those ending in . ! or ?"""
    pieces = (piece.strip() for piece in signals.SENTENCE_SPLIT.split(text))
    return [piece for piece in pieces if piece and signals.SENTENCE_TERMINATED.search(piece)]


def _first_word(sentence: str) -> Optional[str]:
    match = signals.WORD.search(sentence)
    return match.group(0).lower() if match else None
