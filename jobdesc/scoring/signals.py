"""Signal tables for the AI-likelihood scorer.

Each lexical signal is a named pattern in a family. Families share a weight
from ``ScoringWeights`` so calibration is a configuration change. Lexical
signals count once per distinct entry, however often the entry occurs.

None of the entries contain first-person words or digits. The impersonal-
tone signal relies on that: appending a flagged phrase can never make a
text look less impersonal.
"""

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

from pydantic import BaseModel, Field

BUZZWORD = "buzzword"
FILLER = "filler"
WORDY_PHRASE = "wordy_phrase"
PARALLELISM = "parallelism"
REPEATED_OPENER = "repeated_opener"
UNIFORM_LENGTH = "uniform_length"
EM_DASH = "em_dash"
IMPERSONAL = "impersonal"


class ScoringWeights(BaseModel):
    """Per-family weights and caps for the additive score."""

    buzzword: int = Field(8, ge=0, description="Per distinct buzzword")
    filler: int = Field(10, ge=0, description="Per distinct filler phrase")
    wordy_phrase: int = Field(4, ge=0, description="Per distinct wordy connective")
    parallelism: int = Field(8, ge=0, description="Per distinct negative parallelism")
    repeated_opener: int = Field(4, ge=0, description="Per consecutive sentence pair sharing an opener")
    repeated_opener_cap: int = Field(12, ge=0)
    uniform_length: int = Field(3, ge=0, description="Per consecutive pair of near-equal long sentences")
    uniform_length_cap: int = Field(12, ge=0)
    em_dash: int = Field(2, ge=0, description="Per em dash beyond the allowance")
    em_dash_allowance: int = Field(3, ge=0)
    em_dash_cap: int = Field(10, ge=0)
    impersonal: int = Field(5, ge=0, description="No first-person words or figures at all")

    model_config = {"frozen": True}


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class LexicalSignal:
    """A named pattern belonging to a signal family."""

    family: str
    name: str
    pattern: Pattern[str]


def _signal(family: str, name: str, body: str) -> LexicalSignal:
    bounded = rf"(?<![\w-])(?:{body})(?![\w-])"
    return LexicalSignal(family=family, name=name, pattern=re.compile(bounded, re.IGNORECASE))


BUZZWORDS: Tuple[LexicalSignal, ...] = tuple(
    _signal(BUZZWORD, name, body)
    for name, body in (
        ("leverage", r"leverag(?:e|es|ed|ing)"),
        ("utilize", r"utili[sz](?:e|es|ed|ing|ation)"),
        ("facilitate", r"facilitat(?:e|es|ed|ing)"),
        ("streamline", r"streamlin(?:e|es|ed|ing)"),
        ("delve", r"delv(?:e|es|ed|ing)"),
        ("navigate", r"navigat(?:e|es|ed|ing)"),
        ("spearhead", r"spearhead(?:s|ed|ing)?"),
        ("empower", r"empower(?:s|ed|ing)?"),
        ("foster", r"foster(?:s|ed|ing)?"),
        ("elevate", r"elevat(?:e|es|ed|ing)"),
        ("embark", r"embark(?:s|ed|ing)?"),
        ("harness", r"harness(?:es|ed|ing)?"),
        ("passionate", r"passionate"),
        ("synergy", r"synerg(?:y|ies|istic)"),
        ("seamless", r"seamless(?:ly)?"),
        ("cutting-edge", r"cutting[- ]edge"),
        ("state-of-the-art", r"state[- ]of[- ]the[- ]art"),
        ("world-class", r"world[- ]class"),
        ("best-in-class", r"best[- ]in[- ]class"),
        ("innovative", r"innovative"),
        ("holistic", r"holistic(?:ally)?"),
        ("dynamic", r"dynamic"),
        ("fast-paced", r"fast[- ]paced"),
        ("ever-evolving", r"ever[- ](?:evolving|changing)"),
        ("meticulous", r"meticulous(?:ly)?"),
        ("pivotal", r"pivotal"),
        ("vibrant", r"vibrant"),
        ("multifaceted", r"multi-?faceted"),
        ("unparalleled", r"unparalleled"),
        ("tapestry", r"tapestr(?:y|ies)"),
        ("testament", r"testament"),
        ("journey", r"journeys?"),
        ("landscape", r"landscapes?"),
        ("paradigm", r"paradigms?"),
        ("moreover", r"moreover"),
        ("furthermore", r"furthermore"),
        ("additionally", r"additionally"),
    )
)

FILLER_PHRASES: Tuple[LexicalSignal, ...] = tuple(
    _signal(FILLER, name, body)
    for name, body in (
        ("fast-paced environment", r"fast[- ]paced (?:environment|setting|startup)"),
        ("wear many hats", r"wear(?:ing)? (?:many|multiple) hats"),
        ("rockstar", r"rock ?stars?"),
        ("ninja", r"ninjas?"),
        ("guru", r"gurus?"),
        ("self-starter", r"self[- ]starters?"),
        ("team player", r"team players?"),
        ("go-getter", r"go[- ]getters?"),
        ("hit the ground running", r"hit the ground running"),
        ("move the needle", r"move the needle"),
        ("think outside the box", r"think(?:ing)? outside (?:of )?the box"),
        ("work hard play hard", r"work hard,? play hard"),
        ("at the end of the day", r"at the end of the day"),
        ("low-hanging fruit", r"low[- ]hanging fruit"),
        ("results-driven", r"results[- ]driven"),
        ("today's world", r"in today['’]?s (?:fast[- ]paced|digital|competitive|modern) (?:world|landscape)"),
    )
)

WORDY_PHRASES: Tuple[LexicalSignal, ...] = tuple(
    _signal(WORDY_PHRASE, name, body)
    for name, body in (
        ("in order to", r"in order to"),
        ("due to the fact that", r"due to the fact that"),
        ("in terms of", r"in terms of"),
        ("with regard to", r"with regards? to"),
        ("it is important to note", r"it is important to note"),
        ("it is worth noting", r"it(?: is|['’]s) worth noting"),
        ("needless to say", r"needless to say"),
    )
)

PARALLELISMS: Tuple[LexicalSignal, ...] = tuple(
    _signal(PARALLELISM, name, body)
    for name, body in (
        ("not just x but", r"not (?:just|merely) [^.!?;]{1,60}?,? but"),
        ("not only x but", r"not only [^.!?;]{1,60}?,? but"),
        ("more than just", r"more than just"),
        (
            "it's not about x it's about",
            r"it(?: is|['’]?s) not about [^.!?]{1,60}?[,;] it(?: is|['’]?s) about",
        ),
    )
)

LEXICAL_SIGNALS: Tuple[LexicalSignal, ...] = BUZZWORDS + FILLER_PHRASES + WORDY_PHRASES + PARALLELISMS

# Pieces end at a sentence terminator followed by whitespace, or at a newline.
SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+|\n+")
SENTENCE_TERMINATED = re.compile(r"[.!?][\"'’”)\]]*$")
WORD = re.compile(r"[^\W\d_]+(?:['’][^\W\d_]+)?")
FIRST_PERSON = re.compile(r"\b(?:[Ww]e|[Ww]e['’](?:re|ve|ll|d)|[Oo]urs?|us|I|I['’]m|[Mm]y|me)\b")
DIGIT = re.compile(r"\d")
EM_DASH_CHAR = "—"

UNIFORM_MIN_WORDS = 8
UNIFORM_TOLERANCE = 1
IMPERSONAL_MIN_SENTENCES = 3
