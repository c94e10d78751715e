"""Ordered rewrite rule table for the humanizer.

Rules run in table order and the order is part of the behavior:

1. ``phrase``       wordy connectives ("in order to" → "to")
2. ``filler``       recruiter idioms ("hit the ground running")
3. ``deletion``     throat-clearing openers ("it is important to note that")
4. ``vocabulary``   buzzwords, inflection-aware ("leveraged" → "used")
5. ``contraction``  mid-sentence contractions ("we are" → "we're")
6. ``parallelism``  "not just X, but Y" → "X and Y"

Parallelism runs last because its replacement carries the matched text X
along, and a replaced span is never revisited in the same pass; by then X
has already been through every other rule.

No replacement text matches any rule or any scorer signal, so running the
humanizer on its own output changes nothing.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Pattern, Sequence, Tuple

PHRASE = "phrase"
FILLER = "filler"
DELETION = "deletion"
VOCABULARY = "vocabulary"
CONTRACTION = "contraction"
PARALLELISM = "parallelism"

_SEPARATORS = re.compile(r"[\s\-]+")


def form_key(text: str) -> str:
    """Normalize matched text for lookup in a rule's inflection table."""
    return _SEPARATORS.sub(" ", text.lower().replace("’", "'")).strip()


@dataclass(frozen=True)
class RewriteRule:
    """A pattern and its replacement candidates.

    Attributes:
        rule_id: Stable identifier, used in logs and for deterministic choice
        family: Rule family (see module docstring)
        pattern: Compiled whole-word pattern
        replacements: Candidate templates (may reference named groups)
        by_form: Candidates per matched form, for inflected words; keys are
            ``form_key`` normalized
        deletion: Remove the match and tidy the surrounding punctuation
    """

    rule_id: str
    family: str
    pattern: Pattern[str]
    replacements: Tuple[str, ...] = ()
    by_form: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    deletion: bool = False

    def candidates_for(self, matched: str) -> Optional[Tuple[str, ...]]:
        """Replacement candidates for a matched string, None if unknown."""
        if self.deletion:
            return ("",)
        if self.by_form:
            return self.by_form.get(form_key(matched))
        return self.replacements or None


def _bounded(body: str) -> str:
    return rf"(?<![\w-])(?:{body})(?![\w-])"


def _rule(
    rule_id: str,
    family: str,
    body: str,
    replacements: Sequence[str] = (),
    by_form: Optional[Dict[str, Tuple[str, ...]]] = None,
    deletion: bool = False,
    flags: int = re.IGNORECASE,
) -> RewriteRule:
    return RewriteRule(
        rule_id=rule_id,
        family=family,
        pattern=re.compile(_bounded(body), flags),
        replacements=tuple(replacements),
        by_form=dict(by_form or {}),
        deletion=deletion,
    )


def _word(rule_id: str, forms: Dict[str, Sequence[str]], family: str = VOCABULARY) -> RewriteRule:
    """Build a rule matching any listed form, each with its own candidates."""
    ordered = sorted(forms, key=len, reverse=True)
    body = "|".join(re.escape(form).replace(r"\ ", r"[\s-]+").replace(r"\-", r"[\s-]+") for form in ordered)
    return _rule(
        rule_id,
        family,
        body,
        by_form={form_key(form): tuple(candidates) for form, candidates in forms.items()},
    )


def _verb(rule_id: str, base: str, third: str, past: str, gerund: str, candidates: Sequence[Tuple[str, str, str, str]]) -> RewriteRule:
    """Inflection-aware rule: each candidate gives (base, -s, past, -ing) forms."""
    return _word(
        rule_id,
        {
            base: [c[0] for c in candidates],
            third: [c[1] for c in candidates],
            past: [c[2] for c in candidates],
            gerund: [c[3] for c in candidates],
        },
    )


PHRASE_RULES: Tuple[RewriteRule, ...] = (
    _rule("phrase.in-order-to", PHRASE, r"in order to", ["to"]),
    _rule("phrase.due-to-the-fact", PHRASE, r"due to the fact that|in light of the fact that", ["because"]),
    _rule("phrase.at-this-time", PHRASE, r"at this point in time|at the present time", ["now"]),
    _rule("phrase.in-the-event", PHRASE, r"in the event that", ["if"]),
    _rule("phrase.for-the-purpose", PHRASE, r"for the purpose of", ["for"]),
    _rule("phrase.large-number", PHRASE, r"a large number of", ["many"]),
    _rule("phrase.vast-majority", PHRASE, r"the vast majority of", ["most"]),
    _rule("phrase.daily-basis", PHRASE, r"on a daily basis", ["daily"]),
    _rule("phrase.regular-basis", PHRASE, r"on a regular basis", ["regularly"]),
    _rule("phrase.near-future", PHRASE, r"in the near future", ["soon"]),
    _rule("phrase.with-regard", PHRASE, r"with regards? to", ["about"]),
    _rule("phrase.in-terms-of", PHRASE, r"in terms of", ["for"]),
    _rule("phrase.when-it-comes", PHRASE, r"when it comes to", ["with"]),
    _word(
        "phrase.passionate-about",
        {"passionate about": ["excited about", "interested in", "into"]},
        family=PHRASE,
    ),
    _word(
        "phrase.delve-into",
        {
            "delve into": ["dig into", "look into", "explore"],
            "delves into": ["digs into", "looks into", "explores"],
            "delved into": ["dug into", "looked into", "explored"],
            "delving into": ["digging into", "looking into", "exploring"],
        },
        family=PHRASE,
    ),
)

FILLER_RULES: Tuple[RewriteRule, ...] = (
    _rule(
        "filler.fast-paced-environment",
        FILLER,
        r"fast[- ]paced (?P<noun>environment|setting|startup)",
        [r"busy \g<noun>", r"quick-moving \g<noun>"],
    ),
    _word(
        "filler.many-hats",
        {
            "wear many hats": ["take on a range of work"],
            "wear multiple hats": ["take on a range of work"],
            "wearing many hats": ["taking on a range of work"],
            "wearing multiple hats": ["taking on a range of work"],
        },
        family=FILLER,
    ),
    _word(
        "filler.rockstar",
        {
            "rockstar": ["standout"],
            "rockstars": ["standouts"],
            "rock star": ["standout"],
            "rock stars": ["standouts"],
        },
        family=FILLER,
    ),
    _word("filler.ninja", {"ninja": ["expert"], "ninjas": ["experts"]}, family=FILLER),
    _word("filler.guru", {"guru": ["expert"], "gurus": ["experts"]}, family=FILLER),
    _word(
        "filler.self-starter",
        {"self-starter": ["someone who takes initiative"], "self-starters": ["people who take initiative"]},
        family=FILLER,
    ),
    _word(
        "filler.team-player",
        {"team player": ["good collaborator"], "team players": ["good collaborators"]},
        family=FILLER,
    ),
    _word(
        "filler.go-getter",
        {"go-getter": ["motivated person"], "go-getters": ["motivated people"]},
        family=FILLER,
    ),
    _rule("filler.ground-running", FILLER, r"hit the ground running", ["get up to speed quickly"]),
    _rule("filler.move-the-needle", FILLER, r"move the needle", ["make a real difference"]),
    _rule(
        "filler.outside-the-box",
        FILLER,
        r"(?P<verb>think|thinking) outside (?:of )?the box",
        [r"\g<verb> creatively"],
    ),
    _rule("filler.work-hard-play-hard", FILLER, r"work hard,? play hard", ["keep a healthy pace"]),
    _rule("filler.end-of-the-day", FILLER, r"at the end of the day", ["ultimately"]),
    _rule("filler.low-hanging-fruit", FILLER, r"low[- ]hanging fruit", ["quick wins"]),
    _rule("filler.results-driven", FILLER, r"results[- ]driven", ["focused on outcomes"]),
)

DELETION_RULES: Tuple[RewriteRule, ...] = tuple(
    RewriteRule(
        rule_id=rule_id,
        family=DELETION,
        pattern=re.compile(_bounded(body + r"(?: that)?") + r",?[ \t]*", re.IGNORECASE),
        deletion=True,
    )
    for rule_id, body in (
        ("deletion.important-to-note", r"it is important to note"),
        ("deletion.worth-noting", r"it(?: is|['’]s) worth noting"),
        ("deletion.should-be-noted", r"it should be noted"),
        ("deletion.needless-to-say", r"needless to say"),
        ("deletion.goes-without-saying", r"it goes without saying"),
        ("deletion.todays-world", r"in today['’]?s (?:fast[- ]paced|digital|competitive|modern) (?:world|landscape)"),
    )
)

VOCABULARY_RULES: Tuple[RewriteRule, ...] = (
    _verb(
        "vocabulary.leverage", "leverage", "leverages", "leveraged", "leveraging",
        [
            ("use", "uses", "used", "using"),
            ("draw on", "draws on", "drew on", "drawing on"),
            ("build on", "builds on", "built on", "building on"),
        ],
    ),
    _word(
        "vocabulary.utilize",
        {
            "utilize": ["use"], "utilizes": ["uses"], "utilized": ["used"], "utilizing": ["using"],
            "utilise": ["use"], "utilises": ["uses"], "utilised": ["used"], "utilising": ["using"],
            "utilization": ["use"], "utilisation": ["use"],
        },
    ),
    _verb(
        "vocabulary.facilitate", "facilitate", "facilitates", "facilitated", "facilitating",
        [("help", "helps", "helped", "helping"), ("support", "supports", "supported", "supporting")],
    ),
    _verb(
        "vocabulary.streamline", "streamline", "streamlines", "streamlined", "streamlining",
        [("simplify", "simplifies", "simplified", "simplifying"), ("speed up", "speeds up", "sped up", "speeding up")],
    ),
    _verb("vocabulary.delve", "delve", "delves", "delved", "delving", [("dig", "digs", "dug", "digging")]),
    _verb(
        "vocabulary.navigate", "navigate", "navigates", "navigated", "navigating",
        [("handle", "handles", "handled", "handling"), ("work through", "works through", "worked through", "working through")],
    ),
    _verb("vocabulary.spearhead", "spearhead", "spearheads", "spearheaded", "spearheading", [("lead", "leads", "led", "leading")]),
    _verb("vocabulary.empower", "empower", "empowers", "empowered", "empowering", [("help", "helps", "helped", "helping")]),
    _verb(
        "vocabulary.foster", "foster", "fosters", "fostered", "fostering",
        [("build", "builds", "built", "building"), ("encourage", "encourages", "encouraged", "encouraging")],
    ),
    _verb(
        "vocabulary.elevate", "elevate", "elevates", "elevated", "elevating",
        [("improve", "improves", "improved", "improving"), ("raise", "raises", "raised", "raising")],
    ),
    _verb(
        "vocabulary.embark", "embark", "embarks", "embarked", "embarking",
        [("start", "starts", "started", "starting"), ("set out", "sets out", "set out", "setting out")],
    ),
    _verb("vocabulary.harness", "harness", "harnesses", "harnessed", "harnessing", [("use", "uses", "used", "using")]),
    _word("vocabulary.passionate", {"passionate": ["keen", "enthusiastic"]}),
    _word(
        "vocabulary.synergy",
        {"synergy": ["teamwork"], "synergies": ["shared strengths"], "synergistic": ["complementary"]},
    ),
    _word("vocabulary.seamless", {"seamless": ["smooth"], "seamlessly": ["smoothly"]}),
    _word("vocabulary.cutting-edge", {"cutting-edge": ["modern", "current"]}),
    _word("vocabulary.state-of-the-art", {"state-of-the-art": ["modern"]}),
    _word("vocabulary.world-class", {"world-class": ["excellent", "top-notch"]}),
    _word("vocabulary.best-in-class", {"best-in-class": ["leading"]}),
    _word("vocabulary.innovative", {"innovative": ["new", "inventive", "creative"]}),
    _word("vocabulary.holistic", {"holistic": ["complete"], "holistically": ["as a whole"]}),
    _word("vocabulary.dynamic", {"dynamic": ["active", "lively"]}),
    _word("vocabulary.fast-paced", {"fast-paced": ["busy", "quick-moving"]}),
    _word("vocabulary.ever-evolving", {"ever-evolving": ["changing"], "ever-changing": ["changing"]}),
    _word("vocabulary.meticulous", {"meticulous": ["careful"], "meticulously": ["carefully"]}),
    _word("vocabulary.pivotal", {"pivotal": ["key", "central"]}),
    _word("vocabulary.vibrant", {"vibrant": ["lively", "active"]}),
    _word("vocabulary.multifaceted", {"multifaceted": ["varied"], "multi-faceted": ["varied"]}),
    _word("vocabulary.unparalleled", {"unparalleled": ["rare", "exceptional"]}),
    _word("vocabulary.tapestry", {"tapestry": ["mix"], "tapestries": ["mixes"]}),
    _word("vocabulary.testament", {"testament": ["sign"]}),
    _word("vocabulary.journey", {"journey": ["path"], "journeys": ["paths"]}),
    _word("vocabulary.landscape", {"landscape": ["field"], "landscapes": ["fields"]}),
    _word("vocabulary.paradigm", {"paradigm": ["model"], "paradigms": ["models"]}),
    _word("vocabulary.moreover", {"moreover": ["also"], "furthermore": ["also"], "additionally": ["also"]}),
)

# Only mid-sentence: a lowercase letter or clause punctuation must precede,
# and a word must follow ("that's who we are." stays as written).
CONTRACTION_RULES: Tuple[RewriteRule, ...] = (
    RewriteRule(
        rule_id="contraction.common",
        family=CONTRACTION,
        pattern=re.compile(
            r"(?<=[a-z,;] )(?:we are|you are|they are|you will|we will|do not|does not"
            r"|is not|are not|will not|cannot|it is|that is)(?= \w)"
        ),
        by_form={
            "we are": ("we're",),
            "you are": ("you're",),
            "they are": ("they're",),
            "you will": ("you'll",),
            "we will": ("we'll",),
            "do not": ("don't",),
            "does not": ("doesn't",),
            "is not": ("isn't",),
            "are not": ("aren't",),
            "will not": ("won't",),
            "cannot": ("can't",),
            "it is": ("it's",),
            "that is": ("that's",),
        },
    ),
)

PARALLELISM_RULES: Tuple[RewriteRule, ...] = (
    _rule(
        "parallelism.not-just-but",
        PARALLELISM,
        r"not (?:just|merely|only) (?P<first>[^.!?;]{1,60}?),? but(?: also)?",
        [r"\g<first> and"],
    ),
    _rule("parallelism.more-than-just", PARALLELISM, r"more than just", ["more than"]),
    _rule(
        "parallelism.not-about-but-about",
        PARALLELISM,
        r"it(?: is|['’]?s) not about [^.!?]{1,60}?[,;] it(?: is|['’]?s) about",
        ["it's about"],
    ),
)

DEFAULT_RULES: Tuple[RewriteRule, ...] = (
    PHRASE_RULES
    + FILLER_RULES
    + DELETION_RULES
    + VOCABULARY_RULES
    + CONTRACTION_RULES
    + PARALLELISM_RULES
)
