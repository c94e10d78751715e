"""Rule engine that applies rewrite rules to text.

Rules run in order over the whole text. Each rule makes one left-to-right
pass; a match that overlaps text inserted by an earlier rule (or by the
same rule) is skipped, so replacements never cascade within one call.
Text that a replacement only carries over through a group reference does
not count as overlapping.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from jobdesc.errors import RuleApplicationError
from jobdesc.logging import get_logger
from jobdesc.scoring import ScoringWeights, score
from jobdesc.utils.hashing import stable_index

from .rules import DEFAULT_RULES, RewriteRule

logger = get_logger(__name__, component="humanizer")

Span = Tuple[int, int]
Carried = Tuple[int, int, int]

_SENTENCE_START = re.compile(r"(?:\A|[.!?:\n]|(?:\A|\n)[ \t]*[-*•])[ \t]*\Z")
_CLAUSE_END = ".,!?;:\n"
_GROUP_REF = re.compile(r"\\g<(\w+)>")


@dataclass
class RewriteResult:
    """Outcome of running the rule table over one text.

    Attributes:
        text: Rewritten text (the input object itself if nothing matched)
        applied: (rule_id, replacement count) for every rule that fired
        failed: Identifiers of rules that raised and were skipped
    """

    text: str
    applied: List[Tuple[str, int]] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.applied)

    @property
    def replacement_count(self) -> int:
        return sum(count for _, count in self.applied)


def humanize(
    sanitized: str,
    rules: Sequence[RewriteRule] = DEFAULT_RULES,
    weights: Optional[ScoringWeights] = None,
) -> str:
    """Rewrite corporate or AI-sounding phrasing into plainer language.

    Args:
        sanitized: Sanitized text
        rules: Ordered rule table
        weights: Scoring weights used for the no-regression check

    Returns:
        Rewritten text, or the very same object if no rule matched
    """
    return rewrite(sanitized, rules, weights).text


def rewrite(
    text: str,
    rules: Sequence[RewriteRule] = DEFAULT_RULES,
    weights: Optional[ScoringWeights] = None,
) -> RewriteResult:
    """Apply the rule table and report what fired.

    A rule that raises RuleApplicationError is logged and skipped; the text
    is left as it was before that rule. If the rewritten text would score
    higher than the input, the input is returned unchanged.

    Args:
        text: Sanitized text
        rules: Ordered rule table
        weights: Scoring weights used for the no-regression check

    Returns:
        RewriteResult
    """
    if not text or not isinstance(text, str):
        return RewriteResult(text=text)

    current = text
    protected: List[Span] = []
    result = RewriteResult(text=text)

    for rule in rules:
        try:
            current, protected, count = apply_rule(current, rule, protected)
        except RuleApplicationError as e:
            result.failed.append(rule.rule_id)
            logger.warning(
                f"Skipping rewrite rule {rule.rule_id}: {e}",
                extra={
                    "event": "humanize.rule.failed",
                    "rule_id": rule.rule_id,
                    "error": str(e.cause or e),
                },
            )
            continue
        if count:
            result.applied.append((rule.rule_id, count))

    if not result.applied or current == text:
        result.applied = []
        return result

    before, after = score(text, weights), score(current, weights)
    if after > before:
        logger.warning(
            "Rewrite discarded: score would increase",
            extra={
                "event": "humanize.rewrite.discarded",
                "score_before": before,
                "score_after": after,
                "rules": [rule_id for rule_id, _ in result.applied],
            },
        )
        result.applied = []
        return result

    result.text = current
    return result


def apply_rule(text: str, rule: RewriteRule, protected: Sequence[Span]) -> Tuple[str, List[Span], int]:
    """Apply one rule to ``text``, skipping matches inside protected spans.

    Text a replacement carries over through a group reference (``\\g<first>``)
    may contain protected spans; only the rest of the match is checked, and
    those spans move with the carried text.

    Args:
        text: Current text
        rule: Rule to apply
        protected: Spans of ``text`` produced by earlier replacements

    Returns:
        (new text, protected spans remapped into the new text, replacement count)

    Raises:
        RuleApplicationError: If a match has no usable replacement
    """
    pieces: List[str] = []
    edits: List[Tuple[int, int, int]] = []
    moved: List[Tuple[int, int, int]] = []
    inserted: List[Span] = []
    cursor = 0
    length = 0

    for match in rule.pattern.finditer(text):
        start, end = match.start(), match.end()
        if start == end or start < cursor:
            continue

        carried: List[Carried] = []
        if rule.deletion:
            start, end, replacement = _deletion_bounds(text, start, end, cursor)
        else:
            replacement, carried = _replacement_for(rule, match)

        if any(_overlaps(s, e, protected) for s, e in _uncarried(start, end, carried)):
            continue

        pieces.append(text[cursor:start])
        length += start - cursor
        pieces.append(replacement)
        offset = 0
        for group_start, group_end, position in carried:
            if position > offset:
                inserted.append((length + offset, length + position))
            moved.append((group_start, group_end, length + position))
            offset = position + group_end - group_start
        if offset < len(replacement):
            inserted.append((length + offset, length + len(replacement)))
        length += len(replacement)
        edits.append((start, end, len(replacement)))
        cursor = end

    if not edits:
        return text, list(protected), 0

    pieces.append(text[cursor:])
    remapped = [_remap(span, edits, moved) for span in protected]
    return "".join(pieces), sorted(remapped + inserted), len(edits)


def _replacement_for(rule: RewriteRule, match: "re.Match[str]") -> Tuple[str, List[Carried]]:
    """Expand the chosen template, noting where carried groups land.

    Returns:
        (replacement, [(group start, group end, position in replacement)])
    """
    matched = match.group(0)
    candidates = rule.candidates_for(matched)
    if not candidates:
        raise RuleApplicationError(rule.rule_id, f"no replacement for {matched!r}")

    key = f"{rule.rule_id}:{match.start()}:{matched.lower()}"
    template = candidates[stable_index(key, len(candidates))]

    parts: List[str] = []
    carried: List[Carried] = []
    position = 0
    last = 0
    try:
        for ref in _GROUP_REF.finditer(template):
            literal = match.expand(template[last:ref.start()])
            parts.append(literal)
            position += len(literal)
            group = match.group(ref.group(1))
            if group:
                carried.append((match.start(ref.group(1)), match.end(ref.group(1)), position))
                parts.append(group)
                position += len(group)
            last = ref.end()
        parts.append(match.expand(template[last:]))
    except (re.error, IndexError) as e:
        raise RuleApplicationError(rule.rule_id, f"bad template {template!r}", cause=e) from e
    return _match_case(matched, "".join(parts)), carried


def _uncarried(start: int, end: int, carried: Sequence[Carried]) -> List[Span]:
    """Parts of the match span not copied into the replacement."""
    spans = []
    for group_start, group_end, _ in sorted(carried):
        if group_start > start:
            spans.append((start, group_start))
        start = max(start, group_end)
    if end > start:
        spans.append((start, end))
    return spans


def _remap(span: Span, edits: Sequence[Tuple[int, int, int]], moved: Sequence[Tuple[int, int, int]]) -> Span:
    span_start, span_end = span
    for group_start, group_end, new_start in moved:
        if group_start <= span_start and span_end <= group_end:
            return new_start + span_start - group_start, new_start + span_end - group_start
    return _shift(span_start, edits), _shift(span_end, edits)


def _deletion_bounds(text: str, start: int, end: int, floor: int) -> Tuple[int, int, str]:
    """Widen a deletion so no stray space or comma is left behind."""
    replacement = ""
    if end >= len(text) or text[end] in _CLAUSE_END:
        # "..., needless to say." drops the leading ", " as well
        while start > floor and text[start - 1] in " \t":
            start -= 1
        if start > floor and text[start - 1] == ",":
            start -= 1
    elif _SENTENCE_START.search(text[:start]) and text[end].islower():
        replacement = text[end].upper()
        end += 1
    return start, end, replacement


def _match_case(original: str, replacement: str) -> str:
    if not replacement:
        return replacement
    if len(original) > 1 and original.isupper():
        return replacement.upper()
    if original[0].isupper() and replacement[0].islower():
        return replacement[0].upper() + replacement[1:]
    return replacement


def _overlaps(start: int, end: int, spans: Sequence[Span]) -> bool:
    return any(start < span_end and span_start < end for span_start, span_end in spans)


def _shift(position: int, edits: Sequence[Tuple[int, int, int]]) -> int:
    offset = 0
    for start, end, new_length in edits:
        if end <= position:
            offset += new_length - (end - start)
        else:
            break
    return position + offset
