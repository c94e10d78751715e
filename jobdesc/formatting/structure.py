"""Structure detection over sanitized description text.

A description is split into contiguous, non-overlapping sections. Every
character of the sanitized input belongs to exactly one section's ``raw``
span, so joining the spans in order gives back the input unchanged.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from jobdesc.domain.models import SectionRole

from . import patterns
from .patterns import HeaderSynonym

_LINE_PIECE = re.compile(r"[^\n]*\n|[^\n]+")

_HEADINGS_BY_ROLE: Dict[SectionRole, str] = {}
for _entry in patterns.HEADER_SYNONYMS:
    _HEADINGS_BY_ROLE.setdefault(_entry.role, _entry.heading)


@dataclass(frozen=True)
class SectionLine:
    """A single body line of a section.

    Attributes:
        raw: Line as it appears in the sanitized text (no newline)
        text: Content with any bullet marker removed
        is_bullet: Whether the line started with a bullet or list marker
        is_salary: Whether the line contains a currency-tagged figure
    """

    raw: str
    text: str
    is_bullet: bool = False
    is_salary: bool = False

    @property
    def is_blank(self) -> bool:
        return not self.text


@dataclass(frozen=True)
class Section:
    """A contiguous, role-tagged span of a description.

    Attributes:
        role: Section role from the fixed vocabulary
        heading: Canonical heading to render, None for untitled body text
        header: Header line as written in the source, None if inferred
        lines: Body lines following the header
        raw: Exact span of sanitized text covered, header and newlines included
    """

    role: SectionRole
    heading: Optional[str]
    header: Optional[str]
    lines: Tuple[SectionLine, ...]
    raw: str

    @property
    def is_implicit(self) -> bool:
        """True when the section was not introduced by a header line."""
        return self.header is None

    @property
    def body_lines(self) -> List[SectionLine]:
        return [line for line in self.lines if not line.is_blank]

    @property
    def bullet_lines(self) -> List[SectionLine]:
        return [line for line in self.lines if line.is_bullet]


@dataclass
class _SectionBuilder:
    role: SectionRole
    heading: Optional[str] = None
    header: Optional[str] = None
    pieces: List[str] = field(default_factory=list)
    lines: List[SectionLine] = field(default_factory=list)

    def build(self) -> Section:
        return Section(
            role=self.role,
            heading=self.heading,
            header=self.header,
            lines=tuple(self.lines),
            raw="".join(self.pieces),
        )


def detect(sanitized: str, header_max_length: int = patterns.HEADER_MAX_LENGTH) -> List[Section]:
    """Split sanitized text into role-tagged sections.

    Lines following a recognized header belong to that header's section
    until the next header. Untitled text forms implicit body sections. A
    line carrying a salary figure outside any titled section is split out
    into an implicit compensation section.

    Args:
        sanitized: Output of the sanitizer
        header_max_length: Longest line still considered a header candidate

    Returns:
        Sections in document order (empty list for empty input)
    """
    if not sanitized:
        return []

    sections: List[Section] = []
    current = _SectionBuilder(role=SectionRole.BODY)

    def flush(next_builder: _SectionBuilder) -> _SectionBuilder:
        if current.pieces:
            sections.append(current.build())
        return next_builder

    for piece in _LINE_PIECE.findall(sanitized):
        line = piece.rstrip("\n")

        synonym = match_header(line, header_max_length)
        if synonym is not None:
            current = flush(
                _SectionBuilder(role=synonym.role, heading=synonym.heading, header=line.strip())
            )
            current.pieces.append(piece)
            continue

        body_line = _classify_line(line)
        if current.header is None and not body_line.is_blank:
            if body_line.is_salary and current.role is not SectionRole.COMPENSATION:
                current = flush(
                    _SectionBuilder(
                        role=SectionRole.COMPENSATION,
                        heading=_HEADINGS_BY_ROLE[SectionRole.COMPENSATION],
                    )
                )
            elif not body_line.is_salary and current.role is SectionRole.COMPENSATION:
                current = flush(_SectionBuilder(role=SectionRole.BODY))

        current.pieces.append(piece)
        current.lines.append(body_line)

    flush(current)
    return sections


def match_header(
    line: str, max_length: int = patterns.HEADER_MAX_LENGTH
) -> Optional[HeaderSynonym]:
    """Match a line against the header synonym table.

    The line must be short, and once decoration (markdown #, emphasis
    markers, trailing colon) is removed the remaining title must match a
    table entry in full. A bulleted line only counts when it ends in a colon.

    Args:
        line: Single line of sanitized text
        max_length: Character ceiling for header candidates

    Returns:
        First matching table entry, or None
    """
    candidate = line.strip()
    if not candidate or len(candidate) > max_length:
        return None

    bullet = patterns.BULLET.match(candidate)
    if bullet:
        if not candidate.rstrip("*_ ").endswith((":", "：")):
            return None
        candidate = bullet.group("content")

    decorated = patterns.HEADER_DECORATION.match(candidate)
    if not decorated:
        return None
    title = " ".join(decorated.group("title").split())

    for synonym in patterns.HEADER_SYNONYMS:
        if synonym.pattern.fullmatch(title):
            return synonym
    return None


def contains_salary(line: str) -> bool:
    """Check whether a line carries a currency-tagged number."""
    return patterns.SALARY.search(line) is not None


def find_salary_figures(text: str) -> List[str]:
    """Return every salary figure in ``text``, in order of appearance."""
    if not text:
        return []
    return [m.group(0).strip() for m in patterns.SALARY.finditer(text)]


def extract_tech_stack(text: str) -> List[str]:
    """Find known technology names anywhere in the text.

    Args:
        text: Sanitized text

    Returns:
        Canonical names, de-duplicated, ordered by first occurrence
    """
    if not text:
        return []

    first_seen: Dict[str, Tuple[int, int]] = {}
    for index, alias in enumerate(patterns.TECH_ALIASES):
        match = alias.pattern.search(text)
        if match is None:
            continue
        position = (match.start(), index)
        if alias.name not in first_seen or position < first_seen[alias.name]:
            first_seen[alias.name] = position

    return [name for name, _ in sorted(first_seen.items(), key=lambda item: item[1])]


def _classify_line(line: str) -> SectionLine:
    stripped = line.strip()
    bullet = patterns.BULLET.match(stripped)
    if bullet:
        text = bullet.group("content").strip()
    else:
        text = stripped
    return SectionLine(
        raw=line,
        text=text,
        is_bullet=bullet is not None,
        is_salary=bool(text) and contains_salary(text),
    )
