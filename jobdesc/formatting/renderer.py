"""Markdown rendering of detected sections."""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from jobdesc.domain.models import DescriptionMetadata, SectionRole

from . import patterns
from .structure import Section, extract_tech_stack

BULLET_MARKER = "- "


@dataclass(frozen=True)
class RenderResult:
    """Rendered markdown and the metadata computed alongside it.

    Attributes:
        formatted: Canonical markdown
        metadata: Metadata of the sanitized text
        sections: Rendered body text per section role, headings excluded
    """

    formatted: str
    metadata: DescriptionMetadata
    sections: Dict[str, str] = field(default_factory=dict)


def render(
    sections: Sequence[Section],
    words_per_minute: int = patterns.WORDS_PER_MINUTE,
    highlight_salary: bool = False,
) -> RenderResult:
    """Render sections as canonical markdown.

    Sections keep their source order. Each section with a non-empty body
    gets a level-2 heading (untitled body text gets none), consecutive
    bullets become a "- " list, and every other line becomes its own
    paragraph. Blocks are separated by a single blank line.

    Args:
        sections: Output of ``detect``
        words_per_minute: Reading speed used for the reading-time estimate
        highlight_salary: Wrap salary figures in ``**`` bold markers

    Returns:
        RenderResult with the markdown text, metadata and per-role text
    """
    blocks: List[str] = []
    by_role: Dict[str, List[str]] = {}
    for section in sections:
        if not section.body_lines:
            continue
        if section.heading:
            blocks.append(f"## {section.heading}")
        body = _render_body(section, highlight_salary)
        blocks.extend(body)
        by_role.setdefault(section.role.value, []).extend(body)

    sanitized = "".join(section.raw for section in sections)
    word_count = count_words(sanitized)
    metadata = DescriptionMetadata(
        word_count=word_count,
        estimated_reading_time=estimate_reading_time(word_count, words_per_minute),
        has_structured_sections=any(
            not section.is_implicit or section.role is not SectionRole.BODY for section in sections
        ),
        tech_stack=extract_tech_stack(sanitized),
    )
    return RenderResult(
        formatted="\n\n".join(blocks),
        metadata=metadata,
        sections={role: "\n\n".join(body) for role, body in by_role.items()},
    )


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens."""
    return len(text.split()) if text else 0


def estimate_reading_time(word_count: int, words_per_minute: int = patterns.WORDS_PER_MINUTE) -> int:
    """Reading time in whole minutes, at least 1 for non-empty text."""
    if word_count <= 0:
        return 0
    return max(1, math.ceil(word_count / words_per_minute))


def highlight_salary_figures(text: str) -> str:
    """Wrap each salary figure in ``**``, leaving figures that are already bold."""
    pieces: List[str] = []
    cursor = 0
    for match in patterns.SALARY.finditer(text):
        figure = match.group(0)
        start = match.start() + len(figure) - len(figure.lstrip())
        end = match.end() - (len(figure) - len(figure.rstrip()))
        if start >= end or (start >= 2 and text[start - 2:start] == "**" and text[end:end + 2] == "**"):
            continue
        pieces.append(text[cursor:start])
        pieces.append(f"**{text[start:end]}**")
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)


def truncate_markdown(text: str, max_length: int = patterns.MAX_LENGTH) -> str:
    """Cut rendered markdown to at most ``max_length`` characters.

    The cut falls on a paragraph, line or word boundary when one exists in
    the second half of the kept text. Trailing headings and lines with no
    words are dropped, and a final ``...(truncated)`` paragraph marks the
    cut. Text within the limit is returned unchanged.
    """
    if len(text) <= max_length:
        return text

    marker = f"\n\n{patterns.TRUNCATION_MARKER}"
    budget = max(0, max_length - len(marker))
    kept = text[:budget]
    if text[budget] not in " \n":
        for separator in ("\n\n", "\n", " "):
            index = kept.rfind(separator)
            if index > budget // 2:
                kept = kept[:index]
                break

    lines = kept.rstrip().split("\n")
    while lines and (lines[-1].startswith("#") or not any(ch.isalnum() for ch in lines[-1])):
        lines.pop()
    kept = "\n".join(lines).rstrip()
    return f"{kept}{marker}" if kept else patterns.TRUNCATION_MARKER


def _render_body(section: Section, highlight_salary: bool = False) -> List[str]:
    blocks: List[str] = []
    bullets: List[str] = []
    for line in section.body_lines:
        text = line.text
        if highlight_salary and line.is_salary:
            text = highlight_salary_figures(text)
        if line.is_bullet:
            bullets.append(f"{BULLET_MARKER}{text}")
            continue
        if bullets:
            blocks.append("\n".join(bullets))
            bullets = []
        blocks.append(text)
    if bullets:
        blocks.append("\n".join(bullets))
    return blocks
