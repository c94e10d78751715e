"""Short excerpts of descriptions for human review in reports."""

import difflib
import re
from dataclasses import dataclass
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ChangeExcerpt:
    """Matching windows of text before and after a rewrite."""

    before: str
    after: str


def truncate_text(text: Optional[str], max_length: int = 500, suffix: str = "...") -> str:
    """Truncate text to a maximum length, preferring a word boundary.

    Args:
        text: Text to truncate
        max_length: Maximum length including the suffix
        suffix: Appended when the text was cut

    Returns:
        Text no longer than ``max_length``

    Example:
        >>> truncate_text("This is a very long text that needs truncating", max_length=30)
        'This is a very long text...'
    """
    if not text or len(text) <= max_length:
        return text or ""

    cut_at = max_length - len(suffix)
    if cut_at <= 0:
        return suffix[:max_length]

    truncated = text[:cut_at]
    last_space = truncated.rfind(" ")
    # Only back off to the space if that keeps most of the text
    if last_space > cut_at * 0.6:
        truncated = truncated[:last_space]
    return truncated.rstrip() + suffix


def single_line(text: Optional[str]) -> str:
    """Collapse all whitespace, newlines included, to single spaces."""
    return _WHITESPACE.sub(" ", text or "").strip()


def change_excerpt(before: str, after: str, context: int = 40) -> Optional[ChangeExcerpt]:
    """Locate the first difference between two texts and excerpt around it.

    Args:
        before: Original text
        after: Rewritten text
        context: Characters of unchanged text to show on each side

    Returns:
        ChangeExcerpt with single-line windows, or None if the texts are equal
    """
    if before == after:
        return None

    matcher = difflib.SequenceMatcher(a=before, b=after, autojunk=False)
    for tag, a_start, a_end, b_start, b_end in matcher.get_opcodes():
        if tag == "equal":
            continue
        return ChangeExcerpt(
            before=_window(before, a_start, a_end, context),
            after=_window(after, b_start, b_end, context),
        )
    return None


def _window(text: str, start: int, end: int, context: int) -> str:
    lo = max(0, start - context)
    hi = min(len(text), end + context)
    excerpt = single_line(text[lo:hi])
    if lo > 0:
        excerpt = "..." + excerpt
    if hi < len(text):
        excerpt = excerpt + "..."
    return excerpt
