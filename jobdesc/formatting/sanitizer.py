"""Text sanitizer: markup, entity, whitespace and boilerplate cleanup.

The sanitizer is total over text. It never raises, returns an empty string
for empty input, and leaves text without markup or boilerplate untouched
apart from whitespace normalization.
"""

import html
import re
from typing import List, Optional

from . import patterns

_BLANK_RUN = re.compile(r"\n{3,}")


def sanitize(raw: Optional[str]) -> str:
    """Convert raw posting text into clean plain text.

    Performs the following transformations:
    1. Decode HTML entities (&amp; → &, &nbsp; → space, etc.)
    2. Drop <script>/<style> blocks and comments
    3. Turn block-level tags into line breaks and <li> into "• " lines
    4. Strip remaining tags, keeping their text
    5. Collapse horizontal whitespace within each line
    6. Remove boilerplate lines and trailing calls to action
    7. Collapse runs of blank lines to a single blank line

    Args:
        raw: Raw description text, possibly containing HTML

    Returns:
        Sanitized text (empty string if input is None/empty or not a string)
    """
    if not raw or not isinstance(raw, str):
        return ""

    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    text = strip_markup(text)

    lines = []
    for line in text.split("\n"):
        line = patterns.INLINE_SPACE.sub(" ", line).strip()
        if not line:
            lines.append("")
            continue
        if is_boilerplate(line) or patterns.PUNCTUATION_ONLY.match(line):
            continue
        line = patterns.TRAILING_CTA.sub("", line)
        lines.append(line)

    return _BLANK_RUN.sub("\n\n", "\n".join(lines)).strip()


def strip_markup(text: str) -> str:
    """Decode entities and remove tags, keeping block boundaries as line breaks.

    Args:
        text: Text that may contain HTML

    Returns:
        Text without tags; whitespace is not yet normalized
    """
    # Entities first: some feeds deliver HTML escaped inside JSON strings.
    text = html.unescape(text)
    text = patterns.ZERO_WIDTH.sub("", text)

    if "<" not in text:
        return text

    text = patterns.SCRIPT_STYLE.sub("", text)
    text = patterns.HTML_COMMENT.sub("", text)
    text = patterns.PARAGRAPH_BREAK_TAGS.sub("\n\n", text)
    text = patterns.LIST_ITEM_TAG.sub("\n• ", text)
    text = patterns.LINE_BREAK_TAGS.sub("\n", text)
    text = patterns.CELL_TAGS.sub(" ", text)
    return patterns.ANY_TAG.sub("", text)


def is_boilerplate(line: str) -> bool:
    """Check whether a whole line is recruiter or job-board boilerplate.

    Only standalone lines are considered, and long lines never are, so
    sentences that merely mention "apply" or "newsletter" survive.
    """
    candidate = line.strip()
    if not candidate or len(candidate) > patterns.BOILERPLATE_MAX_LENGTH:
        return False
    return any(p.match(candidate) for p in patterns.BOILERPLATE_LINE_PATTERNS)


def find_boilerplate_lines(text: Optional[str]) -> List[str]:
    """Return the lines of ``text`` that the sanitizer would drop as boilerplate.

    Args:
        text: Plain or HTML text

    Returns:
        Stripped boilerplate lines in document order
    """
    if not text:
        return []
    found = []
    for line in text.splitlines():
        stripped = line.strip()
        if is_boilerplate(stripped) or patterns.TRAILING_CTA.search(stripped):
            found.append(stripped)
    return found
