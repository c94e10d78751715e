"""Formatting entry points used at ingestion and by maintenance jobs.

The functions here chain sanitizer → structure detector → renderer and
decide, per description, whether that work is needed at all.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from jobdesc.domain.models import DescriptionMetadata, FormattedDescription
from jobdesc.errors import MalformedInputError
from jobdesc.logging import get_logger

from . import patterns
from .renderer import BULLET_MARKER, RenderResult, render, truncate_markdown
from .sanitizer import find_boilerplate_lines, sanitize
from .structure import detect, match_header

logger = get_logger(__name__, component="formatting")

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0e-\x1f]")


@dataclass(frozen=True)
class StoragePayload:
    """Field values to write for one description.

    Attributes:
        description: Text to store as the current description (None if empty)
        raw_description: Original text to keep for audit (None if unchanged)
        metadata: Derived metadata
    """

    description: Optional[str]
    raw_description: Optional[str]
    metadata: DescriptionMetadata


@dataclass(frozen=True)
class PreparedDescription:
    """Outcome of preparing one item of a batch."""

    item_id: str
    payload: Optional[StoragePayload] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def ensure_text(value: Any) -> str:
    """Coerce a raw description into text or reject it.

    Args:
        value: String, UTF-8 bytes, or None

    Returns:
        The text ("" for None)

    Raises:
        MalformedInputError: If the value is not text, is not valid UTF-8,
            or looks like binary content
    """
    if value is None:
        return ""

    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInputError(
                f"Description bytes are not valid UTF-8: {e}", reason="undecodable"
            ) from e

    if not isinstance(value, str):
        raise MalformedInputError(
            f"Description must be text, got {type(value).__name__}", reason="not_text"
        )

    if "\x00" in value:
        raise MalformedInputError("Description contains NUL bytes", reason="binary")

    control_count = len(_CONTROL_CHARS.findall(value))
    if control_count > max(3, len(value) // 100):
        raise MalformedInputError(
            f"Description contains {control_count} control characters", reason="binary"
        )

    return value


def needs_formatting(text: Optional[str], max_length: int = patterns.MAX_LENGTH) -> bool:
    """Cheap check for whether a description would benefit from formatting.

    Returns True when the text contains markup or entities, boilerplate
    lines, header lines not already in canonical markdown form, or
    non-canonical bullet markers, or when it is longer than ``max_length``.
    Clean text, including the output of ``format_text``, returns False.

    Args:
        text: Description text
        max_length: Longest description stored without truncation

    Returns:
        True if formatting would change the structure of the text
    """
    if not text or not isinstance(text, str) or not text.strip():
        return False

    if len(text) > max_length:
        return True

    if patterns.ANY_TAG.search(text) or patterns.ENTITY.search(text):
        return True

    if find_boilerplate_lines(text):
        return True

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        synonym = match_header(stripped)
        if synonym is not None:
            if stripped != f"## {synonym.heading}":
                return True
            continue
        if patterns.BULLET.match(stripped) and not stripped.startswith(BULLET_MARKER):
            return True

    return False


def format_text(
    raw: Optional[str],
    words_per_minute: int = patterns.WORDS_PER_MINUTE,
    header_max_length: int = patterns.HEADER_MAX_LENGTH,
    max_length: int = patterns.MAX_LENGTH,
    highlight_salary: bool = False,
) -> RenderResult:
    """Run sanitize → detect → render on a description.

    Args:
        raw: Raw description text
        words_per_minute: Reading speed for the reading-time estimate
        header_max_length: Longest line still considered a header
        max_length: Longer markdown is cut and marked as truncated
        highlight_salary: Bold salary figures

    Returns:
        RenderResult with canonical markdown and metadata
    """
    sanitized = sanitize(raw)
    sections = detect(sanitized, header_max_length=header_max_length)
    result = render(sections, words_per_minute=words_per_minute, highlight_salary=highlight_salary)
    formatted = truncate_markdown(result.formatted, max_length)
    if formatted is result.formatted:
        return result

    logger.debug(
        "Formatted description truncated",
        extra={
            "event": "format.document.truncated",
            "length": len(result.formatted),
            "max_length": max_length,
        },
    )
    return RenderResult(formatted=formatted, metadata=result.metadata, sections=result.sections)


def sanitize_and_format(
    raw_text: Any,
    force: bool = False,
    words_per_minute: int = patterns.WORDS_PER_MINUTE,
    header_max_length: int = patterns.HEADER_MAX_LENGTH,
    max_length: int = patterns.MAX_LENGTH,
    highlight_salary: bool = False,
) -> FormattedDescription:
    """Format a raw description for storage.

    Clean descriptions are returned as-is with no raw copy. Otherwise the
    formatted markdown is returned together with the untouched original.

    Args:
        raw_text: Raw description (text or UTF-8 bytes)
        force: Format even if ``needs_formatting`` says the text is clean
        words_per_minute: Reading speed for the reading-time estimate
        header_max_length: Longest line still considered a header
        max_length: Longer markdown is cut and marked as truncated
        highlight_salary: Bold salary figures in formatted output

    Returns:
        FormattedDescription with formatted text, raw copy, metadata and
        per-role section text

    Raises:
        MalformedInputError: If the input is not text
    """
    text = ensure_text(raw_text)
    if not text.strip():
        return FormattedDescription(formatted_text="", raw_description=None)

    if not force and not needs_formatting(text, max_length):
        result = format_text(text, words_per_minute, header_max_length)
        logger.debug(
            "Description already clean",
            extra={"event": "format.document.unchanged", "length": len(text)},
        )
        return FormattedDescription(
            formatted_text=text, raw_description=None, metadata=result.metadata, sections=result.sections
        )

    result = format_text(text, words_per_minute, header_max_length, max_length, highlight_salary)
    if result.formatted == text:
        return FormattedDescription(
            formatted_text=text, raw_description=None, metadata=result.metadata, sections=result.sections
        )

    logger.debug(
        "Description formatted",
        extra={
            "event": "format.document.formatted",
            "length_before": len(text),
            "length_after": len(result.formatted),
            "structured": result.metadata.has_structured_sections,
            "forced": force,
        },
    )
    return FormattedDescription(
        formatted_text=result.formatted,
        raw_description=text,
        metadata=result.metadata,
        sections=result.sections,
        changed=True,
    )


def prepare_for_storage(raw_text: Any, force: bool = False) -> StoragePayload:
    """Map a raw description to the values a store should persist.

    - empty input: description None, raw_description None
    - clean input: description is the input, raw_description None
    - messy input: description is the formatted text, raw_description the input

    Raises:
        MalformedInputError: If the input is not text
    """
    result = sanitize_and_format(raw_text, force=force)
    if not result.formatted_text.strip():
        return StoragePayload(
            description=None, raw_description=result.raw_description, metadata=result.metadata
        )
    return StoragePayload(
        description=result.formatted_text,
        raw_description=result.raw_description,
        metadata=result.metadata,
    )


def prepare_batch(items: Iterable[Tuple[str, Any]], force: bool = False) -> List[PreparedDescription]:
    """Prepare many descriptions, recording per-item failures instead of raising.

    Args:
        items: (identifier, raw description) pairs
        force: Format even descriptions that look clean

    Returns:
        One PreparedDescription per item, in input order
    """
    prepared = []
    for item_id, raw_text in items:
        try:
            prepared.append(
                PreparedDescription(item_id=item_id, payload=prepare_for_storage(raw_text, force))
            )
        except Exception as e:
            logger.warning(
                f"Could not prepare description {item_id}: {e}",
                extra={
                    "event": "format.batch.item_failed",
                    "document_id": item_id,
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            prepared.append(PreparedDescription(item_id=item_id, error=str(e)))
    return prepared
