"""Sanitizing, structure detection and markdown rendering of job descriptions."""

from .renderer import (
    RenderResult,
    count_words,
    estimate_reading_time,
    highlight_salary_figures,
    render,
    truncate_markdown,
)
from .sanitizer import find_boilerplate_lines, is_boilerplate, sanitize
from .service import (
    PreparedDescription,
    StoragePayload,
    ensure_text,
    format_text,
    needs_formatting,
    prepare_batch,
    prepare_for_storage,
    sanitize_and_format,
)
from .structure import (
    Section,
    SectionLine,
    contains_salary,
    detect,
    extract_tech_stack,
    find_salary_figures,
    match_header,
)

__all__ = [
    "sanitize",
    "is_boilerplate",
    "find_boilerplate_lines",
    "detect",
    "match_header",
    "contains_salary",
    "find_salary_figures",
    "extract_tech_stack",
    "Section",
    "SectionLine",
    "render",
    "RenderResult",
    "count_words",
    "estimate_reading_time",
    "highlight_salary_figures",
    "truncate_markdown",
    "ensure_text",
    "format_text",
    "needs_formatting",
    "sanitize_and_format",
    "prepare_for_storage",
    "prepare_batch",
    "StoragePayload",
    "PreparedDescription",
]
