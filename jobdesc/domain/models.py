"""Core domain models for job descriptions and their derived metadata.

This module defines the data structures shared across the pipeline:
- SectionRole: fixed vocabulary of roles a section of a description can play
- DescriptionMetadata: values derived from sanitized text (word count, tech stack)
- FormattedDescription: result of formatting a raw description for storage
- DocumentRecord: a stored description as seen by the maintenance jobs
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class SectionRole(str, Enum):
    """Role of a contiguous span of a job description."""

    BODY = "body"
    ABOUT_COMPANY = "about_company"
    ABOUT_ROLE = "about_role"
    RESPONSIBILITIES = "responsibilities"
    REQUIREMENTS = "requirements"
    NICE_TO_HAVE = "nice_to_have"
    COMPENSATION = "compensation"
    BENEFITS = "benefits"
    TECH_STACK = "tech_stack"
    HOW_TO_APPLY = "how_to_apply"
    LOCATION = "location"


class DescriptionMetadata(BaseModel):
    """Metadata derived from a sanitized description.

    Reading time is always at least one minute for non-empty text and zero
    for empty text.
    """

    word_count: int = Field(0, ge=0, description="Whitespace-delimited token count")
    estimated_reading_time: int = Field(0, ge=0, description="Reading time in minutes")
    has_structured_sections: bool = Field(
        False, description="True if any section other than untitled body text was found"
    )
    tech_stack: List[str] = Field(
        default_factory=list, description="Technology names in first-seen order"
    )

    @field_validator("tech_stack")
    @classmethod
    def deduplicate_tech_stack(cls, v: List[str]) -> List[str]:
        """Drop repeated entries while keeping first-seen order."""
        return list(dict.fromkeys(v))


class FormattedDescription(BaseModel):
    """Storage-ready result of formatting one raw description.

    ``raw_description`` is None when the input was already clean and was
    stored as-is, so no audit copy is needed.
    """

    formatted_text: str = Field(..., description="Description to store (markdown or original)")
    raw_description: Optional[str] = Field(
        None, description="Untouched original, kept only when formatting changed it"
    )
    metadata: DescriptionMetadata = Field(default_factory=DescriptionMetadata)
    sections: Dict[str, str] = Field(
        default_factory=dict, description="Rendered body text keyed by section role"
    )
    changed: bool = Field(False, description="True if formatting produced new text")


class DocumentRecord(BaseModel):
    """A stored job description as handled by the maintenance operations."""

    id: str = Field(..., description="Storage identifier")
    source: Optional[str] = Field(None, description="Originating feed or crawler")
    title: Optional[str] = Field(None, description="Job title, for reports")
    company: Optional[str] = Field(None, description="Company name, for reports")
    description: Optional[str] = Field(None, description="Current best text (markdown)")
    raw_description: Optional[str] = Field(
        None, description="Original text; null means no transformation was ever required"
    )
    updated_at: Optional[datetime] = Field(None, description="Last modification (UTC)")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Strip the identifier and reject blanks."""
        if not v or not v.strip():
            raise ValueError("id cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("source")
    @classmethod
    def normalize_source(cls, v: Optional[str]) -> Optional[str]:
        """Lowercase the source label so filters match regardless of case."""
        if v is None:
            return None
        stripped = v.strip().lower()
        return stripped if stripped else None

    @field_validator("updated_at")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Ensure datetime is timezone-aware and in UTC."""
        if v is None:
            return None
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @property
    def label(self) -> str:
        """Human-readable label used in report lines."""
        parts = [p for p in (self.title, self.company) if p]
        return " @ ".join(parts) if parts else self.id

    model_config = {"json_schema_extra": {"example": {
        "id": "job-4821",
        "source": "greenhouse",
        "title": "Senior Rust Engineer",
        "company": "Example Corp",
        "description": "<p>We are looking for a <b>Rust</b> engineer.</p>",
        "raw_description": None,
        "updated_at": "2026-03-01T12:00:00Z",
    }}}
