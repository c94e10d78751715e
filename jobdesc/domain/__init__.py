"""Domain models for job description processing."""

from .models import DescriptionMetadata, DocumentRecord, FormattedDescription, SectionRole

__all__ = ["DescriptionMetadata", "DocumentRecord", "FormattedDescription", "SectionRole"]
