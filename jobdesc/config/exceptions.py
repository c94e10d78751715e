"""Configuration errors."""

from typing import List, Optional

from jobdesc.errors import JobDescError


class ConfigurationError(JobDescError):
    """Raised when configuration cannot be loaded or is invalid.

    Carries the individual validation errors and suggestions for fixing
    them; ``str()`` renders all of it for the console.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        super().__init__(self.render())

    def render(self) -> str:
        lines = [self.message]
        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {number}. {error}" for number, error in enumerate(self.errors, 1))
        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {suggestion}" for suggestion in self.suggestions)
        return "\n".join(lines)
