"""Exceptions raised by the description processing core."""

from typing import Optional


class JobDescError(Exception):
    """Base exception for description processing errors."""

    pass


class MalformedInputError(JobDescError):
    """Raised when input cannot be treated as text.

    The sanitizer itself is total over strings, so this is reserved for
    non-text payloads: wrong types, undecodable bytes, or binary content
    with embedded NUL/control bytes.

    Attributes:
        reason: Short machine-readable reason code
    """

    def __init__(self, message: str, reason: str = "malformed"):
        super().__init__(message)
        self.reason = reason


class RuleApplicationError(JobDescError):
    """Raised when a humanizer rewrite rule cannot be applied safely.

    Attributes:
        rule_id: Stable identifier of the failing rule
        cause: Underlying exception, if any
    """

    def __init__(self, rule_id: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"Rule '{rule_id}' failed: {message}")
        self.rule_id = rule_id
        self.cause = cause
