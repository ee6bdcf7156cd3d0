"""Custom exceptions for the profile context."""

from typing import Any, Optional


class InvalidResumeDataError(ValueError):
    """
    Exception raised when input data is not shaped like a resume.

    Partial data is fine (missing sections are simply not rendered); this is
    raised only when the structure itself is wrong, e.g. the document is not a
    mapping or a section that must be a list is a string.

    Attributes:
        message: Error description
        field: Name of the offending field (None for the document itself)
        value: The value that failed to parse
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value

        parts = [message]

        if field:
            parts.append(f"Field: {field}")

        if value is not None:
            snippet = repr(value)
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"Actual value: {snippet}")

        super().__init__("\n".join(parts))
