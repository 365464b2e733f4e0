"""
Recording and schema validation exceptions.
"""

from typing import List, Optional

from rectospec.exceptions.base import RecToSpecError


class ValidationError(RecToSpecError):
    """
    Input does not match the expected shape.

    Raised for a malformed recording document or invalid generation
    options. Every violation is collected, not just the first one.

    Attributes:
        errors: One "path: reason" entry per violated field
    """

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message, {"errors": errors} if errors else None)
        self.errors = list(errors or [])
