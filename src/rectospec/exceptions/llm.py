"""
LLM generation exceptions.
"""

from rectospec.exceptions.base import RecToSpecError


class GenerationError(RecToSpecError):
    """
    The remote generation call failed.

    Raised for network failures, HTTP errors (rate limits included) and
    response bodies that cannot be parsed or validated.

    Attributes:
        provider: Identifier of the provider that was called
    """

    code = "GENERATION_ERROR"

    def __init__(self, message: str, provider: str):
        super().__init__(message, {"provider": provider})
        self.provider = provider
