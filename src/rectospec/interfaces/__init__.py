"""
Interfaces module - Abstract contracts for pluggable components.
"""

from rectospec.interfaces.llm import (
    GenerationRequest,
    GenerationResponse,
    IGenerationProvider,
    Usage,
)

__all__ = [
    "GenerationRequest",
    "GenerationResponse",
    "IGenerationProvider",
    "Usage",
]
