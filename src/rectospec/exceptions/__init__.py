"""
Exceptions module - Custom exception hierarchy.

Every error raised by the core derives from RecToSpecError and carries a
stable ``code``:

    RecToSpecError      RECTOSPEC_ERROR
    ├── ValidationError VALIDATION_ERROR
    ├── ConfigError     CONFIG_ERROR
    ├── GenerationError GENERATION_ERROR
    └── FilesystemError FILESYSTEM_ERROR
"""

from rectospec.exceptions.base import (
    RecToSpecError,
    ConfigError,
    FilesystemError,
)
from rectospec.exceptions.recording import ValidationError
from rectospec.exceptions.llm import GenerationError

__all__ = [
    "RecToSpecError",
    "ValidationError",
    "ConfigError",
    "GenerationError",
    "FilesystemError",
]
