"""
RecToSpec - Chrome Recorder exports to Gherkin features to Playwright tests.

A recording is normalized into a list of plain-language actions, turned into
a Gherkin feature by an LLM, and the feature is compiled into Playwright
test code (page object, spec and test data).

Example:
    >>> from rectospec import ConfigStore, GenerationGateway, normalize
    >>> from rectospec.pipeline import generate_gherkin
    >>> recording = normalize(raw_json)
    >>> gherkin = await generate_gherkin(recording, options, GenerationGateway(ConfigStore()))
"""

__version__ = "0.1.0"

# Public API exports
from rectospec.config import ConfigStore, CredentialResolver, PersistedConfig
from rectospec.exceptions import (
    RecToSpecError,
    ValidationError,
    ConfigError,
    GenerationError,
    FilesystemError,
)
from rectospec.llm import GenerationGateway
from rectospec.recording import NormalizedRecording, normalize

__all__ = [
    "ConfigStore",
    "CredentialResolver",
    "PersistedConfig",
    "RecToSpecError",
    "ValidationError",
    "ConfigError",
    "GenerationError",
    "FilesystemError",
    "GenerationGateway",
    "NormalizedRecording",
    "normalize",
    "__version__",
]
