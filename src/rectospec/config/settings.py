"""
Settings - Pydantic models for type-safe configuration.

Two kinds of configuration live here:

* PersistedConfig: the JSON document written by ``rectospec init`` to
  ``.rectospec/config.json`` (project) or ``~/.rectospec/config.json``
  (user). Field names are camelCase on disk.
* RuntimeSettings: process-level knobs read from ``RECTOSPEC__*``
  environment variables (endpoints, timeouts, sampling, logging).

Example:
    >>> config = PersistedConfig()
    >>> config.llm.provider
    'google'
    >>> config.to_document()["output"]
    {'framework': 'playwright', 'typescript': True}
"""

from typing import Any, Dict, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict


ProviderName = Literal["google", "anthropic"]
Language = Literal["ja", "en"]
ConfigScope = Literal["local", "global"]

SUPPORTED_PROVIDERS = get_args(ProviderName)
SUPPORTED_LANGUAGES = get_args(Language)
DEFAULT_PROVIDER: ProviderName = SUPPORTED_PROVIDERS[0]
DEFAULT_LANGUAGE: Language = "ja"

# Environment variable read for each provider's API key
PROVIDER_ENV_VARS: Dict[str, str] = {
    "google": "GOOGLE_GENERATIVE_AI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

# Where to obtain an API key
PROVIDER_KEY_URLS: Dict[str, str] = {
    "google": "https://aistudio.google.com/app/apikey",
    "anthropic": "https://console.anthropic.com/settings/keys",
}


class _DocumentModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LLMConfig(_DocumentModel):
    """
    LLM provider selection.

    Attributes:
        provider: Provider used when none is given on the command line
        model: Model override (provider default when unset)
        api_keys: Stored credentials keyed by provider
    """
    provider: ProviderName = DEFAULT_PROVIDER
    model: Optional[str] = None
    api_keys: Dict[ProviderName, Optional[str]] = Field(default_factory=dict)


class OutputConfig(_DocumentModel):
    """Generated test code settings."""
    framework: Literal["playwright"] = "playwright"
    typescript: StrictBool = True


class GenerationConfig(_DocumentModel):
    """Gherkin generation settings."""
    include_edge_cases: StrictBool = True


class PersistedConfig(_DocumentModel):
    """
    Root of the persisted configuration document.

    The defaults are the built-in configuration used when no file exists.
    """
    llm: LLMConfig = Field(default_factory=LLMConfig)
    language: Language = DEFAULT_LANGUAGE
    output: OutputConfig = Field(default_factory=OutputConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    def to_document(self) -> Dict[str, Any]:
        """Dump in the on-disk (camelCase) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def get_api_key(self, provider: str) -> Optional[str]:
        """Stored credential for a provider, if any."""
        return self.llm.api_keys.get(provider) or None

    def masked_document(self) -> Dict[str, Any]:
        """On-disk shape with every stored credential replaced by a mask."""
        document = self.to_document()
        keys = document.get("llm", {}).get("apiKeys", {})
        for name in keys:
            keys[name] = "********"
        return document


# =============================================================================
# RUNTIME SETTINGS
# =============================================================================

class GenerationSettings(BaseModel):
    """
    Remote generation call settings.

    Attributes:
        google_base_url: Gemini REST endpoint
        anthropic_base_url: Anthropic Messages API endpoint
        temperature: Default sampling temperature
        max_tokens: Default maximum output tokens
        timeout: Request timeout in seconds
    """
    google_base_url: str = "https://generativelanguage.googleapis.com"
    anthropic_base_url: str = "https://api.anthropic.com"
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4000, ge=1, le=128000)
    timeout: float = Field(default=120.0, ge=5, le=600)


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        file: Log file path (None for console only)
        json_format: Use JSON format for the log file
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = False


class RuntimeSettings(BaseSettings):
    """
    Process-level settings loaded from the environment.

    Example:
        RECTOSPEC__LLM__TIMEOUT=30
        RECTOSPEC__LOGGING__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="RECTOSPEC__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    llm: GenerationSettings = Field(default_factory=GenerationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
