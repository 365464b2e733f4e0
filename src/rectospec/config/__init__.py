"""
Configuration module - Persisted and runtime settings.

Usage:
    from rectospec.config import ConfigStore, CredentialResolver

    store = ConfigStore()
    config = store.load()                      # local > global > defaults
    store.update({"language": "en"})           # deep-merged, saved locally
    api_key = CredentialResolver(store).resolve(config.llm.provider)

Files:
    ./.rectospec/config.json    (local scope)
    ~/.rectospec/config.json    (global scope)

Environment Variables:
    GOOGLE_GENERATIVE_AI_API_KEY=...
    ANTHROPIC_API_KEY=...
    RECTOSPEC__LLM__TIMEOUT=60
    RECTOSPEC__LOGGING__LEVEL=DEBUG
"""

from rectospec.config.settings import (
    PersistedConfig,
    LLMConfig,
    OutputConfig,
    GenerationConfig,
    RuntimeSettings,
    GenerationSettings,
    LoggingSettings,
    ProviderName,
    Language,
    ConfigScope,
    SUPPORTED_PROVIDERS,
    SUPPORTED_LANGUAGES,
    DEFAULT_PROVIDER,
    DEFAULT_LANGUAGE,
    PROVIDER_ENV_VARS,
    PROVIDER_KEY_URLS,
)
from rectospec.config.store import ConfigStore, deep_merge, normalize_document
from rectospec.config.credentials import (
    CredentialResolver,
    env_var_for,
    promote_credential_to_environment,
)

__all__ = [
    "PersistedConfig",
    "LLMConfig",
    "OutputConfig",
    "GenerationConfig",
    "RuntimeSettings",
    "GenerationSettings",
    "LoggingSettings",
    "ProviderName",
    "Language",
    "ConfigScope",
    "SUPPORTED_PROVIDERS",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_PROVIDER",
    "DEFAULT_LANGUAGE",
    "PROVIDER_ENV_VARS",
    "PROVIDER_KEY_URLS",
    "ConfigStore",
    "deep_merge",
    "normalize_document",
    "CredentialResolver",
    "env_var_for",
    "promote_credential_to_environment",
]
