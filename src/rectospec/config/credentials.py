"""
Credential Resolver - Find the API key for a provider.

Priority (highest first):
1. Environment variable (``GOOGLE_GENERATIVE_AI_API_KEY``, ``ANTHROPIC_API_KEY``;
   ``.env`` entries count once the CLI has loaded them)
2. Key stored in the persisted configuration

A key found only in the configuration is copied into the environment so that
code reading only environment variables sees it too. This copy goes one way
and ``promote_credential_to_environment`` is the only place that writes
``os.environ``.
"""

import logging
import os
from typing import Optional

from rectospec.config.settings import PROVIDER_ENV_VARS, PROVIDER_KEY_URLS
from rectospec.config.store import ConfigStore
from rectospec.exceptions import ConfigError

logger = logging.getLogger(__name__)


def env_var_for(provider: str) -> str:
    """
    Name of the environment variable holding a provider's API key.

    Raises:
        ConfigError: If the provider is not supported
    """
    try:
        return PROVIDER_ENV_VARS[provider]
    except KeyError:
        supported = ", ".join(PROVIDER_ENV_VARS)
        raise ConfigError(
            f"Unsupported LLM provider: '{provider}'. Supported providers: {supported}"
        ) from None


def promote_credential_to_environment(provider: str, secret: str) -> None:
    """Expose a stored API key through the provider's environment variable."""
    os.environ[env_var_for(provider)] = secret


class CredentialResolver:
    """
    Resolves provider API keys from the environment and a ConfigStore.

    Example:
        >>> resolver = CredentialResolver(ConfigStore())
        >>> api_key = resolver.resolve("google")
    """

    def __init__(self, store: ConfigStore):
        self._store = store

    def find(self, provider: str) -> Optional[str]:
        """
        Look up an API key without failing or promoting it.

        Returns:
            The key, or None if neither source has one
        """
        env_value = os.environ.get(env_var_for(provider))
        if env_value:
            return env_value
        return self._store.load().get_api_key(provider)

    def resolve(self, provider: str) -> str:
        """
        Get the API key for a provider.

        Returns:
            The API key

        Raises:
            ConfigError: If the provider is unsupported or no key is set
                anywhere. The message explains how to set one.
        """
        env_var = env_var_for(provider)

        env_value = os.environ.get(env_var)
        if env_value:
            logger.debug(f"Using {provider} API key from {env_var}")
            return env_value

        stored = self._store.load().get_api_key(provider)
        if stored:
            logger.debug(f"Using {provider} API key from configuration file")
            promote_credential_to_environment(provider, stored)
            return stored

        raise ConfigError(missing_credential_message(provider))


def missing_credential_message(provider: str) -> str:
    """Remediation text shown when no API key can be found."""
    env_var = env_var_for(provider)
    return (
        "API key not found. Please set it using one of the following methods:\n"
        f"1. Environment variable: export {env_var}=your-key\n"
        f"2. .env file: {env_var}=your-key\n"
        "3. Setup command: rectospec init\n"
        f"\nGet API key: {PROVIDER_KEY_URLS[provider]}"
    )
