"""
Provider Registry - Name to class mapping for generation providers.

Adding a provider means writing one IGenerationProvider class and
decorating it; nothing else changes.

Example:
    >>> @register_provider("google")
    ... class GoogleProvider(BaseGenerationProvider):
    ...     ...
    >>> get_provider_class("google")
    <class 'GoogleProvider'>
"""

from typing import Callable, Dict, List, Type

from rectospec.exceptions import ConfigError
from rectospec.interfaces.llm import IGenerationProvider

_providers: Dict[str, Type[IGenerationProvider]] = {}


def register_provider(name: str) -> Callable[[Type[IGenerationProvider]], Type[IGenerationProvider]]:
    """
    Decorator to register a provider implementation.

    Args:
        name: Provider identifier used in configuration (e.g. 'google')

    Returns:
        Decorator function
    """
    def decorator(provider_class: Type[IGenerationProvider]) -> Type[IGenerationProvider]:
        if name in _providers:
            raise ValueError(f"LLM provider '{name}' is already registered")
        _providers[name] = provider_class
        return provider_class
    return decorator


def get_provider_class(name: str) -> Type[IGenerationProvider]:
    """
    Get a registered provider class.

    Raises:
        ConfigError: If no provider is registered under ``name``
    """
    try:
        return _providers[name]
    except KeyError:
        raise ConfigError(
            f"Unsupported LLM provider: '{name}'. Available providers: {list_providers()}"
        ) from None


def list_providers() -> List[str]:
    """List registered provider names."""
    return sorted(_providers)
