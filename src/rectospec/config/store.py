"""
Config Store - Load, merge and persist the layered configuration.

Two independent files can hold a PersistedConfig:

* local scope: ``./.rectospec/config.json`` (relative to the working directory)
* global scope: ``~/.rectospec/config.json``

When both exist the local file wins. When neither exists the built-in
defaults are used. Files are written with owner-only permissions because
they may hold API keys.

There is no locking: two concurrent ``update()`` calls on the same scope
race and the last writer wins.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from rectospec.config.settings import ConfigScope, PersistedConfig
from rectospec.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".rectospec"
CONFIG_FILE_NAME = "config.json"
CONFIG_FILE_MODE = 0o600


def deep_merge(base: Mapping[str, Any], updates: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge ``updates`` into a copy of ``base``.

    Nested mappings merge key by key; any other value in ``updates``
    replaces the one in ``base``. Neither argument is modified.

    Example:
        >>> deep_merge({"llm": {"provider": "google", "apiKeys": {"google": "a"}}},
        ...            {"llm": {"apiKeys": {"anthropic": "b"}}})
        {'llm': {'provider': 'google', 'apiKeys': {'google': 'a', 'anthropic': 'b'}}}
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def normalize_document(
    model: Type[BaseModel],
    partial: Mapping[str, Any],
    prefix: str = "",
) -> Dict[str, Any]:
    """
    Rewrite a partial document to the on-disk key names of ``model``.

    Keys may be given by alias (``apiKeys``) or by field name
    (``api_keys``). Nested sections are rewritten recursively; mapping
    fields such as ``apiKeys`` keep their own keys and are checked later by
    validation.

    Raises:
        ConfigError: If a key names no field of its section, or a field
            is given under both names
    """
    keys: Dict[str, Tuple[str, Any]] = {}
    for name, info in model.model_fields.items():
        alias = info.alias or name
        keys[name] = keys[alias] = (alias, info.annotation)

    normalized: Dict[str, Any] = {}
    for key, value in partial.items():
        if key not in keys:
            raise ConfigError(f"Unknown configuration key: '{prefix}{key}'")
        alias, annotation = keys[key]
        if isinstance(value, Mapping) and isinstance(annotation, type) and issubclass(annotation, BaseModel):
            value = normalize_document(annotation, value, prefix=f"{prefix}{alias}.")
        if alias in normalized:
            raise ConfigError(f"Configuration key given twice: '{prefix}{alias}'")
        normalized[alias] = value
    return normalized


class ConfigStore:
    """
    Reads and writes the persisted configuration.

    Construct one per process entry point and pass it to whatever needs
    configuration.

    Example:
        >>> store = ConfigStore()
        >>> config = store.load()
        >>> store.update({"language": "en"}, scope="global")
    """

    def __init__(
        self,
        local_dir: Optional[Union[str, Path]] = None,
        global_dir: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize the store.

        Args:
            local_dir: Project config directory (default ./.rectospec)
            global_dir: User config directory (default ~/.rectospec)
        """
        self.local_dir = Path(local_dir) if local_dir else Path(CONFIG_DIR_NAME)
        self.global_dir = Path(global_dir) if global_dir else Path.home() / CONFIG_DIR_NAME

    @property
    def local_path(self) -> Path:
        return self.local_dir / CONFIG_FILE_NAME

    @property
    def global_path(self) -> Path:
        return self.global_dir / CONFIG_FILE_NAME

    def get_config_path_by_scope(self, scope: ConfigScope) -> Path:
        """Config file path for a scope, whether or not it exists."""
        if scope == "local":
            return self.local_path
        if scope == "global":
            return self.global_path
        raise ConfigError(f"Unknown configuration scope: '{scope}'. Use 'local' or 'global'")

    def resolve_active_path(self) -> Optional[Path]:
        """
        Find the configuration file in effect.

        Returns:
            The local file if present, else the global file if present,
            else None (nothing persisted yet)
        """
        for path in (self.local_path, self.global_path):
            if path.is_file():
                return path
        return None

    def get_config_path(self) -> Optional[Path]:
        """Alias of resolve_active_path()."""
        return self.resolve_active_path()

    def exists(self) -> bool:
        """Check whether any configuration file is in effect."""
        return self.resolve_active_path() is not None

    def load(self) -> PersistedConfig:
        """
        Load the configuration in effect.

        Returns:
            The persisted configuration, or the defaults when nothing is
            persisted

        Raises:
            ConfigError: If the file cannot be read, is not JSON or does
                not match the schema
        """
        path = self.resolve_active_path()
        if path is None:
            logger.debug("No configuration file found, using defaults")
            return PersistedConfig()

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration from {path}: {e.strerror or e}") from e

        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            # The decoder message carries a position, never the offending text
            raise ConfigError(f"Failed to load configuration from {path}: invalid JSON ({e.msg} at line {e.lineno})") from e

        config = self._validate(document, source=str(path))
        logger.debug(f"Loaded configuration from {path}")
        return config

    def save(self, config: PersistedConfig, scope: ConfigScope = "local") -> Path:
        """
        Write a configuration to a scope.

        Args:
            config: Configuration to save
            scope: 'local' or 'global'

        Returns:
            Path of the written file

        Raises:
            ConfigError: If the file cannot be written
        """
        path = self.get_config_path_by_scope(scope)
        content = json.dumps(config.to_document(), indent=2, ensure_ascii=False)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content + "\n")
            # O_CREAT mode does not apply to files that already existed
            os.chmod(path, CONFIG_FILE_MODE)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e.strerror or e}") from e

        logger.debug(f"Saved {scope} configuration to {path}")
        return path

    def update(self, partial: Mapping[str, Any], scope: ConfigScope = "local") -> PersistedConfig:
        """
        Merge a partial configuration into the one in effect and save it.

        ``partial`` uses the document shape, e.g.
        ``{"llm": {"apiKeys": {"google": "..."}}}``; field names
        (``api_keys``) are accepted in place of the on-disk names. Fields it
        leaves out keep their current values at every nesting level.

        Args:
            partial: Fields to change
            scope: Scope to write the merged result to

        Returns:
            The merged configuration

        Raises:
            ConfigError: If ``partial`` has an unknown key, or loading,
                validating or saving fails
        """
        updates = normalize_document(PersistedConfig, partial)
        current = self.load()
        merged = deep_merge(current.to_document(), updates)
        config = self._validate(merged, source="configuration update")
        self.save(config, scope)
        return config

    def save_api_key(self, provider: str, api_key: str, scope: ConfigScope = "local") -> PersistedConfig:
        """Store one provider's API key without touching the others."""
        return self.update({"llm": {"apiKeys": {provider: api_key}}}, scope)

    def get_api_key(self, provider: str) -> Optional[str]:
        """
        Get a provider's API key.

        Same precedence as CredentialResolver (environment variable, then
        the configuration in effect), but a missing key is None and nothing
        is written to the environment.
        """
        # credentials imports this module
        from rectospec.config.credentials import CredentialResolver

        return CredentialResolver(self).find(provider)

    get_credential = get_api_key

    @staticmethod
    def _validate(document: Any, source: str) -> PersistedConfig:
        try:
            return PersistedConfig.model_validate(document)
        except PydanticValidationError as e:
            # Field paths and messages only; input values may be secrets
            problems = [
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigError(
                f"Invalid configuration file format ({source}):\n"
                + "\n".join(f"  - {p}" for p in problems),
                details={"errors": problems},
            ) from e
