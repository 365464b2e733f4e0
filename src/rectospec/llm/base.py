"""
Base Generation Provider - Common functionality for HTTP-based providers.
"""

import copy
import logging
from typing import Any, Dict, Optional

import httpx

from rectospec.interfaces.llm import IGenerationProvider

logger = logging.getLogger(__name__)

# JSON-schema keywords that the provider schema dialects do not accept
_UNSUPPORTED_SCHEMA_KEYS = {"title", "$defs", "definitions", "additionalProperties", "default"}


class BaseGenerationProvider(IGenerationProvider):
    """
    Base class for providers talking to a JSON-over-HTTP API.

    Owns an ``httpx.AsyncClient`` for the provider's lifetime. Use the
    provider as an async context manager so the client is closed.
    """

    DEFAULT_BASE_URL: str = ""
    DEFAULT_MODEL: str = ""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: API key sent with every request
            model: Model to use (falls back to default_model)
            base_url: Custom API endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._model = model
        self._base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._auth_headers(api_key),
            timeout=timeout,
            transport=transport,
        )

    @property
    def default_model(self) -> str:
        return self.DEFAULT_MODEL

    @property
    def model(self) -> str:
        """Model used when a request does not name one."""
        return self._model or self.default_model

    def _auth_headers(self, api_key: str) -> Dict[str, str]:
        """Headers carrying the API key. Override per provider."""
        return {"Authorization": f"Bearer {api_key}"}

    async def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON body and return the decoded JSON response.

        Raises:
            httpx.HTTPStatusError: For non-2xx responses
            httpx.HTTPError: For transport failures
            ValueError: If the body is not JSON
        """
        response = await self._client.post(path, json=body)
        if response.is_error:
            logger.error(f"{self.name} API error: HTTP {response.status_code}")
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "BaseGenerationProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def inline_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Resolve local ``$ref`` pointers and drop keywords providers reject.

    Pydantic emits shared sub-models under ``$defs``; provider APIs want a
    single self-contained tree.

    Example:
        >>> inline_schema({"$defs": {"F": {"type": "string", "title": "F"}},
        ...                "type": "object", "properties": {"f": {"$ref": "#/$defs/F"}}})
        {'type': 'object', 'properties': {'f': {'type': 'string'}}}
    """
    definitions = schema.get("$defs", {})

    def resolve(node: Any) -> Any:
        if isinstance(node, list):
            return [resolve(item) for item in node]
        if not isinstance(node, dict):
            return node
        if "$ref" in node:
            name = node["$ref"].rsplit("/", 1)[-1]
            return resolve(copy.deepcopy(definitions[name]))

        resolved: Dict[str, Any] = {}
        for key, value in node.items():
            if key in _UNSUPPORTED_SCHEMA_KEYS:
                continue
            if key == "properties":
                # Keys here are property names, not keywords
                resolved[key] = {prop: resolve(sub) for prop, sub in value.items()}
            else:
                resolved[key] = resolve(value)
        return resolved

    return resolve(schema)
