"""
Generation Gateway - Provider-agnostic access to text and structured generation.

For every call the gateway:

1. picks the provider (argument, else the persisted configuration),
2. resolves its API key through CredentialResolver,
3. opens a provider client, makes exactly one request, closes the client,
4. turns any failure of the remote call into GenerationError.

Configuration problems (unknown provider, missing key) raise ConfigError
before any network activity. There are no retries.
"""

import logging
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from rectospec.config.credentials import CredentialResolver
from rectospec.config.settings import RuntimeSettings
from rectospec.config.store import ConfigStore
from rectospec.exceptions import GenerationError
from rectospec.interfaces.llm import GenerationRequest, GenerationResponse
from rectospec.llm.base import BaseGenerationProvider
from rectospec.llm.registry import get_provider_class

# Register the built-in providers
import rectospec.llm.google_provider  # noqa: F401
import rectospec.llm.anthropic_provider  # noqa: F401

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

REDACTED = "[REDACTED]"


def redact(message: str, secret: Optional[str]) -> str:
    """Remove every occurrence of ``secret`` from ``message``."""
    if secret:
        return message.replace(secret, REDACTED)
    return message


def describe_failure(error: Exception) -> str:
    """Short human-readable cause for a failed provider call."""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        if status == 429:
            return "rate limit exceeded (HTTP 429)"
        if status in (401, 403):
            return f"authentication failed (HTTP {status}); check your API key"
        return f"HTTP {status} from provider"
    if isinstance(error, httpx.TimeoutException):
        return "request timed out"
    if isinstance(error, httpx.HTTPError):
        return f"network error: {error}"
    return str(error) or type(error).__name__


class GenerationGateway:
    """
    Facade over the registered generation providers.

    Example:
        >>> store = ConfigStore()
        >>> gateway = GenerationGateway(store)
        >>> text = await gateway.generate_text("Write a haiku", system="You are a poet.")
        >>> code = await gateway.generate_structured(prompt, GeneratedCode)
    """

    def __init__(
        self,
        store: ConfigStore,
        resolver: Optional[CredentialResolver] = None,
        settings: Optional[RuntimeSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the gateway.

        Args:
            store: Configuration store (provider, model and stored keys)
            resolver: Credential resolver (defaults to one over ``store``)
            settings: Runtime settings (endpoints, timeout, sampling)
            transport: Optional httpx transport handed to provider clients
        """
        self._store = store
        self._resolver = resolver or CredentialResolver(store)
        self._settings = settings or RuntimeSettings()
        self._transport = transport

    async def generate_text(
        self,
        prompt: str,
        system: Optional[str] = None,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate free text.

        Returns:
            The response text, untrimmed

        Raises:
            ConfigError: Unsupported provider or no API key
            GenerationError: The remote call failed
        """
        request = self._build_request(prompt, system, model, temperature, max_tokens)
        response = await self._call(provider, request, structured=False)
        return response.text

    async def generate_structured(
        self,
        prompt: str,
        schema: Type[T],
        *,
        system: Optional[str] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> T:
        """
        Generate an object conforming to a Pydantic model.

        Returns:
            A validated ``schema`` instance

        Raises:
            ConfigError: Unsupported provider or no API key
            GenerationError: The remote call failed or its result does not
                match ``schema``
        """
        request = self._build_request(prompt, system, model, temperature, max_tokens)
        request.schema = schema.model_json_schema(by_alias=True)
        request.schema_name = schema.__name__

        provider_id = provider or self._store.load().llm.provider
        response = await self._call(provider_id, request, structured=True)

        try:
            return schema.model_validate(response.data)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            )
            raise GenerationError(
                f"Response does not match {schema.__name__}: {problems}", provider_id
            ) from e

    def _build_request(
        self,
        prompt: str,
        system: Optional[str],
        model: Optional[str],
        temperature: Optional[float],
        max_tokens: Optional[int],
    ) -> GenerationRequest:
        defaults = self._settings.llm
        return GenerationRequest(
            prompt=prompt,
            system=system,
            model=model,
            temperature=defaults.temperature if temperature is None else temperature,
            max_tokens=max_tokens or defaults.max_tokens,
        )

    def _create_provider(self, provider_id: str, api_key: str, model: Optional[str]) -> BaseGenerationProvider:
        provider_class = get_provider_class(provider_id)
        return provider_class(
            api_key=api_key,
            model=model,
            base_url=getattr(self._settings.llm, f"{provider_id}_base_url", None),
            timeout=self._settings.llm.timeout,
            transport=self._transport,
        )

    async def _call(
        self,
        provider: Optional[str],
        request: GenerationRequest,
        structured: bool,
    ) -> GenerationResponse:
        config = self._store.load()
        provider_id = provider or config.llm.provider

        # Both raise ConfigError before anything touches the network
        get_provider_class(provider_id)
        api_key = self._resolver.resolve(provider_id)

        if request.model is None and config.llm.provider == provider_id:
            request.model = config.llm.model

        kind = "structured" if structured else "text"
        try:
            client = self._create_provider(provider_id, api_key, request.model)
            async with client:
                logger.info(f"Requesting {kind} generation from {provider_id} ({client.model})")
                if structured:
                    response = await client.generate_structured(request)
                else:
                    response = await client.generate_text(request)
        except Exception as e:
            cause = redact(describe_failure(e), api_key)
            logger.error(f"{provider_id} {kind} generation failed: {cause}")
            raise GenerationError(f"Failed to generate {kind} with {provider_id}: {cause}", provider_id) from e

        logger.debug(f"{provider_id} usage: {response.usage.to_dict()}")
        return response
