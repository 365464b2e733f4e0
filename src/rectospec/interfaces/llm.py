"""
Generation Provider Interface - Contract for LLM provider clients.

Every provider (Google Gemini, Anthropic Claude, ...) implements the same two
operations, so the gateway never needs to know which one it is talking to.

Example:
    >>> from rectospec.llm import GoogleProvider
    >>> async with GoogleProvider(api_key="...") as provider:
    ...     response = await provider.generate_text(GenerationRequest(prompt="Hello"))
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class GenerationRequest:
    """
    One call to a provider.

    Attributes:
        prompt: User prompt text
        system: Optional system preamble
        model: Model to use (defaults to the provider's model)
        temperature: Sampling temperature
        max_tokens: Maximum tokens in the response
        schema: JSON schema the response must follow (structured calls only)
        schema_name: Name given to the schema where the API needs one
    """
    prompt: str
    system: Optional[str] = None
    model: Optional[str] = None
    temperature: float = 0.3
    max_tokens: Optional[int] = 4000
    schema: Optional[Dict[str, Any]] = None
    schema_name: str = "result"


@dataclass
class Usage:
    """
    Token usage reported by the provider.

    Attributes:
        prompt_tokens: Number of tokens in the prompt
        completion_tokens: Number of tokens in the completion
        total_tokens: Total tokens used
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass
class GenerationResponse:
    """
    Result of a provider call.

    Attributes:
        text: Text content of the response
        model: The model that generated the response
        usage: Token usage information
        data: Decoded object for structured calls, None otherwise
        finish_reason: Why generation stopped, as reported by the provider
        raw_response: The decoded response body
    """
    text: str
    model: str
    usage: Usage
    data: Optional[Any] = None
    finish_reason: Optional[str] = None
    raw_response: Any = None


class IGenerationProvider(ABC):
    """
    Abstract interface for generation providers.

    Implementations handle authentication, request formatting and response
    parsing for one remote API. They raise whatever their transport raises;
    wrapping into GenerationError is the gateway's job.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Get the provider identifier.

        Returns:
            Provider name (e.g., 'google', 'anthropic')
        """
        ...

    @property
    @abstractmethod
    def default_model(self) -> str:
        """
        Get the model used when none is configured.

        Returns:
            Default model name
        """
        ...

    @abstractmethod
    async def generate_text(self, request: GenerationRequest) -> GenerationResponse:
        """
        Generate free text for a prompt.

        Args:
            request: Prompt, system preamble and sampling options

        Returns:
            The provider's response
        """
        ...

    @abstractmethod
    async def generate_structured(self, request: GenerationRequest) -> GenerationResponse:
        """
        Generate a JSON object following ``request.schema``.

        Args:
            request: Prompt, schema and sampling options

        Returns:
            Response whose ``data`` holds the decoded object
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
        ...
